class JumpDebouncer:
    """Suppresses jump inputs that arrive within ``cooldown_ms`` of the last accepted one."""

    def __init__(self, cooldown_ms: float = 100):
        self.cooldown_ms = cooldown_ms
        self.last_jump_ms = None

    def allow(self, now_ms: float) -> bool:
        if self.last_jump_ms is not None and now_ms - self.last_jump_ms < self.cooldown_ms:
            return False
        self.last_jump_ms = now_ms
        return True
