import time
from typing import Callable, Optional


def _perf_ms() -> float:
    return time.perf_counter() * 1000.0


class FrameClock:
    """
    Turns wall-clock frame timestamps into a bounded, normalized step.

    Attributes:
        target_fps (float): Rate that defines one reference frame.
        max_delta_ms (float): Upper bound on a single step, absorbs stalls.
        previous_ms (float): Timestamp of the last tick, None before the first.
        delta_ms (float): Clamped milliseconds elapsed during the last tick.
    """

    def __init__(self, target_fps: float = 60, max_delta_ms: float = 100,
                 time_source: Optional[Callable[[], float]] = None):
        self.target_fps = target_fps
        self.max_delta_ms = max_delta_ms
        self.time_source = time_source or _perf_ms
        self.previous_ms: Optional[float] = None
        self.delta_ms = 0.0

    @property
    def frame_ms(self) -> float:
        return 1000.0 / self.target_fps

    @property
    def normalized_delta(self) -> float:
        """Last step measured in reference frames; 1.0 is exactly one frame."""
        return self.delta_ms / self.frame_ms

    def tick(self, now_ms: Optional[float] = None) -> float:
        """
        Advance the clock to ``now_ms`` and return the normalized delta.

        The first tick after construction yields 0 since there is nothing to
        measure against. The previous timestamp is stored on every call.
        """
        now = self.time_source() if now_ms is None else now_ms
        if self.previous_ms is None:
            raw = 0.0
        else:
            raw = max(0.0, now - self.previous_ms)
        self.previous_ms = now
        self.delta_ms = min(raw, self.max_delta_ms)
        return self.normalized_delta

    def resync(self, now_ms: Optional[float] = None) -> None:
        """Forget elapsed time so the next tick measures from ``now_ms``."""
        self.previous_ms = self.time_source() if now_ms is None else now_ms
        self.delta_ms = 0.0
