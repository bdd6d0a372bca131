import logging
from dataclasses import dataclass
from typing import List

import numpy as np

PARTICLE_GRAVITY = 0.3
PARTICLE_DECAY = 0.02  # life lost per reference frame

JUMP_COLOR = "#FFFFFF"
SCORE_COLOR = "#FFD700"
COLLISION_COLOR = "#FF0000"
IMPACT_COLOR = "#DEB887"


@dataclass(frozen=True)
class Particle:
    x: float
    y: float
    vx: float
    vy: float
    gravity: float
    life: float
    size: float
    color: str


class ParticleBuffer:
    """
    Capped pool of short-lived visual particles stored as parallel numpy columns.

    Rows are kept in emission order, oldest first, so trimming the buffer
    keeps the tail.
    """

    def __init__(self, rng: np.random.Generator, max_count: int = 200, keep_count: int = 100):
        self.rng = rng
        self.max_count = max_count
        self.keep_count = keep_count
        self.clear()

    def clear(self):
        self.x = np.zeros(0)
        self.y = np.zeros(0)
        self.vx = np.zeros(0)
        self.vy = np.zeros(0)
        self.gravity = np.zeros(0)
        self.life = np.zeros(0)
        self.size = np.zeros(0)
        self.color = np.zeros(0, dtype="<U7")

    def __len__(self):
        return len(self.life)

    def emit(self, x: float, y: float, color: str, count: int):
        """Adds ``count`` particles at (x, y) with random spread and size."""
        if count <= 0:
            return
        rng = self.rng
        vx = (rng.random(count) - 0.5) * 4
        vy = (rng.random(count) - 0.5) * 4 - 2
        size = rng.random(count) * 4 + 2
        self.x = np.concatenate([self.x, np.full(count, float(x))])
        self.y = np.concatenate([self.y, np.full(count, float(y))])
        self.vx = np.concatenate([self.vx, vx])
        self.vy = np.concatenate([self.vy, vy])
        self.gravity = np.concatenate([self.gravity, np.full(count, PARTICLE_GRAVITY)])
        self.life = np.concatenate([self.life, np.ones(count)])
        self.size = np.concatenate([self.size, size])
        self.color = np.concatenate([self.color, np.full(count, color, dtype="<U7")])

    def _keep(self, index):
        for name in ("x", "y", "vx", "vy", "gravity", "life", "size", "color"):
            setattr(self, name, getattr(self, name)[index])

    def enforce_cap(self):
        """Drops the oldest particles once the buffer grows past ``max_count``."""
        if len(self) > self.max_count:
            logging.debug(f"Particle cap hit ({len(self)}), keeping newest {self.keep_count}")
            self._keep(slice(len(self) - self.keep_count, None))

    def update(self, dt: float):
        """Enforces the cap, integrates every particle, then culls the dead ones."""
        self.enforce_cap()
        if not len(self):
            return
        self.vy = self.vy + self.gravity * dt
        self.x = self.x + self.vx * dt
        self.y = self.y + self.vy * dt
        self.life = self.life - PARTICLE_DECAY * dt
        self._keep(self.life > 0)

    def particles(self) -> List[Particle]:
        return [
            Particle(float(x), float(y), float(vx), float(vy), float(g), float(life), float(size), str(c))
            for x, y, vx, vy, g, life, size, c in zip(
                self.x, self.y, self.vx, self.vy, self.gravity, self.life, self.size, self.color
            )
        ]
