from enum import Enum
from typing import Tuple

from .config import GameConfig

WING_FRAMES = 3
WING_RATE = 0.2  # wing frames per reference frame


class BoundaryHit(Enum):
    NONE = "none"
    GROUND = "ground"
    CEILING = "ceiling"


class Bird:
    """
    The player-controlled bird.

    Attributes:
        x (float): Fixed horizontal position of the left edge.
        y (float): Vertical position of the top edge.
        width (int): Sprite width in pixels.
        height (int): Sprite height in pixels.
        velocity (float): Vertical speed in pixels per reference frame, down is positive.
        rotation (float): Smoothed tilt in degrees used for drawing.
        wing_frame (float): Cyclic wing animation phase in [0, 3).
    """

    def __init__(self, config: GameConfig):
        self.config = config
        self.x = config.bird.x
        self.width = config.bird.width
        self.height = config.bird.height
        self.reset()

    def reset(self):
        """Put the bird back in the middle of the playfield, at rest."""
        self.y = self.config.canvas.height / 2
        self.velocity = 0.0
        self.rotation = 0.0
        self.wing_frame = 0.0

    def jump(self):
        """Instantly applies the upward jump impulse, whatever the current speed."""
        self.velocity = self.config.bird.jump_strength

    def update(self, dt: float) -> BoundaryHit:
        """
        Integrates gravity, position, rotation and wing animation.

        Args:
            dt (float): Normalized delta, 1.0 is one reference frame.

        Returns:
            BoundaryHit: Which boundary, if any, the bird was clamped against.
        """
        cfg = self.config
        self.velocity += cfg.bird.gravity * dt
        self.velocity = min(self.velocity, cfg.bird.terminal_velocity)
        self.y += self.velocity * dt

        target = min(max(self.velocity * 4, -30), 90)
        easing = cfg.physics.rotation_easing
        if cfg.physics.rotation_easing_scaled:
            easing = 1 - (1 - easing) ** dt
        self.rotation += (target - self.rotation) * easing

        self.wing_frame = (self.wing_frame + WING_RATE * dt) % WING_FRAMES

        floor = cfg.ground_line
        if self.y + self.height >= floor:
            self.y = floor - self.height
            self.velocity = 0.0
            return BoundaryHit.GROUND
        if self.y < 0:
            self.y = 0.0
            self.velocity = 0.0
            return BoundaryHit.CEILING
        return BoundaryHit.NONE

    def hitbox(self) -> Tuple[float, float, float, float]:
        """Returns (left, top, right, bottom) shrunk by the hitbox padding."""
        pad = self.config.bird.hitbox_padding
        return (self.x + pad, self.y + pad,
                self.x + self.width - pad, self.y + self.height - pad)

    @property
    def center(self) -> Tuple[float, float]:
        return self.x + self.width / 2, self.y + self.height / 2
