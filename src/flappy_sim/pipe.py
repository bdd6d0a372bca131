import numpy as np

from .bird import Bird
from .config import GameConfig
from .difficulty import Difficulty


class Pipe:
    """
    Represents a pipe obstacle: a top column and a bottom column around a gap.

    Attributes:
        x (float): Horizontal position of the left edge.
        width (int): Column width.
        gap (float): Vertical opening, fixed at spawn time.
        top_height (float): Height of the top column.
        speed (float): Pixels per reference frame, fixed at spawn time.
        scored (bool): Latched once the bird has passed the pipe.
    """

    def __init__(self, x, width, gap, top_height, speed):
        self.x = x
        self.width = width
        self.gap = gap
        self.top_height = top_height
        self.speed = speed
        self.scored = False

    @classmethod
    def spawn(cls, config: GameConfig, difficulty: Difficulty, rng: np.random.Generator) -> "Pipe":
        """
        Create a pipe at the right edge of the playfield.

        Args:
            config (GameConfig): Game configuration.
            difficulty (Difficulty): Current gap and speed multiplier.
            rng (np.random.Generator): Source for the random top height.
        """
        gap = difficulty.gap
        min_height = config.pipe.min_height
        max_height = config.max_pipe_height(gap)
        top_height = float(rng.uniform(min_height, max_height))
        return cls(
            x=float(config.canvas.width),
            width=config.pipe.width,
            gap=gap,
            top_height=top_height,
            speed=config.pipe.base_speed * difficulty.speed_multiplier,
        )

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom_y(self) -> float:
        """Top edge of the bottom column."""
        return self.top_height + self.gap

    def update(self, dt: float):
        """Moves the pipe left by its spawn-time speed."""
        self.x -= self.speed * dt

    def try_score(self, bird: Bird) -> bool:
        """
        Latch ``scored`` the first time the pipe's right edge is behind the bird.

        Returns:
            bool: True only on the call that flips the flag.
        """
        if not self.scored and self.right < bird.x:
            self.scored = True
            return True
        return False

    def collides_with(self, bird: Bird) -> bool:
        """Padded bounding-box test against both columns."""
        left, top, right, bottom = bird.hitbox()
        if right > self.x and left < self.right:
            return top < self.top_height or bottom > self.bottom_y
        return False

    def off_screen(self) -> bool:
        return self.right < 0
