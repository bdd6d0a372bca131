from typing import Optional, Sequence

from .bird import Bird
from .pipe import Pipe


class Autopilot:
    """
    Rule-based stand-in for a player, used to drive headless runs.

    Aims the bird at the middle of the next gap and flaps whenever it is
    falling below that line.

    Attributes:
        ground_line (float): Y of the ground, the fallback target is half of it.
        slack (float): Pixels below the target allowed before flapping.
    """

    def __init__(self, ground_line: float, slack: float = 35.0):
        self.ground_line = ground_line
        self.slack = slack

    @staticmethod
    def next_pipe(bird: Bird, pipes: Sequence[Pipe]) -> Optional[Pipe]:
        return next((p for p in pipes if p.x + p.width > bird.x), None)

    def target_y(self, bird: Bird, pipes: Sequence[Pipe]) -> float:
        nxt = self.next_pipe(bird, pipes)
        if nxt is None:
            return self.ground_line / 2
        return nxt.top_height + nxt.gap / 2

    def should_jump(self, bird: Bird, pipes: Sequence[Pipe]) -> bool:
        _, cy = bird.center
        return bird.velocity >= 0 and cy > self.target_y(bird, pipes) + self.slack
