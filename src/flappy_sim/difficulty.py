from dataclasses import dataclass

from .config import GameConfig


@dataclass(frozen=True)
class Difficulty:
    speed_multiplier: float
    gap: float


def starting_difficulty(config: GameConfig) -> Difficulty:
    return Difficulty(speed_multiplier=1.0, gap=config.pipe.gap)


def compute_difficulty(score: int, config: GameConfig) -> Difficulty:
    """
    Derives pipe speed multiplier and gap size from the cumulative score.

    Speed grows and the gap shrinks linearly with score until the configured
    cap and floor are reached. With difficulty disabled the starting values
    are returned for every score.
    """
    if not config.difficulty.enabled:
        return starting_difficulty(config)
    d = config.difficulty
    multiplier = min(1 + score * d.speed_increase_per_score, d.max_speed_multiplier)
    gap = max(config.pipe.gap - score * d.gap_decrease_per_score, d.min_gap)
    return Difficulty(speed_multiplier=multiplier, gap=gap)
