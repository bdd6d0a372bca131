import pytest

from flappy_sim.config import apply_overrides
from flappy_sim.difficulty import compute_difficulty, starting_difficulty


def test_score_zero_is_starting_difficulty(config):
    d = compute_difficulty(0, config)
    assert d.speed_multiplier == 1
    assert d.gap == 150
    assert d == starting_difficulty(config)


def test_linear_ramp(config):
    d = compute_difficulty(10, config)
    assert d.speed_multiplier == pytest.approx(1.5)
    assert d.gap == 130


def test_caps_and_floors(config):
    d = compute_difficulty(100, config)
    assert d.speed_multiplier == 1.8
    assert d.gap == 120


def test_monotonic_and_bounded(config):
    previous = compute_difficulty(0, config)
    for score in range(1, 200):
        d = compute_difficulty(score, config)
        assert previous.speed_multiplier <= d.speed_multiplier <= 1.8
        assert 120 <= d.gap <= previous.gap
        previous = d


def test_disabled_holds_starting_values(config):
    off = apply_overrides(config, {"difficulty": {"enabled": False}})
    for score in (0, 5, 50, 500):
        d = compute_difficulty(score, off)
        assert d.speed_multiplier == 1
        assert d.gap == 150
