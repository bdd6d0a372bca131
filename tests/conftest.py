import numpy as np
import pytest

from flappy_sim.clock import FrameClock
from flappy_sim.config import GameConfig, apply_overrides
from flappy_sim.game import Game
from flappy_sim.storage import MemoryScoreStore


class Ticker:
    """Drives a game with evenly spaced synthetic timestamps."""

    def __init__(self, game, fps=60):
        self.game = game
        self.step = 1000.0 / fps
        self.now = 0.0
        game.tick(self.now)

    def __call__(self, n=1):
        for _ in range(n):
            self.now += self.step
            self.game.tick(self.now)


@pytest.fixture
def config():
    # FLAPPY_DEBUG in the environment must not leak into tests
    return apply_overrides(GameConfig(), {"debug": {"show_hitboxes": False}})


@pytest.fixture
def hover_config():
    # bird never moves vertically, so pipes can be driven past it safely
    return apply_overrides(
        GameConfig(),
        {"bird": {"gravity": 0, "jump_strength": 0}, "debug": {"show_hitboxes": False}},
    )


@pytest.fixture
def rng():
    return np.random.default_rng(0)


def make_game(config, store=None, seed=0):
    return Game(
        config,
        store=store if store is not None else MemoryScoreStore(),
        rng=np.random.default_rng(seed),
        clock=FrameClock(config.physics.target_fps, config.physics.max_delta_ms),
    )


@pytest.fixture
def game(config):
    return make_game(config)


@pytest.fixture
def hover_game(hover_config):
    return make_game(hover_config)
