"""Flappy Bird simulation core with a pygame front end."""

from .config import GameConfig, load_config
from .game import Game, GamePhase

__all__ = ["Game", "GameConfig", "GamePhase", "load_config"]
