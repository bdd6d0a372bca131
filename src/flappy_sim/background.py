from dataclasses import dataclass
from typing import List

import numpy as np

from .config import GameConfig

CLOUD_LAYERS = 2
CLOUDS_PER_LAYER = 4
MOUNTAIN_LAYERS = 2
SKY_MARGIN = 200  # clouds stay this far above the bottom of the canvas


@dataclass
class Cloud:
    x: float
    y: float
    layer: int
    speed: float
    size: float
    opacity: float


@dataclass
class Mountain:
    layer: int
    speed: float
    offset: float = 0.0


class Background:
    """
    Parallax scenery. Clouds and mountains drift every tick in every phase;
    the ground only scrolls while a game is being played.
    """

    def __init__(self, config: GameConfig, rng: np.random.Generator):
        self.config = config
        self.rng = rng
        self.clouds: List[Cloud] = [
            self._make_cloud(layer)
            for layer in range(1, CLOUD_LAYERS + 1)
            for _ in range(CLOUDS_PER_LAYER)
        ]
        self.mountains = [Mountain(layer=layer, speed=0.3 * layer)
                          for layer in range(1, MOUNTAIN_LAYERS + 1)]
        self.ground_offset = 0.0

    def _random_y(self) -> float:
        return float(self.rng.random() * (self.config.canvas.height - SKY_MARGIN))

    def _make_cloud(self, layer: int) -> Cloud:
        rng = self.rng
        return Cloud(
            x=float(rng.random() * self.config.canvas.width),
            y=self._random_y(),
            layer=layer,
            speed=float((0.2 + rng.random() * 0.4) * layer),
            size=float((15 + rng.random() * 25) / layer),
            opacity=0.3 + 0.3 * layer,
        )

    def update(self, dt: float):
        width = self.config.canvas.width
        for cloud in self.clouds:
            cloud.x -= cloud.speed * dt
            if cloud.x + cloud.size * 2 < 0:
                cloud.x = width + cloud.size
                cloud.y = self._random_y()
        for mountain in self.mountains:
            mountain.offset = (mountain.offset + mountain.speed * dt) % width

    def scroll_ground(self, dt: float):
        self.ground_offset += self.config.ground.scroll_speed * dt
