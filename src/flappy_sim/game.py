"""
Game state machine and per-frame simulation tick.

All mutable game data lives in one ``SimulationState``. ``Game`` interprets
input events against the current phase and advances the state once per
frame; renderers only ever see the immutable ``FrameSnapshot`` it produces.
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

from .background import Background, Cloud, Mountain
from .bird import Bird, BoundaryHit
from .clock import FrameClock
from .config import GameConfig
from .difficulty import Difficulty, compute_difficulty, starting_difficulty
from .particles import (
    COLLISION_COLOR,
    IMPACT_COLOR,
    JUMP_COLOR,
    SCORE_COLOR,
    Particle,
    ParticleBuffer,
)
from .pipe import Pipe
from .storage import MemoryScoreStore

JUMP_PARTICLES = 5
SCORE_PARTICLES = 15
COLLISION_PARTICLES = 15
IMPACT_PARTICLES = 10


class GamePhase(Enum):
    START = "start"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "gameOver"


@dataclass
class SimulationState:
    bird: Bird
    particles: ParticleBuffer
    background: Background
    difficulty: Difficulty
    phase: GamePhase = GamePhase.START
    score: int = 0
    best_score: int = 0
    frame: int = 0
    pipes: List[Pipe] = field(default_factory=list)
    show_hitboxes: bool = False


@dataclass(frozen=True)
class BirdView:
    x: float
    y: float
    width: int
    height: int
    rotation: float
    wing_frame: float
    hitbox: Tuple[float, float, float, float]


@dataclass(frozen=True)
class PipeView:
    x: float
    width: int
    gap: float
    top_height: float
    scored: bool


@dataclass(frozen=True)
class FrameSnapshot:
    phase: GamePhase
    bird: BirdView
    pipes: Tuple[PipeView, ...]
    particles: Tuple[Particle, ...]
    score: int
    best_score: int
    ground_offset: float
    clouds: Tuple[Cloud, ...]
    mountains: Tuple[Mountain, ...]
    show_hitboxes: bool


class Game:
    """
    Orchestrates phase transitions and the per-frame update.

    Args:
        config (GameConfig): Validated configuration.
        store: Best-score store with ``load()`` and ``save(score)``.
        rng (np.random.Generator): Random source for pipes, particles and clouds.
        clock (FrameClock): Delta-time normalizer, built from config if omitted.
    """

    def __init__(self, config: GameConfig, store=None, rng: Optional[np.random.Generator] = None,
                 clock: Optional[FrameClock] = None):
        self.config = config
        self.store = store if store is not None else MemoryScoreStore()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.clock = clock or FrameClock(config.physics.target_fps, config.physics.max_delta_ms)
        self.state = SimulationState(
            bird=Bird(config),
            particles=ParticleBuffer(self.rng, config.particles.max_count, config.particles.keep_count),
            background=Background(config, self.rng),
            difficulty=starting_difficulty(config),
            best_score=self.store.load(),
            show_hitboxes=config.debug.show_hitboxes,
        )

    @property
    def phase(self) -> GamePhase:
        return self.state.phase

    # --- input events ---

    def jump(self):
        """Start, restart or flap depending on the phase. Ignored while paused."""
        s = self.state
        if s.phase == GamePhase.START:
            self._start_game()
            self._flap()
        elif s.phase == GamePhase.PLAYING:
            self._flap()
        elif s.phase == GamePhase.GAME_OVER:
            self._start_game()

    def toggle_pause(self, now_ms: Optional[float] = None):
        s = self.state
        if s.phase == GamePhase.PLAYING:
            s.phase = GamePhase.PAUSED
            logging.info("Game paused")
        elif s.phase == GamePhase.PAUSED:
            s.phase = GamePhase.PLAYING
            self.clock.resync(now_ms)
            logging.info("Game resumed")

    def toggle_debug(self):
        s = self.state
        s.show_hitboxes = not s.show_hitboxes
        logging.info(f"Hitbox overlay {'on' if s.show_hitboxes else 'off'}")

    # --- transitions ---

    def _start_game(self):
        s = self.state
        s.phase = GamePhase.PLAYING
        s.score = 0
        s.frame = 0
        s.pipes = []
        s.particles.clear()
        s.difficulty = starting_difficulty(self.config)
        s.bird.reset()
        logging.info("Game started")

    def _flap(self):
        bird = self.state.bird
        bird.jump()
        self.state.particles.emit(bird.x, bird.y + bird.height / 2, JUMP_COLOR, JUMP_PARTICLES)

    def _game_over(self):
        s = self.state
        s.phase = GamePhase.GAME_OVER
        if s.score > s.best_score:
            s.best_score = s.score
            self.store.save(s.best_score)
        logging.info(f"Game over: score {s.score}, best {s.best_score}")

    def _score_point(self):
        s = self.state
        s.score += 1
        s.difficulty = compute_difficulty(s.score, self.config)
        bird = s.bird
        s.particles.emit(bird.x + bird.width, bird.y + bird.height / 2, SCORE_COLOR, SCORE_PARTICLES)
        logging.debug(f"Score {s.score}: speed x{s.difficulty.speed_multiplier:.2f}, gap {s.difficulty.gap}")

    # --- simulation ---

    def tick(self, now_ms: Optional[float] = None) -> float:
        """
        Advance one frame.

        Background scenery always moves. Bird, pipes, scoring and particles
        only move while PLAYING.

        Returns:
            float: The normalized delta used for this frame.
        """
        dt = self.clock.tick(now_ms)
        s = self.state
        s.background.update(dt)
        if s.phase != GamePhase.PLAYING:
            return dt

        s.frame += 1
        s.background.scroll_ground(dt)

        if s.bird.update(dt) == BoundaryHit.GROUND:
            bird = s.bird
            s.particles.emit(bird.x + bird.width / 2, bird.y + bird.height, IMPACT_COLOR, IMPACT_PARTICLES)
            self._game_over()

        if s.phase == GamePhase.PLAYING:
            self._advance_pipes(dt)

        s.particles.update(dt)
        return dt

    def _advance_pipes(self, dt: float):
        s = self.state
        bird = s.bird
        collided = False
        for pipe in s.pipes:
            pipe.update(dt)
            if pipe.try_score(bird):
                self._score_point()
            if pipe.collides_with(bird):
                cx, cy = bird.center
                s.particles.emit(cx, cy, COLLISION_COLOR, COLLISION_PARTICLES)
                collided = True
        s.pipes = [pipe for pipe in s.pipes if not pipe.off_screen()]

        if s.frame % self.config.pipe.spawn_interval == 0:
            pipe = Pipe.spawn(self.config, s.difficulty, self.rng)
            s.pipes.append(pipe)
            logging.debug(
                f"Spawned pipe at x={pipe.x} gap={pipe.gap} top={pipe.top_height:.1f} speed={pipe.speed:.2f}"
            )

        if collided:
            self._game_over()

    def snapshot(self) -> FrameSnapshot:
        s = self.state
        bird = s.bird
        return FrameSnapshot(
            phase=s.phase,
            bird=BirdView(bird.x, bird.y, bird.width, bird.height, bird.rotation, bird.wing_frame, bird.hitbox()),
            pipes=tuple(PipeView(p.x, p.width, p.gap, p.top_height, p.scored) for p in s.pipes),
            particles=tuple(s.particles.particles()),
            score=s.score,
            best_score=s.best_score,
            ground_offset=s.background.ground_offset,
            clouds=tuple(replace(c) for c in s.background.clouds),
            mountains=tuple(replace(m) for m in s.background.mountains),
            show_hitboxes=s.show_hitboxes,
        )
