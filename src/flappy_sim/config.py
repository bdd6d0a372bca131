# Configuration for the Flappy Bird simulation.

import json
import logging
import os
from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any, Dict, Optional

# --- CANVAS ---
CANVAS_WIDTH = 400
CANVAS_HEIGHT = 600

# --- BIRD ---
BIRD_X = 80
BIRD_WIDTH = 34
BIRD_HEIGHT = 24
GRAVITY = 0.6
JUMP_STRENGTH = -10
TERMINAL_VELOCITY = 10
HITBOX_PADDING = 5  # pixels shaved off each side of the bird before collision tests

# --- PIPES ---
PIPE_WIDTH = 60
PIPE_GAP = 150
PIPE_MIN_HEIGHT = 50
PIPE_BASE_SPEED = 2.5
PIPE_SPAWN_INTERVAL = 120  # ticks, not milliseconds
PIPE_SPAWN_MARGIN = 50

# --- GROUND ---
GROUND_HEIGHT = 100
GROUND_SCROLL_SPEED = 2.5

# --- PHYSICS ---
TARGET_FPS = 60
ROTATION_EASING = 0.15
MAX_DELTA_MS = 100

# --- DIFFICULTY ---
DIFFICULTY_ENABLED = True
SPEED_INCREASE_PER_SCORE = 0.05
MAX_SPEED_MULTIPLIER = 1.8
GAP_DECREASE_PER_SCORE = 2
MIN_GAP = 120

# --- PARTICLES ---
MAX_PARTICLES = 200
KEEP_PARTICLES = 100

# --- CONTROLS ---
JUMP_COOLDOWN_MS = 100

# --- ENVIRONMENT ---
CONFIG_PATH = os.getenv("FLAPPY_CONFIG")
BEST_SCORE_FILE = os.getenv("FLAPPY_BEST_SCORE_FILE", "highscore.txt")
SHOW_HITBOXES = os.getenv("FLAPPY_DEBUG", "").lower() in ("1", "true", "yes")


@dataclass
class CanvasConfig:
    width: int = CANVAS_WIDTH
    height: int = CANVAS_HEIGHT


@dataclass
class BirdConfig:
    x: float = BIRD_X
    width: int = BIRD_WIDTH
    height: int = BIRD_HEIGHT
    gravity: float = GRAVITY
    jump_strength: float = JUMP_STRENGTH
    terminal_velocity: float = TERMINAL_VELOCITY
    hitbox_padding: float = HITBOX_PADDING


@dataclass
class PipeConfig:
    width: int = PIPE_WIDTH
    gap: float = PIPE_GAP
    min_height: float = PIPE_MIN_HEIGHT
    base_speed: float = PIPE_BASE_SPEED
    spawn_interval: int = PIPE_SPAWN_INTERVAL
    spawn_margin: float = PIPE_SPAWN_MARGIN


@dataclass
class GroundConfig:
    height: int = GROUND_HEIGHT
    scroll_speed: float = GROUND_SCROLL_SPEED


@dataclass
class PhysicsConfig:
    target_fps: float = TARGET_FPS
    rotation_easing: float = ROTATION_EASING
    rotation_easing_scaled: bool = False
    max_delta_ms: float = MAX_DELTA_MS


@dataclass
class DifficultyConfig:
    enabled: bool = DIFFICULTY_ENABLED
    speed_increase_per_score: float = SPEED_INCREASE_PER_SCORE
    max_speed_multiplier: float = MAX_SPEED_MULTIPLIER
    gap_decrease_per_score: float = GAP_DECREASE_PER_SCORE
    min_gap: float = MIN_GAP


@dataclass
class ParticleConfig:
    max_count: int = MAX_PARTICLES
    keep_count: int = KEEP_PARTICLES


@dataclass
class DebugConfig:
    show_hitboxes: bool = SHOW_HITBOXES


@dataclass
class ControlsConfig:
    jump_cooldown_ms: float = JUMP_COOLDOWN_MS


@dataclass
class StorageConfig:
    best_score_file: str = BEST_SCORE_FILE


@dataclass
class GameConfig:
    """All tunable values in one place."""

    canvas: CanvasConfig = field(default_factory=CanvasConfig)
    bird: BirdConfig = field(default_factory=BirdConfig)
    pipe: PipeConfig = field(default_factory=PipeConfig)
    ground: GroundConfig = field(default_factory=GroundConfig)
    physics: PhysicsConfig = field(default_factory=PhysicsConfig)
    difficulty: DifficultyConfig = field(default_factory=DifficultyConfig)
    particles: ParticleConfig = field(default_factory=ParticleConfig)
    debug: DebugConfig = field(default_factory=DebugConfig)
    controls: ControlsConfig = field(default_factory=ControlsConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)

    @property
    def ground_line(self) -> float:
        """Y coordinate of the top of the ground."""
        return self.canvas.height - self.ground.height

    @property
    def frame_ms(self) -> float:
        """Duration of one reference frame in milliseconds."""
        return 1000.0 / self.physics.target_fps

    def max_pipe_height(self, gap: float) -> float:
        return self.canvas.height - gap - self.ground.height - self.pipe.spawn_margin

    def validate(self) -> "GameConfig":
        """
        Check the configuration once, before the first tick.

        Raises:
            ValueError: If any value would make the simulation meaningless.
        """
        problems = []
        if self.canvas.width <= 0 or self.canvas.height <= 0:
            problems.append("canvas dimensions must be positive")
        if self.bird.width <= 0 or self.bird.height <= 0:
            problems.append("bird dimensions must be positive")
        if self.bird.terminal_velocity <= 0:
            problems.append("bird.terminal_velocity must be positive")
        if self.bird.hitbox_padding * 2 >= min(self.bird.width, self.bird.height):
            problems.append("bird.hitbox_padding leaves no hitbox")
        if self.pipe.width <= 0:
            problems.append("pipe.width must be positive")
        if self.pipe.gap <= 0:
            problems.append("pipe.gap must be positive")
        if not _is_int(self.pipe.spawn_interval) or self.pipe.spawn_interval < 1:
            problems.append("pipe.spawn_interval must be a whole number of ticks, at least 1")
        if self.pipe.base_speed < 0:
            problems.append("pipe.base_speed must not be negative")
        if self.ground.height < 0 or self.ground.height >= self.canvas.height:
            problems.append("ground.height must fit inside the canvas")
        if self.physics.target_fps <= 0:
            problems.append("physics.target_fps must be positive")
        if self.physics.max_delta_ms <= 0:
            problems.append("physics.max_delta_ms must be positive")
        if not 0 < self.physics.rotation_easing <= 1:
            problems.append("physics.rotation_easing must be in (0, 1]")
        if self.difficulty.min_gap <= 0 or self.difficulty.min_gap > self.pipe.gap:
            problems.append("difficulty.min_gap must be positive and no larger than pipe.gap")
        if self.difficulty.max_speed_multiplier < 1:
            problems.append("difficulty.max_speed_multiplier must be at least 1")
        if self.difficulty.speed_increase_per_score < 0 or self.difficulty.gap_decrease_per_score < 0:
            problems.append("difficulty rates must not be negative")
        if self.max_pipe_height(self.pipe.gap) < self.pipe.min_height:
            problems.append("pipe.gap leaves no room between pipe.min_height and the ground")
        if self.particles.keep_count < 0 or self.particles.keep_count > self.particles.max_count:
            problems.append("particles.keep_count must be between 0 and particles.max_count")
        if self.controls.jump_cooldown_ms < 0:
            problems.append("controls.jump_cooldown_ms must not be negative")
        if problems:
            raise ValueError(f"Invalid configuration: {'; '.join(problems)}")
        return self

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _matches_type(value: Any, expected: type) -> bool:
    # bool is a subclass of int, so it only satisfies bool fields
    if expected is bool:
        return isinstance(value, bool)
    if expected is int:
        return _is_int(value)
    if expected is float:
        return _is_int(value) or isinstance(value, float)
    return isinstance(value, expected)


def apply_overrides(config: GameConfig, overrides: Dict[str, Dict[str, Any]]) -> GameConfig:
    """
    Return a copy of ``config`` with per-section overrides merged in.

    Raises:
        ValueError: On an unknown section or key, or a value of the wrong type.
    """
    sections = {f.name for f in fields(config)}
    updated = {}
    for section_name, values in overrides.items():
        if section_name not in sections:
            raise ValueError(f"Unknown config section: {section_name!r}")
        if not isinstance(values, dict):
            raise ValueError(f"Config section {section_name!r} must be an object")
        section = getattr(config, section_name)
        known = {f.name: f.type for f in fields(section)}
        unknown = set(values) - set(known)
        if unknown:
            raise ValueError(
                f"Unknown keys in config section {section_name!r}: {', '.join(sorted(unknown))}"
            )
        for key, value in values.items():
            expected = known[key]
            if not _matches_type(value, expected):
                raise ValueError(
                    f"{section_name}.{key} must be {expected.__name__}, got {type(value).__name__}"
                )
        updated[section_name] = replace(section, **values)
    return replace(config, **updated)


def load_config(path: Optional[str] = None) -> GameConfig:
    """
    Build and validate the game configuration.

    Args:
        path (str): Optional JSON file of per-section overrides. Falls back to
            the FLAPPY_CONFIG environment variable.

    Returns:
        GameConfig: A validated configuration.

    Raises:
        ValueError: If the file is malformed or a value is out of range.
    """
    config = GameConfig()
    path = path or CONFIG_PATH
    if path:
        try:
            with open(path, "r") as f:
                overrides = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ValueError(f"Could not read config file {path}: {e}") from e
        if not isinstance(overrides, dict):
            raise ValueError(f"Config file {path} must contain a JSON object")
        config = apply_overrides(config, overrides)
        logging.info(f"Loaded config overrides from {path}")
    return config.validate()
