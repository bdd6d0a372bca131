# Entry point for the Flappy Bird simulation: windowed pygame loop or headless run.
import argparse
import logging
import sys
from typing import Dict, List, Optional

import numpy as np

from .autopilot import Autopilot
from .clock import FrameClock
from .config import GameConfig, load_config
from .controls import JumpDebouncer
from .game import Game, GamePhase
from .storage import BestScoreStore, MemoryScoreStore


def run_headless(config: GameConfig, frames: int, fps: float = 60, seed: Optional[int] = None,
                 store=None) -> Dict[str, int]:
    """
    Simulate ``frames`` frames with the autopilot playing and no display.

    Timestamps are synthetic, spaced ``1000 / fps`` ms apart, so a run is
    reproducible for a given seed and frame rate. A new game starts as soon
    as the previous one ends.

    Returns:
        dict: frames simulated, games started, best score (including the game
        still in progress) and score of the last game.
    """
    game = Game(
        config,
        store=store if store is not None else MemoryScoreStore(),
        rng=np.random.default_rng(seed),
        clock=FrameClock(config.physics.target_fps, config.physics.max_delta_ms),
    )
    pilot = Autopilot(config.ground_line)
    debouncer = JumpDebouncer(config.controls.jump_cooldown_ms)
    step_ms = 1000.0 / fps
    now = 0.0
    games = 0
    game.tick(now)
    for _ in range(frames):
        s = game.state
        if s.phase in (GamePhase.START, GamePhase.GAME_OVER):
            if debouncer.allow(now):
                game.jump()
                games += 1
        elif pilot.should_jump(s.bird, s.pipes) and debouncer.allow(now):
            game.jump()
        now += step_ms
        game.tick(now)

    summary = {
        "frames": frames,
        "games": games,
        # an unfinished game still counts toward the best
        "best_score": max(game.state.best_score, game.state.score),
        "last_score": game.state.score,
    }
    logging.info(
        f"Headless run: {frames} frames, {games} games, best {summary['best_score']}, "
        f"last {summary['last_score']}"
    )
    return summary


def run_windowed(config: GameConfig, seed: Optional[int] = None):
    import pygame

    from .renderer import Renderer

    pygame.init()
    screen = pygame.display.set_mode((config.canvas.width, config.canvas.height))
    pygame.display.set_caption("Flappy Bird")
    fps_clock = pygame.time.Clock()

    game = Game(
        config,
        store=BestScoreStore(config.storage.best_score_file),
        rng=np.random.default_rng(seed),
        clock=FrameClock(config.physics.target_fps, config.physics.max_delta_ms,
                         time_source=lambda: float(pygame.time.get_ticks())),
    )
    renderer = Renderer(config)
    debouncer = JumpDebouncer(config.controls.jump_cooldown_ms)

    running = True
    while running:
        fps_clock.tick(config.physics.target_fps)
        now = float(pygame.time.get_ticks())
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_SPACE:
                    if debouncer.allow(now):
                        game.jump()
                elif event.key in (pygame.K_ESCAPE, pygame.K_p):
                    game.toggle_pause(now)
                elif event.key == pygame.K_d and event.mod & (pygame.KMOD_CTRL | pygame.KMOD_META):
                    game.toggle_debug()
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if debouncer.allow(now):
                    game.jump()

        game.tick(now)
        snap = game.snapshot()
        renderer.draw(screen, snap)
        renderer.draw_hud(screen, snap)
        pygame.display.flip()

    pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Flappy Bird")
    parser.add_argument("--headless", action="store_true", help="Run the autopilot without graphics")
    parser.add_argument("--frames", type=int, default=3600, help="Frames to simulate in headless mode")
    parser.add_argument("--fps", type=float, default=60, help="Simulated frame rate in headless mode")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for pipes and particles")
    parser.add_argument("--config", default=None, help="JSON file with config overrides")
    parser.add_argument("--debug", action="store_true", help="Start with hitboxes visible")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main function to run the game."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        config = load_config(args.config)
    except ValueError as e:
        logging.error(f"{e}")
        sys.exit(1)
    if args.debug:
        config.debug.show_hitboxes = True

    if args.headless:
        if args.frames < 0 or args.fps <= 0:
            logging.error("--frames must be >= 0 and --fps must be positive")
            sys.exit(1)
        run_headless(config, args.frames, fps=args.fps, seed=args.seed)
    else:
        run_windowed(config, seed=args.seed)


if __name__ == "__main__":
    main()
