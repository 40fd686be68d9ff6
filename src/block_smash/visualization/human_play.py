from __future__ import annotations

import argparse
import logging
from typing import Dict, List, Optional

import pygame

from block_smash.game import GameConfig, Move, restart, start, stop
from block_smash.game.shapes import parse_piece_types
from .audio import MUSIC_END_EVENT, SoundBoard
from .renderer import Renderer


KEY_TO_MOVE: Dict[int, Move] = {
    pygame.K_LEFT: Move.LEFT,
    pygame.K_RIGHT: Move.RIGHT,
    pygame.K_UP: Move.ROTATE_UP,
    pygame.K_DOWN: Move.ROTATE_DOWN,
    pygame.K_LSHIFT: Move.ROTATE_DOWN,
    pygame.K_RSHIFT: Move.ROTATE_DOWN,
}

KEY_CLICKS: Dict[int, str] = {
    pygame.K_LEFT: "left",
    pygame.K_RIGHT: "right",
    pygame.K_UP: "rotate_up",
    pygame.K_DOWN: "rotate_down",
    pygame.K_LSHIFT: "shift",
    pygame.K_RSHIFT: "shift",
}


def build_parser() -> argparse.ArgumentParser:
    defaults = GameConfig()
    p = argparse.ArgumentParser(description="Play Block Smash")
    p.add_argument("--rows", type=int, default=defaults.rows)
    p.add_argument("--speed", type=float, default=defaults.speed,
                   help="Fraction of a cell the piece falls per frame")
    p.add_argument("--soft-drop", type=float, default=defaults.soft_drop_multiplier)
    p.add_argument("--lock-delay", type=int, default=defaults.lock_delay,
                   help="Frames a grounded piece waits before locking")
    p.add_argument("--force-shapes", type=str, default=None,
                   help="Comma separated piece types to draw from, e.g. I,I,T")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--max-runtime", type=float, default=None, help="Stop the game after this many seconds")
    p.add_argument("--sounds", type=str, default=None, help="Directory with sound effects")
    p.add_argument("--cell-size", type=int, default=28)
    p.add_argument("--fps", type=int, default=60)
    p.add_argument("--log-level", type=str, default="INFO")
    return p


def config_from_args(args: argparse.Namespace) -> GameConfig:
    forced: Optional[List] = parse_piece_types(args.force_shapes.split(",")) if args.force_shapes else None
    return GameConfig(
        rows=args.rows,
        speed=args.speed,
        soft_drop_multiplier=args.soft_drop,
        lock_delay=args.lock_delay,
        forced_shapes=forced,
        random_seed=args.seed,
        max_runtime=args.max_runtime,
    )


def run(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")
    config = config_from_args(args)

    pygame.init()
    try:
        clock = pygame.time.Clock()
        sounds = SoundBoard(args.sounds)
        session = start(config, sounds)
        renderer = Renderer(cell_size=args.cell_size)

        screen = pygame.display.set_mode(renderer.surface_size(config.rows, config.cols))
        pygame.display.set_caption("Block Smash")

        running = True
        while running:
            # Input handling
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_n:
                        session = restart(session)
                    elif event.key == pygame.K_s:
                        stop(session)
                    elif event.key == pygame.K_SPACE:
                        session.push(Move.SOFT_DROP_START)
                    else:
                        move = KEY_TO_MOVE.get(event.key)
                        if move is not None and session.running:
                            session.push(move)
                            sounds.play(KEY_CLICKS[event.key])
                elif event.type == pygame.KEYUP and event.key == pygame.K_SPACE:
                    session.push(Move.SOFT_DROP_STOP)
                elif event.type == MUSIC_END_EVENT and session.running:
                    sounds.music_ended()

            session.tick()

            game = session.game
            renderer.draw(screen, game.get_state(), game.score, game.preview(), game.game_over)
            pygame.display.flip()
            clock.tick(args.fps)
        stop(session)
        print(f"Final stats: {session.stats()}")
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
