"""Play in the terminal.

Run with: `python -m termtris`

Keys: a/d move, k/j rotate clockwise/counter-clockwise, K/J rotate 180
degrees, c hold, space hard drop, q quit.
"""

from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from .board import HEIGHT, WIDTH, BoardSizeError
from .config import FALL_SPEED, TICK_RATE, GameConfig
from .run_terminal import GameRunner
from .screen import ScreenSizeError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="termtris", description=__doc__)
    parser.add_argument("--width", type=int, default=WIDTH, help="Board width in cells.")
    parser.add_argument("--height", type=int, default=HEIGHT, help="Board height in cells.")
    parser.add_argument("--tick-rate", type=int, default=TICK_RATE, help="Simulation ticks per second.")
    parser.add_argument(
        "--speed", type=float, default=FALL_SPEED, help="Initial fall speed in rows per second."
    )
    parser.add_argument("--seed", type=int, default=None, help="Randomizer seed (defaults to the clock).")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Write log messages here instead of stderr, which shares the terminal with the game.",
    )
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def log_level(args: argparse.Namespace) -> int:
    """Return the level to configure; stderr never gets less than WARNING."""

    level = getattr(logging, args.log_level.upper(), logging.WARNING)
    if args.log_file is None:
        return max(level, logging.WARNING)
    return level


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=log_level(args),
        format="%(asctime)s %(name)s %(message)s" if args.log_file else "%(message)s",
        filename=args.log_file,
    )

    config = GameConfig(
        width=args.width,
        height=args.height,
        tick_rate=args.tick_rate,
        initial_fall_speed=args.speed,
        seed=args.seed,
    )
    try:
        runner = GameRunner(config)
    except (BoardSizeError, ScreenSizeError, ValueError) as exc:
        parser.error(str(exc))

    score = runner.run()
    print(f"Final score: {score}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
