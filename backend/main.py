"""
Entry point for playing the snake game in a window.

Usage:
    python main.py
    python main.py --width 30 --height 20 --seed 42
    python main.py --allow-double-backs --log-level DEBUG

Settings default to the SNAKE_* environment variables (a .env file is
picked up automatically); flags given here take precedence.
"""

import argparse
import logging
import sys
from typing import List, Optional

from config import GameConfig, load_config

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Play Snake: eat apples, grow, and don't hit the walls or yourself.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument("--width", type=int, required=False, default=None,
                        help="Number of cells horizontally")
    parser.add_argument("--height", type=int, required=False, default=None,
                        help="Number of cells vertically")
    parser.add_argument("--cell-size", type=int, required=False, default=None,
                        help="Pixel size of each cell")
    parser.add_argument("--seed", type=int, required=False, default=None,
                        help="Seed for apple placement and the start direction")
    parser.add_argument("--allow-double-backs", action="store_true",
                        help="Accept any direction change, including straight reversals")
    parser.add_argument("--log-level", type=str, required=False, default=None,
                        help="Logging level (DEBUG, INFO, WARNING, ...)")
    parser.add_argument("--env-file", type=str, required=False, default=None,
                        help="Path to a .env file with SNAKE_* settings")
    return parser


def resolve_config(args: argparse.Namespace) -> GameConfig:
    """Merge command-line flags over the environment configuration."""
    config = load_config(args.env_file)
    config = config.with_overrides(
        grid_width=args.width,
        grid_height=args.height,
        cell_size=args.cell_size,
        seed=args.seed,
        log_level=args.log_level.upper() if args.log_level else None,
        prevent_double_backs=False if args.allow_double_backs else None,
    )
    return config.validate()


def configure_logging(level: str):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = resolve_config(args)
    except ValueError as e:
        configure_logging("INFO")
        logger.error(f"Invalid configuration: {e}")
        return 2

    configure_logging(config.log_level)

    # Imported late so configuration errors are reported without needing a display
    from services.pygame_window import run_window

    run_window(config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
