#!/usr/bin/env python3
"""
CLI tool to play a snake game headlessly from a move script

Usage:
    python simulate.py --moves "UU.RRDD" --seed 7
    python simulate.py --moves "RRRRRRRRRRRR" --ticks 20 --quiet
    python simulate.py --moves "DDLL" --snapshot final.png

Script letters:
    U/R/D/L  request a direction before that tick
    .        no input for that tick
    X        restart
    Q        quit

The board is printed after every tick unless --quiet is given, followed by
a JSON summary of the run.
"""

import os
import sys
import json
import argparse
import logging
from typing import Any, Dict, Optional

# Add parent directory to path for imports
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import GameConfig, load_config  # noqa: E402
from domain.board import Board  # noqa: E402
from players.scripted_player import ScriptedPlayer  # noqa: E402
from services.frame_renderer import FrameRenderer  # noqa: E402
from services.game_loop import GameLoop  # noqa: E402

logger = logging.getLogger(__name__)


def run_simulation(
    config: GameConfig,
    moves: str,
    ticks: Optional[int] = None,
    show_boards: bool = True,
    stop_on_collision: bool = True,
    snapshot_path: Optional[str] = None
) -> Dict[str, Any]:
    """
    Run one scripted game.

    Args:
        config: validated game configuration (config.seed makes it reproducible)
        moves: script of per-tick commands, see the module docstring
        ticks: number of ticks to run; defaults to the script length
        show_boards: print the ASCII board after every tick
        stop_on_collision: end the run as soon as the snake crashes
        snapshot_path: if given, save the final frame as an image

    Returns:
        A dictionary summarizing the run.
    """
    board = Board.from_config(config)
    player = ScriptedPlayer(moves)
    loop = GameLoop(board, player, start_interval_ms=config.start_interval_ms)

    total_ticks = ticks if ticks is not None else len(player.script)
    apples_eaten = 0
    ticks_run = 0

    if show_boards:
        print(board.get_current_state().print_board() + "\n")

    for _ in range(total_ticks):
        results = loop.run_ticks(1)
        if not results:
            break
        ticks_run += 1
        result = results[-1]
        if result.grew:
            apples_eaten += 1

        if show_boards:
            state = board.get_current_state()
            print(f"Tick {state.tick_number} | length {state.length} | interval {result.interval_ms} ms")
            print(state.print_board() + "\n")

        if stop_on_collision and result.collided:
            break

    state = board.get_current_state()

    if snapshot_path:
        renderer = FrameRenderer(cell_size=config.cell_size)
        renderer.render(state, flash_on=True).save(snapshot_path)
        logger.info(f"Saved final frame to {snapshot_path}")

    return {
        "ticks": ticks_run,
        "length": state.length,
        "apples_eaten": apples_eaten,
        "collided": state.collided,
        "collision_reason": state.collision_reason,
        "collision_position": list(state.collision_position) if state.collision_position else None,
        "interval_ms": state.interval_ms,
        "quit": not loop.running,
    }


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description='Run a headless snake game from a move script',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('--moves', type=str, default="",
                        help='Per-tick move script, e.g. "UU.RRDD"')
    parser.add_argument('--ticks', type=int, default=None,
                        help='Ticks to run (default: length of the move script)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Seed for apple placement and the start direction')
    parser.add_argument('--width', type=int, default=None, help='Number of cells horizontally')
    parser.add_argument('--height', type=int, default=None, help='Number of cells vertically')
    parser.add_argument('--allow-double-backs', action='store_true',
                        help='Accept any direction change, including straight reversals')
    parser.add_argument('--keep-going', action='store_true',
                        help='Keep ticking after a collision (the snake stays frozen)')
    parser.add_argument('--snapshot', type=str, default=None,
                        help='Save the final frame to this image path (e.g. final.png)')
    parser.add_argument('--quiet', action='store_true', help='Only print the summary')
    parser.add_argument('--env-file', type=str, default=None,
                        help='Path to a .env file with SNAKE_* settings')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        config = load_config(args.env_file).with_overrides(
            grid_width=args.width,
            grid_height=args.height,
            seed=args.seed,
            prevent_double_backs=False if args.allow_double_backs else None,
        ).validate()
        logging.getLogger().setLevel(config.log_level)

        summary = run_simulation(
            config,
            args.moves,
            ticks=args.ticks,
            show_boards=not args.quiet,
            stop_on_collision=not args.keep_going,
            snapshot_path=args.snapshot
        )
    except ValueError as e:
        logger.error(f"Invalid simulation settings: {e}")
        return 2

    print("\nSimulation Result Summary:")
    print(json.dumps(summary, indent=2))
    return 0


if __name__ == '__main__':
    sys.exit(main())
