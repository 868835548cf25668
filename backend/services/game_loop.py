"""
Game loop: turns elapsed wall-clock time and player commands into ticks.

The loop owns the only tick timer. Each tick's TickResult may carry a new
interval, which the loop applies to the timer itself, so the board never
calls back into its controller.
"""

import logging
from typing import List, Optional

from domain.board import Board, TickResult
from domain.constants import VALID_MOVES, RESTART, QUIT
from players.base import Player

logger = logging.getLogger(__name__)


class TickTimer:
    """
    Accumulates elapsed milliseconds and releases one tick per interval.

    With coalesce enabled (the default) a stall never produces a burst of
    catch-up ticks: at most one tick is released per advance().
    """

    def __init__(self, interval_ms: int, coalesce: bool = True):
        self.interval_ms = self._check_interval(interval_ms)
        self.coalesce = coalesce
        self.accumulated_ms = 0

    @staticmethod
    def _check_interval(interval_ms: int) -> int:
        if interval_ms <= 0:
            raise ValueError(f"Tick interval must be positive, got {interval_ms} ms.")
        return interval_ms

    def set_interval(self, interval_ms: int):
        """Retime the timer; time already accumulated counts toward the new interval."""
        self.interval_ms = self._check_interval(interval_ms)

    def advance(self, elapsed_ms: int):
        if elapsed_ms < 0:
            raise ValueError(f"Elapsed time cannot be negative, got {elapsed_ms} ms.")
        self.accumulated_ms += elapsed_ms

    def pop_tick(self) -> bool:
        """Consume one interval if a tick is due."""
        if self.accumulated_ms < self.interval_ms:
            return False
        self.accumulated_ms -= self.interval_ms
        if self.coalesce and self.accumulated_ms >= self.interval_ms:
            self.accumulated_ms %= self.interval_ms
        return True

    def time_until_tick(self) -> int:
        return max(self.interval_ms - self.accumulated_ms, 0)

    def reset(self):
        self.accumulated_ms = 0


class GameLoop:
    """
    Manages:
      - The board
      - One player (input source)
      - The tick timer and its interval
      - The flashing collision indicator
      - Whether the loop should keep running
    """

    def __init__(self, board: Board, player: Player, start_interval_ms: Optional[int] = None):
        self.board = board
        self.player = player
        self.timer = TickTimer(board.start_interval_ms if start_interval_ms is None else start_interval_ms)
        self.running = True
        # Toggled every tick after a collision so the crash cell blinks
        self.flash_on = True

    def dispatch(self, command: str):
        """Apply a single command immediately."""
        if command in VALID_MOVES:
            self.board.request_direction(command)
        elif command == RESTART:
            self.board.restart()
            self.timer.reset()
            self.flash_on = True
        elif command == QUIT:
            logger.info("Quit requested")
            self.running = False
        else:
            raise ValueError(f"Unknown command {command!r}.")

    def poll_player(self):
        for command in self.player.get_moves(self.board.get_current_state()):
            self.dispatch(command)
            if not self.running:
                break

    def step(self, elapsed_ms: int) -> List[TickResult]:
        """
        Advance the loop by elapsed_ms:
          1) Apply whatever the player has queued
          2) Run the tick that is due (every owed tick when the timer does not coalesce)
          3) Retime the timer when a tick reports a new interval
        """
        results: List[TickResult] = []
        if not self.running:
            return results

        self.poll_player()
        if not self.running:
            return results

        self.timer.advance(elapsed_ms)
        while self.timer.pop_tick():
            result = self.board.tick()
            if result.interval_changed:
                self.timer.set_interval(result.interval_ms)
            if result.collided_this_tick:
                state = self.board.get_current_state()
                logger.info(f"Game over after {state.tick_number} ticks with length {state.length}")
            if result.collided:
                self.flash_on = not self.flash_on
            results.append(result)
            # A retime can leave a full new interval already accumulated
            if self.timer.coalesce:
                break
        return results

    def run_ticks(self, count: int) -> List[TickResult]:
        """Run exactly count ticks (or until quit), feeding the timer just enough time for each."""
        results: List[TickResult] = []
        for _ in range(count):
            if not self.running:
                break
            results.extend(self.step(self.timer.time_until_tick()))
        return results
