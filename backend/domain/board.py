"""
Board - owns the apples, the difficulty curve and one simulation tick.
"""

import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Union

from .constants import (
    DIRECTION_VECTORS,
    SPAWN_APPLE_COUNT,
    START_SNAKE_LENGTH,
    START_INTERVAL_MS,
    INTERVAL_STEP_MS,
    MIN_INTERVAL_MS,
)
from .game_state import GameState
from .position import Position
from .snake import Snake

logger = logging.getLogger(__name__)


@dataclass
class TickResult:
    """
    Outcome of one tick.

    interval_changed is the "difficulty changed" event: when it is set the
    caller should retime its tick trigger to interval_ms.
    """

    interval_ms: int
    interval_changed: bool
    grew: bool
    collided: bool
    collided_this_tick: bool


class Board:
    """
    Manages:
      - Board (width, height)
      - The snake
      - Apples, respawned in batches once all are eaten
      - The pending direction and the double-back guard
      - The tick interval derived from snake length
    """

    def __init__(
        self,
        width: int,
        height: int,
        rng: Optional[random.Random] = None,
        spawn_apple_count: int = SPAWN_APPLE_COUNT,
        start_snake_length: int = START_SNAKE_LENGTH,
        start_interval_ms: int = START_INTERVAL_MS,
        interval_step_ms: int = INTERVAL_STEP_MS,
        min_interval_ms: int = MIN_INTERVAL_MS,
        prevent_double_backs: bool = True
    ):
        if spawn_apple_count < 1:
            raise ValueError(f"spawn_apple_count must be at least 1, got {spawn_apple_count}.")
        if start_snake_length < 1:
            raise ValueError(f"start_snake_length must be at least 1, got {start_snake_length}.")
        if min_interval_ms <= 0:
            raise ValueError(f"min_interval_ms must be positive, got {min_interval_ms}.")
        if start_interval_ms < min_interval_ms:
            raise ValueError(
                f"start_interval_ms ({start_interval_ms}) must not be below "
                f"min_interval_ms ({min_interval_ms})."
            )
        if interval_step_ms < 0:
            raise ValueError(f"interval_step_ms must not be negative, got {interval_step_ms}.")
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}.")
        # The start direction is random, so the snake must fit along either axis from the centre
        if start_snake_length - 1 > min((width - 1) // 2, (height - 1) // 2):
            raise ValueError(
                f"A snake of length {start_snake_length} does not fit from the centre of a "
                f"{width}x{height} grid."
            )

        self.width = width
        self.height = height
        self.rng = rng if rng is not None else random.Random()
        self.spawn_apple_count = spawn_apple_count
        self.start_snake_length = start_snake_length
        self.start_interval_ms = start_interval_ms
        self.interval_step_ms = interval_step_ms
        self.min_interval_ms = min_interval_ms
        # When set, direction changes are only allowed onto the other axis
        self.prevent_double_backs = prevent_double_backs

        # Validates the grid dimensions
        self.snake = Snake(width, height)
        # Apples may overlap each other and the snake
        self.apple_positions: List[Position] = []
        self.next_direction: Optional[Position] = None
        self.current_interval: Optional[int] = None
        self.tick_number = 0

        self.restart()

    @classmethod
    def from_config(cls, config, rng: Optional[random.Random] = None) -> "Board":
        """Build a board from a GameConfig, seeding a new rng from config.seed if none is given."""
        if rng is None:
            rng = random.Random(config.seed)
        return cls(
            width=config.grid_width,
            height=config.grid_height,
            rng=rng,
            spawn_apple_count=config.spawn_apple_count,
            start_snake_length=config.start_snake_length,
            start_interval_ms=config.start_interval_ms,
            interval_step_ms=config.interval_step_ms,
            min_interval_ms=config.min_interval_ms,
            prevent_double_backs=config.prevent_double_backs
        )

    def restart(self):
        """
        Pick a random axis and sign for the start direction, recreate the
        snake at the centre of the grid and spawn a fresh batch of apples.
        """
        horizontal = self.rng.randrange(2) == 0
        sign = -1 if self.rng.randrange(2) == 0 else 1
        self.next_direction = Position(sign, 0) if horizontal else Position(0, sign)

        start_pos = Position(self.width // 2, self.height // 2)
        self.snake.create_new_snake(self.start_snake_length, start_pos, self.next_direction)
        self.spawn_apples(self.spawn_apple_count)
        self.tick_number = 0
        logger.info(
            f"Restarted: snake of length {self.start_snake_length} at {start_pos.as_tuple()} "
            f"heading {self.next_direction.as_tuple()}"
        )

    def spawn_apples(self, count: int):
        """
        Replace all apples with count apples anywhere on the board.
        Cells filled by the snake are not excluded.
        """
        if count < 0:
            raise ValueError(f"Cannot spawn a negative number of apples ({count}).")
        self.apple_positions.clear()
        for _ in range(count):
            self.apple_positions.append(
                Position(self.rng.randrange(self.width), self.rng.randrange(self.height))
            )
        logger.debug(f"Spawned {count} apples: {[p.as_tuple() for p in self.apple_positions]}")

    def eat_apple(self, position: Position) -> bool:
        """
        Try to eat an apple at position. This is the apple collector handed
        to Snake.move, so it runs synchronously inside the move.

        Returns:
            True if an apple was removed at position.
        """
        if position in self.apple_positions:
            self.apple_positions.remove(position)
            if not self.apple_positions:
                self.spawn_apples(self.spawn_apple_count)
            return True
        if not self.apple_positions:
            self.spawn_apples(self.spawn_apple_count)
        return False

    def request_direction(self, direction: Union[str, Position]) -> bool:
        """
        Ask for the snake to turn on the next tick.

        With prevent_double_backs enabled, only a switch to the other axis is
        accepted. The check is against the pending direction, not the last
        move actually made, so two quick turns inside one tick can still
        reverse the snake into its neck.

        Returns:
            True if the request became the pending direction.
        """
        vector = self._resolve_direction(direction)

        pending = self.next_direction
        if self.prevent_double_backs and pending is not None:
            same_axis = (vector.x != 0 and pending.x != 0) or (vector.y != 0 and pending.y != 0)
            if same_axis:
                logger.debug(f"Rejected direction {vector.as_tuple()} while pending {pending.as_tuple()}")
                return False

        self.next_direction = vector
        return True

    @staticmethod
    def _resolve_direction(direction: Union[str, Position]) -> Position:
        if isinstance(direction, Position):
            if not direction.is_unit_vector():
                raise ValueError(f"Direction must be a unit vector, got {direction}.")
            return direction
        if isinstance(direction, str) and direction.upper() in DIRECTION_VECTORS:
            return DIRECTION_VECTORS[direction.upper()]
        raise ValueError(f"Unknown direction {direction!r}.")

    def difficulty_for_length(self, length: int) -> int:
        """Tick interval in ms for a snake of the given length."""
        return max(self.start_interval_ms - length * self.interval_step_ms, self.min_interval_ms)

    def tick(self, direction: Optional[Union[str, Position]] = None) -> TickResult:
        """
        Execute one tick:
          1) Apply the optional direction request (double-back guard applies)
          2) Move the snake, eating through eat_apple
          3) Recompute the interval from the snake's length
        """
        if direction is not None:
            self.request_direction(direction)

        was_collided = self.snake.has_collided()
        grew = self.snake.move(self.next_direction, self.eat_apple)
        self.tick_number += 1

        new_interval = self.difficulty_for_length(self.snake.get_length())
        interval_changed = new_interval != self.current_interval
        if interval_changed:
            logger.debug(f"Tick interval changed from {self.current_interval} to {new_interval} ms")
            self.current_interval = new_interval

        collided = self.snake.has_collided()
        return TickResult(
            interval_ms=new_interval,
            interval_changed=interval_changed,
            grew=grew,
            collided=collided,
            collided_this_tick=collided and not was_collided
        )

    def get_current_state(self) -> GameState:
        """
        Return a snapshot of the current board as a GameState.
        """
        snake = self.snake
        return GameState(
            tick_number=self.tick_number,
            width=self.width,
            height=self.height,
            segments=[p.as_tuple() for p in snake.segments],
            apples=[p.as_tuple() for p in self.apple_positions],
            collided=snake.collided,
            collision_position=snake.collision_position.as_tuple() if snake.collided else None,
            collision_reason=snake.collision_reason,
            interval_ms=self.current_interval,
            next_direction=self.next_direction.as_tuple() if self.next_direction else None
        )

    def __repr__(self):
        return (
            f"<Board {self.width}x{self.height}, tick={self.tick_number}, "
            f"apples={len(self.apple_positions)}, snake={self.snake!r}>"
        )
