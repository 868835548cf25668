"""
Snake entity for the game engine.
"""

import logging
from collections import deque
from typing import Callable, Optional

from .constants import SELF_COLLISION, WALL_COLLISION
from .position import Position

logger = logging.getLogger(__name__)

# Called with the cell the head just moved onto; returns True if an apple was eaten there
AppleCollector = Callable[[Position], bool]


class Snake:
    """
    Represents the player's snake on the board.

    Attributes:
        segments: deque of Position from tail at index 0 to head at the end
        collided: whether the snake has hit a wall or itself (terminal)
        collision_position: where the collision happened, for the flashing indicator
        collision_reason: 'self' or 'wall'
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}.")
        self.width = width
        self.height = height
        self.segments = deque()
        self.collided = False
        self.collision_position: Optional[Position] = None
        self.collision_reason: Optional[str] = None

    @property
    def head(self) -> Position:
        """Return the head position (last element)."""
        return self.segments[-1]

    def create_new_snake(self, start_length: int, start_pos: Position, start_direction: Position):
        """
        Place a fresh snake on the grid, clearing any collision.

        The tail sits at start_pos and the body extends along start_direction,
        so the head ends up at start_pos + start_direction * (start_length - 1)
        and the snake initially points the way it is about to travel.
        """
        if start_length < 1:
            raise ValueError(f"Snake must start with at least one segment, got {start_length}.")
        if not start_direction.is_unit_vector():
            raise ValueError(f"Start direction must be a unit vector, got {start_direction}.")

        self.segments = deque(
            start_pos + start_direction.scaled(i) for i in range(start_length)
        )
        self.collided = False
        self.collision_position = None
        self.collision_reason = None

    def move(self, direction: Position, apple_collector: AppleCollector) -> bool:
        """
        Advance the head by one step in direction.

        Does nothing once collided. Self-collision is checked before the
        boundary so the outcome is deterministic. apple_collector is invoked
        exactly once, and only when the move is valid.

        Returns:
            True if the snake ate an apple and grew by one segment.
        """
        if self.collided:
            return False
        if not self.segments:
            raise ValueError("Snake has no segments; call create_new_snake() first.")

        last_head = self.head
        new_head = last_head + direction

        if new_head in self.segments:
            self._collide(new_head, SELF_COLLISION)
            return False

        if not new_head.in_bounds(self.width, self.height):
            # The invalid cell is off the grid, so report the last valid head
            self._collide(last_head, WALL_COLLISION)
            return False

        self.segments.append(new_head)
        if apple_collector(new_head):
            return True
        self.segments.popleft()
        return False

    def _collide(self, position: Position, reason: str):
        self.collided = True
        self.collision_position = position
        self.collision_reason = reason
        logger.info(f"Snake collided ({reason}) at {position.as_tuple()} with length {len(self.segments)}")

    def get_length(self) -> int:
        return len(self.segments)

    def has_collided(self) -> bool:
        return self.collided

    def __repr__(self):
        return (
            f"<Snake length={len(self.segments)}, collided={self.collided}, "
            f"head={self.segments[-1] if self.segments else None}>"
        )
