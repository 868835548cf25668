"""
Position value type for grid cells and direction vectors.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Position:
    """
    A single grid coordinate (or a translation vector).

    Positions compare and hash by value, so they can be used directly in
    lists, sets and dict keys.
    """

    x: int
    y: int

    def __add__(self, other: "Position") -> "Position":
        if not isinstance(other, Position):
            return NotImplemented
        return Position(self.x + other.x, self.y + other.y)

    def scaled(self, factor: int) -> "Position":
        return Position(self.x * factor, self.y * factor)

    def is_unit_vector(self) -> bool:
        """True when exactly one axis is +/-1 and the other is 0."""
        return {abs(self.x), abs(self.y)} == {0, 1}

    def in_bounds(self, width: int, height: int) -> bool:
        return 0 <= self.x < width and 0 <= self.y < height

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def __repr__(self):
        return f"Position({self.x}, {self.y})"
