"""
GameState entity - a snapshot of the game at a point in time.
"""

from typing import List, Tuple, Optional


class GameState:
    """
    A read-only snapshot of the board, taken once per frame for rendering.

    Attributes:
        tick_number: ticks since the last restart
        width, height: board dimensions
        segments: list of (x, y) from tail to head
        apples: list of (x, y) positions of all apples on the board
        collided: whether the snake has crashed
        collision_position: (x, y) of the crash, or None
        collision_reason: 'self', 'wall' or None
        interval_ms: tick interval currently in effect, or None before the first tick
        next_direction: pending (dx, dy) unit vector, or None
    """

    def __init__(
        self,
        tick_number: int,
        width: int,
        height: int,
        segments: List[Tuple[int, int]],
        apples: List[Tuple[int, int]],
        collided: bool,
        collision_position: Optional[Tuple[int, int]] = None,
        collision_reason: Optional[str] = None,
        interval_ms: Optional[int] = None,
        next_direction: Optional[Tuple[int, int]] = None
    ):
        self.tick_number = tick_number
        self.width = width
        self.height = height
        self.segments = segments
        self.apples = apples
        self.collided = collided
        self.collision_position = collision_position
        self.collision_reason = collision_reason
        self.interval_ms = interval_ms
        self.next_direction = next_direction

    @property
    def head(self) -> Optional[Tuple[int, int]]:
        return self.segments[-1] if self.segments else None

    @property
    def length(self) -> int:
        return len(self.segments)

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        A = apple
        o = snake body
        H = snake head
        X = collision cell
        Row 0 is printed first, matching screen coordinates.
        """
        board = [['.' for _ in range(self.width)] for _ in range(self.height)]

        for ax, ay in self.apples:
            board[ay][ax] = 'A'

        # Body over apples: an apple under the snake is not reachable anyway
        for x, y in self.segments[:-1]:
            board[y][x] = 'o'
        if self.segments:
            hx, hy = self.segments[-1]
            board[hy][hx] = 'H'

        if self.collided and self.collision_position is not None:
            cx, cy = self.collision_position
            board[cy][cx] = 'X'

        result = [f"{y:2d} {' '.join(board[y])}" for y in range(self.height)]
        # Only the last digit fits in a single-character column
        result.append("   " + " ".join(str(i % 10) for i in range(self.width)))

        return "\n".join(result)

    def __repr__(self):
        return (
            f"<GameState tick={self.tick_number}, length={self.length}, "
            f"apples={self.apples}, collided={self.collided}, interval={self.interval_ms}>"
        )
