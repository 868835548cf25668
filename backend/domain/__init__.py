"""
Domain entities for the grid snake game engine.

This module contains the core game entities that are independent of
input and rendering concerns (keyboard, windows, images).
"""

from .constants import (
    UP, DOWN, LEFT, RIGHT, VALID_MOVES, DIRECTION_VECTORS,
    RESTART, QUIT, VALID_COMMANDS,
)
from .position import Position
from .snake import Snake
from .game_state import GameState
from .board import Board, TickResult

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES', 'DIRECTION_VECTORS',
    'RESTART', 'QUIT', 'VALID_COMMANDS',
    'Position',
    'Snake',
    'GameState',
    'Board',
    'TickResult',
]
