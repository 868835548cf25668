"""
Keyboard player - maps key names to game commands.
"""

import logging
from typing import List, Optional

from domain.constants import UP, DOWN, LEFT, RIGHT, RESTART, QUIT
from domain.game_state import GameState
from .base import Player

logger = logging.getLogger(__name__)

# Arrow keys and WASD steer, R restarts at any time, Escape quits.
# Names follow pygame.key.name().
KEY_BINDINGS = {
    "up": UP,
    "w": UP,
    "right": RIGHT,
    "d": RIGHT,
    "down": DOWN,
    "s": DOWN,
    "left": LEFT,
    "a": LEFT,
    "r": RESTART,
    "escape": QUIT,
}


class KeyboardPlayer(Player):
    """
    Buffers key presses until the game loop polls for them.

    Every press is kept, so several turns typed between two ticks each go
    through the double-back guard in order.
    """

    name = "keyboard"

    def __init__(self):
        self.pending: List[str] = []

    def press(self, key_name: str) -> Optional[str]:
        """Record a key press. Returns the mapped command, or None for unbound keys."""
        command = KEY_BINDINGS.get(key_name.lower())
        if command is None:
            return None
        self.pending.append(command)
        logger.debug(f"Key '{key_name}' -> {command}")
        return command

    def get_moves(self, game_state: GameState) -> List[str]:
        commands, self.pending = self.pending, []
        return commands
