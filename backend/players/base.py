"""
Base player interface for the game engine.
"""

from typing import List

from domain.game_state import GameState


class Player:
    """
    Base class/interface for input sources.

    A player is polled by the game loop and answers with the commands that
    should be applied before the next tick is due.
    """

    name = "player"

    def get_moves(self, game_state: GameState) -> List[str]:
        """
        Return the commands to apply now, in order.

        Args:
            game_state: Current state of the game

        Returns:
            A possibly empty list of "UP", "DOWN", "LEFT", "RIGHT",
            "RESTART" or "QUIT".
        """
        raise NotImplementedError
