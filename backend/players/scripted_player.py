"""
Scripted player - replays a fixed per-tick command sequence.
"""

from typing import Iterable, List, Optional, Union

from domain.constants import UP, DOWN, LEFT, RIGHT, RESTART, QUIT, VALID_COMMANDS
from domain.game_state import GameState
from .base import Player

# Compact script letters; '.' means no input for that tick
SCRIPT_LETTERS = {
    "U": UP,
    "R": RIGHT,
    "D": DOWN,
    "L": LEFT,
    "X": RESTART,
    "Q": QUIT,
    ".": None,
}


def parse_script(script: Union[str, Iterable[Optional[str]]]) -> List[Optional[str]]:
    """
    Turn a script into a list of per-tick commands.

    Accepts either a compact string such as "UR..DL" (whitespace ignored) or
    an iterable of command names / None.
    """
    if isinstance(script, str):
        commands = []
        for letter in script.upper():
            if letter.isspace():
                continue
            if letter not in SCRIPT_LETTERS:
                raise ValueError(
                    f"Unknown script letter {letter!r}. Use one of: {''.join(SCRIPT_LETTERS)}"
                )
            commands.append(SCRIPT_LETTERS[letter])
        return commands

    commands = []
    for command in script:
        if command is not None and command not in VALID_COMMANDS:
            raise ValueError(f"Unknown command {command!r}.")
        commands.append(command)
    return commands


class ScriptedPlayer(Player):
    """
    Issues script[n] once, just before tick n + 1 runs.

    Used for headless simulations and reproducible games: the tick number
    in the game state tells the player which entry is due.
    """

    name = "scripted"

    def __init__(self, script: Union[str, Iterable[Optional[str]]]):
        self.script = parse_script(script)
        self.last_tick_seen: Optional[int] = None
        self.position = 0

    @property
    def exhausted(self) -> bool:
        return self.position >= len(self.script)

    def get_moves(self, game_state: GameState) -> List[str]:
        if game_state.tick_number == self.last_tick_seen or self.exhausted:
            return []
        self.last_tick_seen = game_state.tick_number
        command = self.script[self.position]
        self.position += 1
        if command == RESTART:
            # The board's tick counter restarts at 0; wait for the next tick after it
            self.last_tick_seen = 0
        return [command] if command is not None else []
