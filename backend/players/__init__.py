"""
Player implementations for the snake game.

This module contains the input-source abstraction and the implementations
that feed commands into the game loop.
"""

from .base import Player
from .keyboard_player import KeyboardPlayer, KEY_BINDINGS
from .scripted_player import ScriptedPlayer, parse_script

__all__ = [
    'Player',
    'KeyboardPlayer',
    'KEY_BINDINGS',
    'ScriptedPlayer',
    'parse_script',
]
