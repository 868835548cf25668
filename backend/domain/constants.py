"""
Game constants for the grid snake game.
"""

from .position import Position

# Movement directions
UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

# Screen coordinates: y grows downward
DIRECTION_VECTORS = {
    UP: Position(0, -1),
    RIGHT: Position(1, 0),
    DOWN: Position(0, 1),
    LEFT: Position(-1, 0),
}

# Non-movement commands
RESTART = "RESTART"
QUIT = "QUIT"
VALID_COMMANDS = VALID_MOVES | {RESTART, QUIT}

# Collision reasons
SELF_COLLISION = "self"
WALL_COLLISION = "wall"

# Game settings
GRID_WIDTH = 20
GRID_HEIGHT = 20
SPAWN_APPLE_COUNT = 3
START_SNAKE_LENGTH = 3

# Tick interval in ms: starts slow and speeds up per segment down to a floor
START_INTERVAL_MS = 500
INTERVAL_STEP_MS = 15
MIN_INTERVAL_MS = 20
