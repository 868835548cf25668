"""
Runtime configuration for the snake game.

Values come from the environment (optionally via a .env file) and fall back
to the original game's tuning. Command-line flags in main.py and
cli/simulate.py override them.
"""

import os
from dataclasses import dataclass, replace
from typing import Optional

from dotenv import load_dotenv

from domain.constants import (
    GRID_WIDTH,
    GRID_HEIGHT,
    SPAWN_APPLE_COUNT,
    START_SNAKE_LENGTH,
    START_INTERVAL_MS,
    INTERVAL_STEP_MS,
    MIN_INTERVAL_MS,
)

CELL_SIZE = 32  # Size of each grid cell in pixels
LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _sanitize_env_value(value: Optional[str]) -> Optional[str]:
    """
    Clean up env-provided strings that may include surrounding quotes or whitespace.
    """
    if value is None:
        return None
    cleaned = value.strip()
    if len(cleaned) >= 2 and (
        (cleaned[0] == '"' and cleaned[-1] == '"') or (cleaned[0] == "'" and cleaned[-1] == "'")
    ):
        cleaned = cleaned[1:-1].strip()
    return cleaned or None


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = _sanitize_env_value(os.getenv(name))
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _env_bool(name: str, default: bool) -> bool:
    raw = _sanitize_env_value(os.getenv(name))
    if raw is None:
        return default
    lowered = raw.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean (true/false), got {raw!r}")


@dataclass
class GameConfig:
    """Grid size, apple batches, difficulty curve and presentation settings."""

    grid_width: int = GRID_WIDTH
    grid_height: int = GRID_HEIGHT
    cell_size: int = CELL_SIZE
    spawn_apple_count: int = SPAWN_APPLE_COUNT
    start_snake_length: int = START_SNAKE_LENGTH
    start_interval_ms: int = START_INTERVAL_MS
    interval_step_ms: int = INTERVAL_STEP_MS
    min_interval_ms: int = MIN_INTERVAL_MS
    prevent_double_backs: bool = True
    seed: Optional[int] = None
    log_level: str = "INFO"

    def validate(self) -> "GameConfig":
        """
        Reject settings the engine cannot run with.

        Raises:
            ValueError: naming the first bad setting.
        """
        if self.grid_width <= 0 or self.grid_height <= 0:
            raise ValueError(f"Grid must be at least 1x1, got {self.grid_width}x{self.grid_height}")
        if self.cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {self.cell_size}")
        if self.spawn_apple_count < 1:
            raise ValueError(f"spawn_apple_count must be at least 1, got {self.spawn_apple_count}")
        if self.start_snake_length < 1:
            raise ValueError(f"start_snake_length must be at least 1, got {self.start_snake_length}")
        # The snake starts at the centre and extends along a random axis
        if self.start_snake_length - 1 > min((self.grid_width - 1) // 2, (self.grid_height - 1) // 2):
            raise ValueError(
                f"A snake of length {self.start_snake_length} does not fit from the centre of a "
                f"{self.grid_width}x{self.grid_height} grid"
            )
        if self.min_interval_ms <= 0:
            raise ValueError(f"min_interval_ms must be positive, got {self.min_interval_ms}")
        if self.start_interval_ms < self.min_interval_ms:
            raise ValueError(
                f"start_interval_ms ({self.start_interval_ms}) must not be below "
                f"min_interval_ms ({self.min_interval_ms})"
            )
        if self.interval_step_ms < 0:
            raise ValueError(f"interval_step_ms must not be negative, got {self.interval_step_ms}")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(LOG_LEVELS)}, got {self.log_level!r}")
        return self

    def with_overrides(self, **overrides) -> "GameConfig":
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)


def load_config(env_file: Optional[str] = None) -> GameConfig:
    """
    Build a GameConfig from SNAKE_* environment variables.

    Args:
        env_file: optional path to a .env file; by default python-dotenv
                  searches upward from the working directory.
    """
    load_dotenv(env_file)

    config = GameConfig(
        grid_width=_env_int("SNAKE_GRID_WIDTH", GRID_WIDTH),
        grid_height=_env_int("SNAKE_GRID_HEIGHT", GRID_HEIGHT),
        cell_size=_env_int("SNAKE_CELL_SIZE", CELL_SIZE),
        spawn_apple_count=_env_int("SNAKE_SPAWN_APPLE_COUNT", SPAWN_APPLE_COUNT),
        start_snake_length=_env_int("SNAKE_START_LENGTH", START_SNAKE_LENGTH),
        start_interval_ms=_env_int("SNAKE_START_INTERVAL_MS", START_INTERVAL_MS),
        interval_step_ms=_env_int("SNAKE_INTERVAL_STEP_MS", INTERVAL_STEP_MS),
        min_interval_ms=_env_int("SNAKE_MIN_INTERVAL_MS", MIN_INTERVAL_MS),
        prevent_double_backs=_env_bool("SNAKE_PREVENT_DOUBLE_BACKS", True),
        seed=_env_int("SNAKE_SEED", None),
        log_level=(_sanitize_env_value(os.getenv("SNAKE_LOG_LEVEL")) or "INFO").upper(),
    )
    return config.validate()
