"""
Frame rendering for the snake game.

Draws a GameState snapshot into a Pillow image:
- Black board, one square per cell
- Apples as full green cells
- Snake segments as white cells inset by one pixel
- A flashing red cell where the snake crashed
- A centred game-over message once the snake has collided

The window blits these frames as-is and the headless simulator can save
the final one as a PNG.
"""

import logging
from typing import Tuple

from PIL import Image, ImageDraw, ImageFont

from domain.game_state import GameState

logger = logging.getLogger(__name__)

CELL_SIZE = 32  # Size of each grid cell in pixels
END_MESSAGE = "Game Over! Press R to Restart."


class ColorScheme:
    """Colors of the original Swing board"""

    BACKGROUND = "#000000"
    APPLE = "#00FF00"
    SNAKE = "#FFFFFF"
    COLLISION = "#FF0000"
    END_TEXT = "#800000"


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert hex color to RGB tuple"""
    hex_color = hex_color.lstrip('#')
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


class FrameRenderer:
    """Render GameState snapshots to RGB images"""

    def __init__(self, cell_size: int = CELL_SIZE, font_size: int = 20):
        if cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {cell_size}")
        self.cell_size = cell_size

        # Try to load a bold font, fallback to default if not available
        try:
            self.font = ImageFont.truetype("DejaVuSans-Bold.ttf", font_size)
        except OSError:
            logger.debug("DejaVuSans-Bold.ttf not found, using the default bitmap font")
            self.font = ImageFont.load_default()

    def frame_size(self, game_state: GameState) -> Tuple[int, int]:
        return (game_state.width * self.cell_size, game_state.height * self.cell_size)

    def render(self, game_state: GameState, flash_on: bool = True) -> Image.Image:
        """Render a single frame of the game"""
        img = Image.new('RGB', self.frame_size(game_state), hex_to_rgb(ColorScheme.BACKGROUND))
        draw = ImageDraw.Draw(img)

        for apple_x, apple_y in game_state.apples:
            self._draw_cell(draw, apple_x, apple_y, hex_to_rgb(ColorScheme.APPLE), inset=0)

        for x, y in game_state.segments:
            self._draw_cell(draw, x, y, hex_to_rgb(ColorScheme.SNAKE), inset=1)

        if game_state.collided:
            if flash_on and game_state.collision_position is not None:
                cx, cy = game_state.collision_position
                self._draw_cell(draw, cx, cy, hex_to_rgb(ColorScheme.COLLISION), inset=1)
            self._draw_end_text(draw, img.size)

        return img

    def _draw_cell(self, draw: ImageDraw.ImageDraw, x: int, y: int, color: Tuple[int, int, int], inset: int):
        """Fill one grid cell, shrunk by inset pixels on every side"""
        left = x * self.cell_size + inset
        top = y * self.cell_size + inset
        # Pillow rectangles include their far edge
        right = (x + 1) * self.cell_size - inset - 1
        bottom = (y + 1) * self.cell_size - inset - 1
        draw.rectangle([left, top, right, bottom], fill=color)

    def _draw_end_text(self, draw: ImageDraw.ImageDraw, size: Tuple[int, int]):
        bbox = draw.textbbox((0, 0), END_MESSAGE, font=self.font)
        text_width = bbox[2] - bbox[0]
        text_height = bbox[3] - bbox[1]
        draw.text(
            (size[0] // 2 - text_width // 2, size[1] // 2 - text_height // 2),
            END_MESSAGE,
            fill=hex_to_rgb(ColorScheme.END_TEXT),
            font=self.font
        )
