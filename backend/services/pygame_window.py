"""
Desktop window for playing the snake game with pygame.

pygame only provides the event pump, the clock and the screen here; all
game rules live in the domain package and every frame is drawn by
FrameRenderer.
"""

import logging

import pygame

from config import GameConfig
from domain.board import Board
from domain.constants import QUIT
from players.keyboard_player import KeyboardPlayer
from services.frame_renderer import FrameRenderer
from services.game_loop import GameLoop

logger = logging.getLogger(__name__)

WINDOW_TITLE = "Snake"
FPS = 60


def _frame_signature(state, flash_on: bool):
    return (state.tick_number, tuple(state.segments), tuple(state.apples), state.collided, flash_on)


def run_window(config: GameConfig):
    """
    Open the game window and run until the player quits.

    Arrow keys / WASD steer, R restarts, Escape or closing the window quits.
    """
    board = Board.from_config(config)
    player = KeyboardPlayer()
    loop = GameLoop(board, player, start_interval_ms=config.start_interval_ms)
    renderer = FrameRenderer(cell_size=config.cell_size)

    pygame.init()
    try:
        screen = pygame.display.set_mode(renderer.frame_size(board.get_current_state()))
        pygame.display.set_caption(WINDOW_TITLE)
        clock = pygame.time.Clock()
        last_signature = None
        logger.info(f"Window opened for a {config.grid_width}x{config.grid_height} grid")

        while loop.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    loop.dispatch(QUIT)
                elif event.type == pygame.KEYDOWN:
                    player.press(pygame.key.name(event.key))

            loop.step(clock.tick(FPS))
            if not loop.running:
                break

            state = board.get_current_state()
            signature = _frame_signature(state, loop.flash_on)
            if signature != last_signature:
                frame = renderer.render(state, flash_on=loop.flash_on)
                surface = pygame.image.frombuffer(frame.tobytes(), frame.size, "RGB")
                screen.blit(surface, (0, 0))
                pygame.display.flip()
                last_signature = signature
    finally:
        pygame.quit()
        logger.info("Window closed")
