"""
Services around the game engine: the tick loop, frame rendering and the window.
"""
