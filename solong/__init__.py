"""A tile-based puzzle game: collect every item, then reach the exit.

Includes map validation, game state, an XPM reader, a pixel canvas,
a renderer and a pygame window front end.
"""

__version__ = "1.0.0"
__all__ = ["app", "canvas", "colors", "game", "mapcheck", "render", "xpm"]