# viewport.py
"""
Conversion between window pixels and simulation world coordinates.

The window uses pygame's convention: origin in the top-left corner, y
pointing down. The world is centred on the window with y pointing up, so
it spans [-width/2, width/2] x [-height/2, height/2].
"""
from typing import Optional, Tuple

Point = Tuple[float, float]


class Viewport:
    """A 2D camera that maps the whole window onto the world, one pixel per unit."""

    def __init__(self, width: int, height: int):
        self.resize(width, height)

    def resize(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Viewport size must be positive, got {width}x{height}.")
        self.width = width
        self.height = height

    @property
    def half_extents(self) -> Point:
        return self.width / 2, self.height / 2

    def contains(self, window_pos: Point) -> bool:
        x, y = window_pos
        return 0 <= x < self.width and 0 <= y < self.height

    def window_to_world(self, window_pos: Optional[Point]) -> Optional[Point]:
        """
        Returns the world position under a window pixel, or None when the
        cursor is absent or outside the window.
        """
        if window_pos is None or not self.contains(window_pos):
            return None
        x, y = window_pos
        return x - self.width / 2, self.height / 2 - y

    def world_to_window(self, world_pos: Point) -> Point:
        x, y = world_pos
        return x + self.width / 2, self.height / 2 - y
