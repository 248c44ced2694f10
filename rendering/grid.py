"""Grid rendering for spatial reference."""

from OpenGL.GL import *
from config import particles as config


class Grid:
    """Draws a faint square grid across the whole window."""

    def __init__(self):
        self.spacing = config.GRID["spacing"]
        self.color = config.GRID["color"]

    def draw(self, width: int, height: int):
        """
        Draw the grid.

        Args:
            width: Window width in pixels
            height: Window height in pixels
        """
        s = self.spacing

        glBegin(GL_LINES)
        glColor4f(*self.color)

        # Vertical lines
        for x in range(0, int(width) + 1, s):
            glVertex2f(x, 0); glVertex2f(x, height)

        # Horizontal lines
        for y in range(0, int(height) + 1, s):
            glVertex2f(0, y); glVertex2f(width, y)

        glEnd()
