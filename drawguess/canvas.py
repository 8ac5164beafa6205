"""Drawing surface that records dots and strokes made with the pen."""

from __future__ import annotations

from drawguess.protocol import Color, Ellipse, Line, Point

DOT_DIAMETER = 10
STROKE_WIDTH = 10


class Canvas:
    """Keeps the shapes drawn so far and the state of the pen.

    A press draws a dot; each move draws a stroke from the last pen
    position to the new one.
    """

    def __init__(self, color: Color = Color.RED) -> None:
        self.color = color
        self.items: list[Ellipse | Line] = []
        self.start_point = Point(0.0, 0.0)
        self.end_point = Point(0.0, 0.0)

    def press(self, x: float, y: float) -> Ellipse:
        """Put a dot at the pen position and return it."""
        dot = Ellipse(Point(x, y), self.color)
        self.items.append(dot)
        self.end_point = dot.center
        return dot

    def move(self, x: float, y: float) -> Line:
        """Draw a stroke from the previous pen position and return it."""
        target = Point(x, y)
        stroke = Line(self.end_point, target, self.color)
        self.items.append(stroke)
        self.start_point = self.end_point
        self.end_point = target
        return stroke

    def set_color(self, color: Color) -> None:
        self.color = color

    def add(self, item: Ellipse | Line) -> None:
        """Add a shape drawn elsewhere, keeping its own colour."""
        if not isinstance(item, (Ellipse, Line)):
            raise TypeError(f"cannot draw {type(item).__name__}")
        self.items.append(item)