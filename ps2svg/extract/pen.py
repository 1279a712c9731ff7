"""Plotter pen state: current position and stroke width."""

from __future__ import annotations

from ps2svg.ps_ir.operations import Segment

DEFAULT_WIDTH = 1.0


class Pen:
    """Mutable pen owned by one extraction scan.

    Attributes
    ----------
    x, y : float
        Current position in source units, initially ``(0, 0)``.
    width : float
        Stroke width used by the next ``lineto``, initially 1.0.
    """

    def __init__(self, x: float = 0.0, y: float = 0.0, width: float = DEFAULT_WIDTH) -> None:
        self.x = x
        self.y = y
        self.width = width

    def __repr__(self) -> str:
        return f"Pen(x={self.x!r}, y={self.y!r}, width={self.width!r})"

    def moveto(self, x: float, y: float) -> None:
        self.x = x
        self.y = y

    def lineto(self, x: float, y: float) -> Segment:
        """Draw to ``(x, y)`` and return the segment from the previous position."""
        segment = Segment(self.x, self.y, x, y, self.width)
        self.moveto(x, y)
        return segment
