"""Drawing IR -- the vocabulary between PostScript text and geometry.

Every recognized instruction is an immutable, slotted dataclass.  The
extractor parses a text line into one of these operations and applies it
to the pen; ``LineTo`` is the only operation that produces a ``Segment``.

All coordinates are in **source units** (whatever the plotting tool wrote).
Pixel-space values only appear after ``geometry.transform``.
"""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Base class
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Operation(ABC):
    """Base class for all drawing operations."""

    pass


# ---------------------------------------------------------------------------
# Instructions
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class MoveTo(Operation):
    """``<x> <y> m`` -- reposition the pen without drawing."""

    x: float
    y: float


@dataclass(frozen=True, slots=True)
class LineTo(Operation):
    """``<x> <y> l`` -- draw from the current position to ``(x, y)``."""

    x: float
    y: float


@dataclass(frozen=True, slots=True)
class SetLineWidth(Operation):
    """``<w> w`` -- stroke width for every following segment.

    Parameters
    ----------
    width : float
        Non-negative stroke width in source units, written unchanged to
        ``stroke-width``.
    """

    width: float

    def __post_init__(self) -> None:
        if self.width < 0:
            raise ValueError(f"width must be >= 0, got {self.width}")


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Segment:
    """One straight stroke between two endpoints.

    Parameters
    ----------
    x0, y0 : float
        Start point (the pen position before ``LineTo``).
    x1, y1 : float
        End point.
    width : float
        Stroke width in effect when the segment was drawn.
    """

    x0: float
    y0: float
    x1: float
    y1: float
    width: float

    @property
    def is_degenerate(self) -> bool:
        """True for a zero-length segment (still emitted)."""
        return self.x0 == self.x1 and self.y0 == self.y1
