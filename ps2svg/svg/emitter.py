"""SVG emitter -- canvas-space segments to an SVG document.

The document is built in memory and written in one go, so the output file
is either complete or untouched::

    <svg version="1.1" baseProfile="full" width="W" height="H" xmlns="http://www.w3.org/2000/svg">
      <line x1="..." y1="..." x2="..." y2="..." stroke="black" stroke-width="..." />
    </svg>

One ``<line>`` per segment in input order, zero-length segments included.
Canvas numbers are written with at most ``precision`` decimals and no
trailing zeros.  Stroke widths stay in source units and are written with
the shortest text that round-trips, so thin strokes never round to zero.
"""

from __future__ import annotations

import logging
import math
import sys
from io import StringIO
from pathlib import Path
from typing import Sequence

import numpy as np

from ps2svg.geometry.bbox import Frame
from ps2svg.ps_ir.operations import Segment
from ps2svg.utils import fs

logger = logging.getLogger(__name__)

SVG_NAMESPACE = "http://www.w3.org/2000/svg"
STROKE_COLOR = "black"
DEFAULT_PRECISION = 3


class SVGError(Exception):
    """Raised when a value cannot be written as an SVG number."""

    pass


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def format_number(value: float, precision: int = DEFAULT_PRECISION) -> str:
    """Shortest fixed-point text for *value* with at most *precision* decimals.

    Raises
    ------
    SVGError
        If *value* is NaN or infinite.
    """
    if not math.isfinite(value):
        raise SVGError(f"Non-finite value cannot be written to SVG: {value}")
    text = f"{value:.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


def format_width(value: float) -> str:
    """Shortest round-trip positional text for a stroke width.

    Raises
    ------
    SVGError
        If *value* is NaN or infinite.
    """
    if not math.isfinite(value):
        raise SVGError(f"Non-finite stroke width cannot be written to SVG: {value}")
    text = np.format_float_positional(value, trim="-")
    if text == "-0":
        text = "0"
    return text


# ---------------------------------------------------------------------------
# Emitter
# ---------------------------------------------------------------------------


class SVGEmitter:
    """Render canvas-space segments as an SVG document.

    Parameters
    ----------
    precision : int
        Maximum decimals for coordinates and canvas size.
    """

    def __init__(self, precision: int = DEFAULT_PRECISION) -> None:
        if precision < 0:
            raise ValueError(f"precision must be >= 0, got {precision}")
        self._precision = precision

    def generate(self, segments: Sequence[Segment], frame: Frame) -> str:
        """Build the complete document.

        Parameters
        ----------
        segments : Sequence[Segment]
            Segments already in canvas pixels (see ``geometry.transform``).
        frame : Frame
            Supplies the canvas width and height.

        Returns
        -------
        str
            SVG document text, newline-terminated.
        """
        buf = StringIO()
        self._write_header(buf, frame)
        for seg in segments:
            self._write_line(buf, seg)
        self._write_footer(buf)
        return buf.getvalue()

    def _num(self, value: float) -> str:
        return format_number(value, self._precision)

    def _write_header(self, buf: StringIO, frame: Frame) -> None:
        buf.write(
            f'<svg version="1.1" baseProfile="full" '
            f'width="{self._num(frame.width)}" height="{self._num(frame.height)}" '
            f'xmlns="{SVG_NAMESPACE}">\n'
        )

    def _write_line(self, buf: StringIO, seg: Segment) -> None:
        buf.write(
            f'  <line x1="{self._num(seg.x0)}" y1="{self._num(seg.y0)}" '
            f'x2="{self._num(seg.x1)}" y2="{self._num(seg.y1)}" '
            f'stroke="{STROKE_COLOR}" stroke-width="{format_width(seg.width)}" />\n'
        )

    def _write_footer(self, buf: StringIO) -> None:
        buf.write("</svg>\n")


def write_svg(path: str | Path, document: str) -> None:
    """Write *document* atomically, or to stdout when *path* is ``"-"``."""
    if str(path) == "-":
        sys.stdout.write(document)
        sys.stdout.flush()
        return
    fs.atomic_write_text(path, document)
    logger.info("Wrote %d bytes to %s", len(document.encode("utf-8")), path)
