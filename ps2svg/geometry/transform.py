"""Geometry transformer: source segments → canvas pixel segments.

For every endpoint::

    px = (x - min_x) * scale
    py = (y - min_y) * scale

then, per reversed axis, ``p = extent - p`` where ``extent`` is the canvas
size along that axis.  Reversal is its own inverse.  Widths are copied
unchanged.

The map is pure and applied to all segments at once as a numpy array, so
output order is input order.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ps2svg.geometry.bbox import Frame, segments_to_array
from ps2svg.ps_ir.operations import Segment


def reverse_axis(value, extent: float):
    """Mirror *value* about ``extent / 2``."""
    return extent - value


def transform_array(points: np.ndarray, frame: Frame) -> np.ndarray:
    """Transform an (N, 4) array of ``x0, y0, x1, y1`` rows.

    Returns a new array; *points* is not modified.
    """
    out = np.array(points, dtype=np.float64, copy=True)
    if out.size == 0:
        return out.reshape(0, 4)

    min_x, min_y = frame.origin
    out[:, [0, 2]] = (out[:, [0, 2]] - min_x) * frame.scale
    out[:, [1, 3]] = (out[:, [1, 3]] - min_y) * frame.scale

    if frame.reverse_x:
        out[:, [0, 2]] = reverse_axis(out[:, [0, 2]], frame.width)
    if frame.reverse_y:
        out[:, [1, 3]] = reverse_axis(out[:, [1, 3]], frame.height)
    return out


def transform_segments(segments: Sequence[Segment], frame: Frame) -> list[Segment]:
    """Map source segments into canvas pixels, preserving order and widths."""
    pts = transform_array(segments_to_array(segments), frame)
    return [
        Segment(float(row[0]), float(row[1]), float(row[2]), float(row[3]), seg.width)
        for row, seg in zip(pts, segments)
    ]


def transform_segment(segment: Segment, frame: Frame) -> Segment:
    """Single-segment form of ``transform_segments``."""
    return transform_segments([segment], frame)[0]
