"""Bounding-box normalization: source extents → uniform pixel scale.

Provides:
    - Segment list → (N, 4) endpoint array
    - Bounding box over both endpoints of every segment
    - Uniform scale factor: target_size / max(extent_x, extent_y)
    - Canvas sizing in ``fit`` (scaled bbox) or ``fixed`` (square) mode
    - Degenerate-geometry policy (no segments, or zero extent)

The result is a ``Frame``, which the transformer and SVG emitter share.
A frame never carries a NaN or infinite scale.

Degenerate inputs:
    - No segments: ``on_empty="empty"`` gives a square ``target_size``
      canvas with nothing on it; ``on_empty="error"`` raises
      ``NoDrawableGeometryError``.
    - Zero extent on both axes: scale is 1.0 and the canvas is square,
      so every segment collapses onto the origin; ``on_empty="error"``
      raises instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ps2svg.ps_ir.operations import Segment

logger = logging.getLogger(__name__)

DEFAULT_TARGET_SIZE = 800

CANVAS_MODES = ("fit", "fixed")
REVERSE_CHOICES = ("none", "x", "y", "xy")
EMPTY_POLICIES = ("empty", "error")


class GeometryError(Exception):
    """Raised when geometry cannot be normalized."""

    pass


class NoDrawableGeometryError(GeometryError):
    """Raised in strict mode when there is nothing with a non-zero extent."""

    pass


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box around all segment endpoints (source units)."""

    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def extent_x(self) -> float:
        return self.max_x - self.min_x

    @property
    def extent_y(self) -> float:
        return self.max_y - self.min_y

    @property
    def max_extent(self) -> float:
        return max(self.extent_x, self.extent_y)


@dataclass(frozen=True)
class Frame:
    """Everything needed to map source coordinates onto the canvas.

    Attributes
    ----------
    bbox : BoundingBox | None
        Source bounding box; ``None`` when there are no segments.
    scale : float
        Pixels per source unit, finite and positive.
    width, height : float
        Canvas size in pixels.
    reverse_x, reverse_y : bool
        Mirror the axis about the canvas centre line.
    """

    bbox: BoundingBox | None
    scale: float
    width: float
    height: float
    reverse_x: bool = False
    reverse_y: bool = False

    @property
    def origin(self) -> tuple[float, float]:
        if self.bbox is None:
            return (0.0, 0.0)
        return (self.bbox.min_x, self.bbox.min_y)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def segments_to_array(segments: Sequence[Segment]) -> np.ndarray:
    """Pack endpoints into a float64 array of shape (N, 4): x0, y0, x1, y1."""
    if not segments:
        return np.empty((0, 4), dtype=np.float64)
    return np.array(
        [(s.x0, s.y0, s.x1, s.y1) for s in segments],
        dtype=np.float64,
    )


def compute_bbox(segments: Sequence[Segment]) -> BoundingBox | None:
    """Fold both endpoints of every segment into a bounding box.

    Returns
    -------
    BoundingBox | None
        ``None`` for an empty sequence (no sentinel extents).
    """
    if not segments:
        return None
    pts = segments_to_array(segments)
    xs = pts[:, [0, 2]]
    ys = pts[:, [1, 3]]
    return BoundingBox(
        min_x=float(xs.min()),
        max_x=float(xs.max()),
        min_y=float(ys.min()),
        max_y=float(ys.max()),
    )


def compute_scale(bbox: BoundingBox | None, target_size: float) -> float:
    """``target_size / max(extent_x, extent_y)``; 1.0 when that extent is zero."""
    if target_size <= 0:
        raise GeometryError(f"target_size must be > 0, got {target_size}")
    if bbox is None or bbox.max_extent <= 0.0:
        return 1.0
    return target_size / bbox.max_extent


def parse_reverse(reverse: str) -> tuple[bool, bool]:
    """Map ``none|x|y|xy`` to ``(reverse_x, reverse_y)``."""
    if reverse not in REVERSE_CHOICES:
        raise GeometryError(f"reverse must be one of {REVERSE_CHOICES}, got {reverse!r}")
    return ("x" in reverse, "y" in reverse)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def normalize(
    segments: Sequence[Segment],
    *,
    target_size: float = DEFAULT_TARGET_SIZE,
    mode: str = "fit",
    reverse: str = "none",
    on_empty: str = "empty",
) -> Frame:
    """Derive the output frame for *segments*.

    Parameters
    ----------
    segments : Sequence[Segment]
        Source-space segments (read only).
    target_size : float
        Pixel length of the larger canvas side.
    mode : ``"fit"`` | ``"fixed"``
        ``fit``: canvas is ``(extent_x * scale, extent_y * scale)``.
        ``fixed``: canvas is ``target_size x target_size``.
    reverse : ``"none"`` | ``"x"`` | ``"y"`` | ``"xy"``
        Axes to mirror in the transformer.
    on_empty : ``"empty"`` | ``"error"``
        Degenerate-geometry policy (see module docstring).

    Returns
    -------
    Frame

    Raises
    ------
    NoDrawableGeometryError
        If *on_empty* is ``"error"`` and there is no drawable extent.
    GeometryError
        On an invalid mode, reversal or target size.
    """
    if mode not in CANVAS_MODES:
        raise GeometryError(f"mode must be one of {CANVAS_MODES}, got {mode!r}")
    if on_empty not in EMPTY_POLICIES:
        raise GeometryError(f"on_empty must be one of {EMPTY_POLICIES}, got {on_empty!r}")
    reverse_x, reverse_y = parse_reverse(reverse)

    bbox = compute_bbox(segments)
    scale = compute_scale(bbox, target_size)
    size = float(target_size)

    if bbox is None or bbox.max_extent <= 0.0:
        reason = "no segments" if bbox is None else f"{len(segments)} segments with zero extent"
        if on_empty == "error":
            raise NoDrawableGeometryError(f"No drawable geometry: {reason}")
        logger.warning("No drawable geometry (%s), emitting %gx%g canvas", reason, size, size)
        return Frame(bbox, scale, size, size, reverse_x, reverse_y)

    if mode == "fixed":
        width = height = size
    else:
        width = bbox.extent_x * scale
        height = bbox.extent_y * scale

    logger.debug(
        "bbox x=[%g, %g] y=[%g, %g], scale=%g, canvas=%gx%g",
        bbox.min_x, bbox.max_x, bbox.min_y, bbox.max_y, scale, width, height,
    )
    return Frame(bbox, scale, width, height, reverse_x, reverse_y)
