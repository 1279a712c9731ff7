"""
Geometry normalization and transforms.

Bounding box → scale → frame, then the per-segment map into canvas pixels.
"""

from ps2svg.geometry.bbox import (
    BoundingBox,
    Frame,
    GeometryError,
    NoDrawableGeometryError,
    compute_bbox,
    compute_scale,
    normalize,
)
from ps2svg.geometry.transform import (
    reverse_axis,
    transform_array,
    transform_segment,
    transform_segments,
)

__all__ = [
    "BoundingBox",
    "Frame",
    "GeometryError",
    "NoDrawableGeometryError",
    "compute_bbox",
    "compute_scale",
    "normalize",
    "reverse_axis",
    "transform_array",
    "transform_segment",
    "transform_segments",
]
