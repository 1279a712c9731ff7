"""
Drawing Intermediate Representation module.

Defines the recognized instructions and the segment they produce as
immutable dataclasses.
"""

from ps2svg.ps_ir.operations import (
    LineTo,
    MoveTo,
    Operation,
    Segment,
    SetLineWidth,
)

__all__ = [
    "LineTo",
    "MoveTo",
    "Operation",
    "Segment",
    "SetLineWidth",
]
