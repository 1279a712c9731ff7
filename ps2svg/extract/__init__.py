"""
Text-to-geometry extraction.

Pen state plus the marker-gated line scanner that turns instruction lines
into segments.
"""

from ps2svg.extract.extractor import (
    CommandExtractor,
    ExtractionResult,
    ScanState,
    extract_file,
    normalize_line,
    parse_instruction,
)
from ps2svg.extract.pen import Pen

__all__ = [
    "CommandExtractor",
    "ExtractionResult",
    "Pen",
    "ScanState",
    "extract_file",
    "normalize_line",
    "parse_instruction",
]
