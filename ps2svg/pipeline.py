"""End-to-end conversion: instruction text → SVG document.

Stages run strictly in order and never look downstream::

    lines → CommandExtractor → segments → normalize (bbox, scale, canvas)
          → transform_segments → SVGEmitter → file

All geometry is buffered; nothing is written until the whole document
exists, and the file write itself is atomic.

Usage:
    from ps2svg.pipeline import convert_file
    result = convert_file("fort.50", "out.svg")
    print(f"{len(result.segments)} segments on a {result.frame.width}x{result.frame.height} canvas")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from ps2svg.configs.loader import ConverterConfig, default_config
from ps2svg.extract.extractor import CommandExtractor, ExtractionResult, extract_file
from ps2svg.geometry.bbox import Frame, normalize
from ps2svg.geometry.transform import transform_segments
from ps2svg.ps_ir.operations import Segment
from ps2svg.svg.emitter import SVGEmitter, write_svg

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversionResult:
    """Everything produced by one conversion.

    Attributes
    ----------
    document : str
        The SVG text.
    extraction : ExtractionResult
        Source segments plus scan counters.
    frame : Frame
        Bounding box, scale and canvas size used.
    segments : list[Segment]
        Canvas-space segments, in the order they were emitted.
    """

    document: str
    extraction: ExtractionResult
    frame: Frame
    segments: list[Segment]


def render(extraction: ExtractionResult, config: ConverterConfig) -> ConversionResult:
    """Normalize, transform and emit already-extracted segments."""
    canvas = config.canvas
    frame = normalize(
        extraction.segments,
        target_size=canvas.target_size,
        mode=canvas.mode,
        reverse=canvas.reverse,
        on_empty=config.geometry.on_empty,
    )
    pixel_segments = transform_segments(extraction.segments, frame)
    document = SVGEmitter(precision=canvas.precision).generate(pixel_segments, frame)
    return ConversionResult(document, extraction, frame, pixel_segments)


def convert_lines(
    lines: Iterable[str],
    config: Optional[ConverterConfig] = None,
) -> ConversionResult:
    """Convert in-memory lines; no file is written.

    Raises
    ------
    NoDrawableGeometryError
        If ``geometry.on_empty`` is ``"error"`` and nothing is drawable.
    """
    config = config or default_config()
    extractor = CommandExtractor(config.markers.start, config.markers.end)
    return render(extractor.extract(lines), config)


def convert_file(
    input_path: str | Path | None = None,
    output_path: str | Path | None = None,
    config: Optional[ConverterConfig] = None,
) -> ConversionResult:
    """Read *input_path*, write the SVG to *output_path*.

    Parameters
    ----------
    input_path, output_path : str | Path | None
        ``None`` uses ``config.paths``; ``"-"`` means stdin / stdout.
    config : ConverterConfig, optional
        Defaults to the built-in configuration.

    Raises
    ------
    FileNotFoundError
        If the input does not exist.
    UnicodeDecodeError
        If the input is not valid text in ``config.input.encoding``.
    NoDrawableGeometryError
        In strict mode with nothing drawable.
    RuntimeError
        If the output cannot be written.
    """
    config = config or default_config()
    input_path = input_path if input_path is not None else config.paths.input
    output_path = output_path if output_path is not None else config.paths.output

    extraction = extract_file(
        input_path,
        encoding=config.input.encoding,
        start_marker=config.markers.start,
        end_marker=config.markers.end,
    )
    result = render(extraction, config)
    write_svg(output_path, result.document)

    logger.info(
        "Converted %s -> %s: %d segments, canvas %gx%g",
        input_path, output_path, len(result.segments), result.frame.width, result.frame.height,
    )
    return result
