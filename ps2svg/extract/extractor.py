"""PostScript command extractor -- text lines to ordered segments.

Scans a line-oriented log, gated by two marker lines::

    ... anything ...
    %%Note: <free text>      <- start marker, region becomes active
    0.0 0.0 m                <- move
    1.0 0.0 l                <- line (emits a segment)
    2.0 w                    <- set width
    <any other text>         <- ignored
    %%EOF                    <- end marker, scan stops
    ... never read ...

Each active line is trimmed and its whitespace runs collapsed to one space,
then searched for the three instruction shapes in priority order
(move, line, set-width).  A shape may appear anywhere in the line, so
``1.0 2.0 l S`` and ``1.0 2.0 lineto`` both draw.  Numbers must have a
decimal point and a fraction (``-?\\d+\\.\\d+``); ``1 2 m`` or
``1e3 0.0 l`` are not instructions and are skipped silently.  Width
numbers carry no sign, so ``-2.0 w`` sets width 2.0.

Public API:
    extractor = CommandExtractor(start_marker="%%Note:", end_marker="%%EOF")
    result = extractor.extract(lines)          # any iterable of str
    result = extract_file("fort.50")           # streams the file
"""

from __future__ import annotations

import enum
import io
import logging
import re
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from ps2svg.extract.pen import Pen
from ps2svg.ps_ir.operations import LineTo, MoveTo, Operation, Segment, SetLineWidth

logger = logging.getLogger(__name__)

DEFAULT_START_MARKER = "%%Note:"
DEFAULT_END_MARKER = "%%EOF"

_NUM = r"-?\d+\.\d+"
_UNSIGNED = r"\d+\.\d+"

MOVETO_RE = re.compile(rf"({_NUM}) ({_NUM}) m", re.ASCII)
LINETO_RE = re.compile(rf"({_NUM}) ({_NUM}) l", re.ASCII)
SETWIDTH_RE = re.compile(rf"({_UNSIGNED}) w", re.ASCII)

_WHITESPACE_RE = re.compile(r"\s+")


class ScanState(enum.Enum):
    """Marker gating: INACTIVE until the start marker, DONE at the end marker."""

    INACTIVE = "inactive"
    ACTIVE = "active"
    DONE = "done"


@dataclass
class ExtractionResult:
    """Outcome of one scan.

    Attributes
    ----------
    segments : list[Segment]
        Segments in input order.
    pen : Pen
        Pen state after the last applied instruction.
    state : ScanState
        ``INACTIVE`` if no start marker was seen, ``ACTIVE`` if input ended
        without an end marker, ``DONE`` if the end marker was reached.
    lines_read : int
        Lines consumed, including markers and the end marker line.
    moves, widths, ignored : int
        Counts of move lines, set-width lines and unrecognized active lines.
    """

    segments: list[Segment] = field(default_factory=list)
    pen: Pen = field(default_factory=Pen)
    state: ScanState = ScanState.INACTIVE
    lines_read: int = 0
    moves: int = 0
    widths: int = 0
    ignored: int = 0

    @property
    def start_seen(self) -> bool:
        return self.state is not ScanState.INACTIVE


# ---------------------------------------------------------------------------
# Line parsing
# ---------------------------------------------------------------------------


def normalize_line(line: str) -> str:
    """Trim and collapse internal whitespace runs to a single space."""
    return _WHITESPACE_RE.sub(" ", line.strip())


def parse_instruction(line: str) -> Operation | None:
    """Parse one line into a drawing operation.

    Parameters
    ----------
    line : str
        Raw or normalized text line.

    Returns
    -------
    Operation | None
        ``MoveTo``, ``LineTo`` or ``SetLineWidth`` for the first shape found
        in the line; ``None`` if none occurs.
    """
    text = normalize_line(line)

    match = MOVETO_RE.search(text)
    if match:
        return MoveTo(float(match.group(1)), float(match.group(2)))

    match = LINETO_RE.search(text)
    if match:
        return LineTo(float(match.group(1)), float(match.group(2)))

    match = SETWIDTH_RE.search(text)
    if match:
        return SetLineWidth(float(match.group(1)))

    return None


# ---------------------------------------------------------------------------
# Extractor
# ---------------------------------------------------------------------------


class CommandExtractor:
    """Drive a pen from marker-gated instruction lines.

    Parameters
    ----------
    start_marker : str
        Prefix of the line that opens the active region.  The marker line
        itself is never parsed.  A repeated start marker inside the region
        is skipped as well.
    end_marker : str
        Prefix of the line that ends the scan.  Only honoured while active.
    """

    def __init__(
        self,
        start_marker: str = DEFAULT_START_MARKER,
        end_marker: str = DEFAULT_END_MARKER,
    ) -> None:
        if not start_marker or not end_marker:
            raise ValueError("Markers must be non-empty")
        self.start_marker = start_marker
        self.end_marker = end_marker

    def extract(self, lines: Iterable[str]) -> ExtractionResult:
        """Scan *lines* and collect segments.

        Lines are consumed lazily; nothing after the end marker is read.
        Errors raised by the iterable (I/O, decoding) propagate unchanged.
        """
        result = ExtractionResult()
        pen = result.pen

        for lineno, line in enumerate(lines, start=1):
            result.lines_read = lineno

            if line.startswith(self.start_marker):
                if result.state is ScanState.INACTIVE:
                    logger.debug("Start marker at line %d", lineno)
                result.state = ScanState.ACTIVE
                continue

            if result.state is ScanState.INACTIVE:
                continue

            if line.startswith(self.end_marker):
                logger.debug("End marker at line %d", lineno)
                result.state = ScanState.DONE
                break

            op = parse_instruction(line)
            if isinstance(op, MoveTo):
                pen.moveto(op.x, op.y)
                result.moves += 1
            elif isinstance(op, LineTo):
                result.segments.append(pen.lineto(op.x, op.y))
            elif isinstance(op, SetLineWidth):
                pen.width = op.width
                result.widths += 1
            else:
                result.ignored += 1
                logger.debug("Ignored line %d: %r", lineno, line.rstrip("\r\n"))

        if result.state is ScanState.INACTIVE:
            logger.warning("Start marker %r not found in %d lines", self.start_marker, result.lines_read)
        elif result.state is ScanState.ACTIVE:
            logger.debug("Input ended before end marker %r", self.end_marker)

        logger.info(
            "Extracted %d segments (%d moves, %d width changes, %d ignored lines)",
            len(result.segments), result.moves, result.widths, result.ignored,
        )
        return result


# ---------------------------------------------------------------------------
# Convenience functions
# ---------------------------------------------------------------------------


def extract_file(
    path: str | Path,
    *,
    encoding: str = "utf-8",
    start_marker: str = DEFAULT_START_MARKER,
    end_marker: str = DEFAULT_END_MARKER,
) -> ExtractionResult:
    """Stream a file (``"-"`` for stdin) through a ``CommandExtractor``.

    Raises
    ------
    FileNotFoundError
        If *path* doesn't exist.
    UnicodeDecodeError
        If the input is not valid text in *encoding*.
    """
    extractor = CommandExtractor(start_marker, end_marker)

    if str(path) == "-":
        logger.info("Reading instructions from stdin")
        stream = io.TextIOWrapper(sys.stdin.buffer, encoding=encoding, errors="strict", newline=None)
        try:
            return extractor.extract(stream)
        finally:
            # sys.stdin.buffer stays open after the wrapper is gone
            stream.detach()

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    logger.info("Reading instructions from %s", path)
    with open(path, "r", encoding=encoding, errors="strict", newline=None) as f:
        return extractor.extract(f)
