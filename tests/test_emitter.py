"""Tests for the SVG emitter.

Validates number formatting, document structure, element count and
order, and the non-finite guard.
"""

from __future__ import annotations

import math
import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from ps2svg.geometry.bbox import Frame
from ps2svg.ps_ir.operations import Segment
from ps2svg.svg.emitter import SVG_NAMESPACE, SVGEmitter, SVGError, format_number, format_width, write_svg

SVG_LINE = f"{{{SVG_NAMESPACE}}}line"


@pytest.fixture()
def frame() -> Frame:
    return Frame(bbox=None, scale=1.0, width=800.0, height=400.0)


# ---------------------------------------------------------------------------
# Number formatting
# ---------------------------------------------------------------------------


class TestFormatNumber:
    @pytest.mark.parametrize(
        "value, precision, expected",
        [
            (800.0, 3, "800"),
            (0.5, 3, "0.5"),
            (1.23456, 3, "1.235"),
            (-0.0001, 3, "0"),
            (-0.0, 3, "0"),
            (-12.5, 3, "-12.5"),
            (2.5, 0, "2"),
            (1e-7, 3, "0"),
            (123456789.0, 2, "123456789"),
        ],
    )
    def test_format(self, value: float, precision: int, expected: str) -> None:
        assert format_number(value, precision) == expected

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_non_finite_rejected(self, value: float) -> None:
        with pytest.raises(SVGError):
            format_number(value)


class TestFormatWidth:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (2.0, "2"),
            (0.35, "0.35"),
            (0.0004, "0.0004"),
            (1e-7, "0.0000001"),
            (0.0, "0"),
        ],
    )
    def test_format(self, value: float, expected: str) -> None:
        assert format_width(value) == expected

    def test_non_finite_rejected(self) -> None:
        with pytest.raises(SVGError):
            format_width(math.inf)


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------


class TestDocument:
    def test_header_and_footer(self, frame: Frame) -> None:
        doc = SVGEmitter().generate([], frame)
        lines = doc.splitlines()
        assert lines[0] == (
            '<svg version="1.1" baseProfile="full" width="800" height="400" '
            'xmlns="http://www.w3.org/2000/svg">'
        )
        assert lines[-1] == "</svg>"
        assert doc.endswith("\n")

    def test_line_element(self, frame: Frame) -> None:
        doc = SVGEmitter().generate([Segment(0.0, 10.5, 800.0, 0.25, 2.0)], frame)
        assert (
            '  <line x1="0" y1="10.5" x2="800" y2="0.25" stroke="black" stroke-width="2" />'
            in doc.splitlines()
        )

    def test_empty_document_is_valid_xml(self, frame: Frame) -> None:
        root = ET.fromstring(SVGEmitter().generate([], frame))
        assert root.tag == f"{{{SVG_NAMESPACE}}}svg"
        assert list(root) == []

    def test_one_element_per_segment_in_order(self, frame: Frame) -> None:
        segs = [Segment(float(i), 0.0, float(i), 0.0, 1.0) for i in range(5)]
        root = ET.fromstring(SVGEmitter().generate(segs, frame))
        lines = root.findall(SVG_LINE)
        assert len(lines) == 5
        assert [ln.get("x1") for ln in lines] == ["0", "1", "2", "3", "4"]

    def test_zero_length_segment_emitted(self, frame: Frame) -> None:
        doc = SVGEmitter().generate([Segment(3.0, 3.0, 3.0, 3.0, 1.0)], frame)
        assert doc.count("<line ") == 1

    def test_precision(self, frame: Frame) -> None:
        doc = SVGEmitter(precision=1).generate([Segment(0.123, 0.0, 1.0, 1.0, 0.35)], frame)
        assert 'x1="0.1"' in doc
        assert 'stroke-width="0.35"' in doc

    def test_thin_width_not_rounded_away(self, frame: Frame) -> None:
        doc = SVGEmitter(precision=3).generate([Segment(0.0, 0.0, 1.0, 1.0, 0.0004)], frame)
        assert 'stroke-width="0.0004"' in doc

    def test_negative_precision_rejected(self) -> None:
        with pytest.raises(ValueError):
            SVGEmitter(precision=-1)


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------


class TestWriteSvg:
    def test_writes_file(self, tmp_path: Path, frame: Frame) -> None:
        doc = SVGEmitter().generate([], frame)
        out = tmp_path / "nested" / "out.svg"
        write_svg(out, doc)
        assert out.read_text(encoding="utf-8") == doc
        assert not (tmp_path / "nested" / "out.svg.tmp").exists()

    def test_stdout(self, capsys: pytest.CaptureFixture[str], frame: Frame) -> None:
        doc = SVGEmitter().generate([], frame)
        write_svg("-", doc)
        assert capsys.readouterr().out == doc
