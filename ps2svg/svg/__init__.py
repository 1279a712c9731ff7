"""
SVG output.

Serializes canvas-space segments into a self-contained SVG document.
"""

from ps2svg.svg.emitter import SVGEmitter, SVGError, format_number, format_width, write_svg

__all__ = ["SVGEmitter", "SVGError", "format_number", "format_width", "write_svg"]
