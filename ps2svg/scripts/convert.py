#!/usr/bin/env python3
"""
Convert Script.

Turn the move/line/width instructions of a PostScript-like plot log into
an SVG document.

Usage:
    python -m ps2svg.scripts.convert                      # fort.50 -> out.svg
    python -m ps2svg.scripts.convert plot.ps plot.svg --size 1200
    python -m ps2svg.scripts.convert plot.ps - --reverse y > plot.svg
    python -m ps2svg.scripts.convert --config my.yaml --strict

Exit status:
    0  document written
    1  input/output, decoding, configuration or strict-geometry failure
    2  invalid command-line arguments
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

import yaml

from ps2svg import __version__
from ps2svg.configs.loader import ConfigError, ConverterConfig, load_config
from ps2svg.geometry.bbox import CANVAS_MODES, REVERSE_CHOICES, GeometryError
from ps2svg.pipeline import convert_file
from ps2svg.svg.emitter import SVGError
from ps2svg.utils.logging_config import (
    install_excepthook,
    pop_context,
    push_context,
    setup_logging,
    shutdown,
)

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ps2svg",
        description="Convert PostScript-like plot instructions (m / l / w) to SVG",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Only lines between the start marker (%%Note:) and end marker (%%EOF) are read.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        help="Input log, '-' for stdin (default: config paths.input, fort.50)",
    )
    parser.add_argument(
        "output",
        nargs="?",
        help="Output SVG, '-' for stdout (default: config paths.output, out.svg)",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        help="Configuration file path (default: bundled converter.yaml)",
    )

    # Canvas
    parser.add_argument(
        "--size",
        "-s",
        type=int,
        help="Pixel length of the larger canvas side",
    )
    parser.add_argument(
        "--reverse",
        "-r",
        choices=REVERSE_CHOICES,
        help="Mirror axes about the canvas centre",
    )
    parser.add_argument(
        "--canvas",
        choices=CANVAS_MODES,
        help="fit: canvas follows the drawing; fixed: square SIZE x SIZE canvas",
    )
    parser.add_argument(
        "--precision",
        type=int,
        help="Maximum decimals in coordinates",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail instead of writing an empty canvas when nothing is drawable",
    )

    # Logging
    parser.add_argument("--log-level", choices=LOG_LEVELS, help="Console/file log level")
    parser.add_argument("--log-file", type=str, help="Also log to this file")
    parser.add_argument("--json-logs", action="store_true", help="JSON lines in the log file")
    parser.add_argument("--no-color", action="store_true", help="Disable colored console logs")
    parser.add_argument("--quiet", "-q", action="store_true", help="No console logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser


def _resolve_config(args: argparse.Namespace) -> ConverterConfig:
    config = load_config(args.config)
    return config.with_overrides(
        input_path=args.input,
        output_path=args.output,
        target_size=args.size,
        reverse=args.reverse,
        canvas_mode=args.canvas,
        precision=args.precision,
        on_empty="error" if args.strict else None,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Program entry: parse arguments, convert, return the exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(
        args.log_level or "INFO",
        color=not args.no_color,
        console=not args.quiet,
        context={"app": "ps2svg"},
    )
    try:
        return _run(args)
    finally:
        shutdown()


def _run(args: argparse.Namespace) -> int:
    try:
        config = _resolve_config(args)
    except (ConfigError, OSError, yaml.YAMLError) as e:
        logger.error("Error loading config: %s", e)
        return 1

    log_cfg = config.log
    setup_logging(
        args.log_level or log_cfg.level,
        log_file=args.log_file or log_cfg.file,
        json_lines=args.json_logs or log_cfg.json_lines,
        color=log_cfg.color and not args.no_color,
        console=log_cfg.console and not args.quiet,
        rotate=log_cfg.rotate.model_dump(),
    )
    install_excepthook()

    push_context(input=config.paths.input)
    try:
        convert_file(config=config)
    except (OSError, UnicodeDecodeError, GeometryError, SVGError, RuntimeError) as e:
        logger.error("Conversion failed: %s", e)
        logger.debug("Traceback", exc_info=True)
        return 1
    finally:
        pop_context(keys=["input"])

    return 0


if __name__ == "__main__":
    sys.exit(main())
