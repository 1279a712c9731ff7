"""Configuration loader for the converter.

Loads ``converter.yaml`` and validates it into frozen pydantic models.
Marker tokens, canvas sizing, axis reversal and output precision all come
from the config; CLI flags only override individual fields.

Usage::

    from ps2svg.configs.loader import load_config
    cfg = load_config()                          # default path
    cfg = load_config("/custom/converter.yaml")  # explicit path
    cfg = cfg.with_overrides(target_size=1024, reverse="y")
"""

from __future__ import annotations

import codecs
import logging
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from ps2svg.utils.fs import load_yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "converter.yaml"

CanvasMode = Literal["fit", "fixed"]
Reverse = Literal["none", "x", "y", "xy"]
EmptyPolicy = Literal["empty", "error"]


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(Exception):
    """Raised when configuration validation fails."""

    pass


# ---------------------------------------------------------------------------
# Schema -- mirrors the YAML structure
# ---------------------------------------------------------------------------


class _Section(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class PathsConfig(_Section):
    """Default input and output locations (``-`` means stdin / stdout)."""

    input: str = Field("fort.50", min_length=1)
    output: str = Field("out.svg", min_length=1)


class MarkersConfig(_Section):
    """Line prefixes that open and close the active region."""

    start: str = Field("%%Note:", min_length=1)
    end: str = Field("%%EOF", min_length=1)

    @model_validator(mode="after")
    def validate_distinct(self) -> "MarkersConfig":
        if self.start == self.end:
            raise ValueError(f"Start and end markers must differ, both are {self.start!r}")
        return self


class InputConfig(_Section):
    """Input decoding; undecodable bytes abort the run."""

    encoding: str = "utf-8"

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        try:
            codecs.lookup(v)
        except LookupError as exc:
            raise ValueError(f"Unknown text encoding: {v!r}") from exc
        return v


class CanvasConfig(_Section):
    """Output canvas sizing.

    Parameters
    ----------
    mode : ``"fit"`` | ``"fixed"``
        ``fit`` sizes the canvas to the scaled bounding box (larger side
        equals ``target_size``).  ``fixed`` always emits a square
        ``target_size`` canvas, which is the legacy 800x800 behaviour.
    target_size : int
        Pixel length of the larger canvas side.
    reverse : ``"none"`` | ``"x"`` | ``"y"`` | ``"xy"``
        Axes mirrored about the canvas centre line.
    precision : int
        Maximum decimals written for coordinates and canvas size.  Stroke
        widths are written in full.
    """

    mode: CanvasMode = "fit"
    target_size: int = Field(800, gt=0)
    reverse: Reverse = "none"
    precision: int = Field(3, ge=0, le=12)


class GeometryConfig(_Section):
    """Policy for inputs with no drawable extent."""

    on_empty: EmptyPolicy = "empty"


class RotateConfig(_Section):
    """Log file rotation (``none`` keeps one growing file)."""

    mode: Literal["none", "size", "time"] = "none"
    max_bytes: int = Field(5_000_000, gt=0)
    backup_count: int = Field(5, ge=0)
    when: Literal["S", "M", "H", "D", "midnight", "W0", "W1", "W2", "W3", "W4", "W5", "W6"] = "midnight"
    interval: int = Field(1, gt=0)


class LogConfig(_Section):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file: Optional[str] = None
    json_lines: bool = False
    color: bool = True
    console: bool = True
    rotate: RotateConfig = Field(default_factory=RotateConfig)

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v


class ConverterConfig(_Section):
    """Complete converter configuration loaded from ``converter.yaml``."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    schema_version: str = Field("converter.v1", alias="schema")
    paths: PathsConfig = Field(default_factory=PathsConfig)
    markers: MarkersConfig = Field(default_factory=MarkersConfig)
    input: InputConfig = Field(default_factory=InputConfig)
    canvas: CanvasConfig = Field(default_factory=CanvasConfig)
    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    log: LogConfig = Field(default_factory=LogConfig)

    @field_validator("schema_version")
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != "converter.v1":
            raise ValueError(f"Expected schema 'converter.v1', got '{v}'")
        return v

    def with_overrides(
        self,
        *,
        input_path: str | Path | None = None,
        output_path: str | Path | None = None,
        target_size: int | None = None,
        reverse: str | None = None,
        canvas_mode: str | None = None,
        precision: int | None = None,
        on_empty: str | None = None,
    ) -> "ConverterConfig":
        """Return a revalidated copy with the non-``None`` fields replaced.

        Raises
        ------
        ConfigError
            If an override fails validation.
        """
        data = self.model_dump(by_alias=True)
        updates = {
            ("paths", "input"): None if input_path is None else str(input_path),
            ("paths", "output"): None if output_path is None else str(output_path),
            ("canvas", "target_size"): target_size,
            ("canvas", "reverse"): reverse,
            ("canvas", "mode"): canvas_mode,
            ("canvas", "precision"): precision,
            ("geometry", "on_empty"): on_empty,
        }
        for (section, key), value in updates.items():
            if value is not None:
                data[section][key] = value
        try:
            return ConverterConfig.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration override: {exc}") from exc


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def default_config() -> ConverterConfig:
    """Built-in defaults, without touching the filesystem."""
    return ConverterConfig()


def load_config(path: str | Path | None = None) -> ConverterConfig:
    """Load and validate converter configuration from YAML.

    Parameters
    ----------
    path : str | Path | None
        Path to ``converter.yaml``.  ``None`` loads the default shipped
        alongside this module.

    Returns
    -------
    ConverterConfig
        Fully validated, frozen configuration object.  Sections missing
        from the file take their defaults.

    Raises
    ------
    ConfigError
        If the file is empty or any field fails validation.
    FileNotFoundError
        If *path* does not exist.
    """
    path = DEFAULT_CONFIG_PATH if path is None else Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    logger.debug("Loading configuration from %s", path)

    data: dict[str, Any] | None = load_yaml(path)
    if data is None:
        raise ConfigError(f"Empty configuration file: {path}")
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration root must be a mapping: {path}")

    try:
        config = ConverterConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Configuration validation failed at {path}: {exc}") from exc

    logger.debug("Configuration loaded successfully")
    return config
