"""Converter configuration loading and validation."""

from ps2svg.configs.loader import (
    CanvasConfig,
    ConfigError,
    ConverterConfig,
    GeometryConfig,
    InputConfig,
    LogConfig,
    MarkersConfig,
    PathsConfig,
    RotateConfig,
    default_config,
    load_config,
)

__all__ = [
    "CanvasConfig",
    "ConfigError",
    "ConverterConfig",
    "GeometryConfig",
    "InputConfig",
    "LogConfig",
    "MarkersConfig",
    "PathsConfig",
    "RotateConfig",
    "default_config",
    "load_config",
]
