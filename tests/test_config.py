"""Tests for the converter config loader.

Validates that:
    - the bundled converter.yaml loads and matches the built-in defaults
    - partial files fall back to defaults
    - invalid values raise ConfigError with the offending field
    - CLI-style overrides are revalidated
"""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from ps2svg.configs.loader import (
    DEFAULT_CONFIG_PATH,
    ConfigError,
    ConverterConfig,
    default_config,
    load_config,
)


@pytest.fixture()
def config() -> ConverterConfig:
    """Load the default converter.yaml shipped with the package."""
    return load_config()


def _write(tmp_path: Path, data: object) -> Path:
    path = tmp_path / "converter.yaml"
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Bundled config
# ---------------------------------------------------------------------------


class TestBundledConfig:
    def test_file_exists(self) -> None:
        assert DEFAULT_CONFIG_PATH.exists()

    def test_matches_defaults(self, config: ConverterConfig) -> None:
        assert config == default_config()

    def test_default_values(self, config: ConverterConfig) -> None:
        assert config.paths.input == "fort.50"
        assert config.paths.output == "out.svg"
        assert config.markers.start == "%%Note:"
        assert config.markers.end == "%%EOF"
        assert config.canvas.target_size == 800
        assert config.canvas.reverse == "none"

    def test_frozen(self, config: ConverterConfig) -> None:
        with pytest.raises(Exception):
            config.canvas.target_size = 10  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Loading files
# ---------------------------------------------------------------------------


class TestLoadConfig:
    def test_partial_file_uses_defaults(self, tmp_path: Path) -> None:
        cfg = load_config(_write(tmp_path, {"canvas": {"target_size": 1024, "reverse": "xy"}}))
        assert cfg.canvas.target_size == 1024
        assert cfg.canvas.reverse == "xy"
        assert cfg.canvas.mode == "fit"
        assert cfg.markers.start == "%%Note:"

    def test_log_level_case_insensitive(self, tmp_path: Path) -> None:
        cfg = load_config(_write(tmp_path, {"log": {"level": "debug"}}))
        assert cfg.log.level == "DEBUG"

    def test_log_rotation_section(self, tmp_path: Path) -> None:
        cfg = load_config(_write(tmp_path, {"log": {"rotate": {"mode": "time", "when": "D"}}}))
        assert cfg.log.rotate.mode == "time"
        assert cfg.log.rotate.when == "D"
        assert cfg.log.rotate.backup_count == 5
        assert cfg.log.console is True

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(ConfigError, match="Empty configuration"):
            load_config(path)

    def test_non_mapping_root(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="mapping"):
            load_config(_write(tmp_path, [1, 2, 3]))

    @pytest.mark.parametrize(
        "data, field",
        [
            ({"canvas": {"target_size": 0}}, "target_size"),
            ({"canvas": {"reverse": "z"}}, "reverse"),
            ({"canvas": {"mode": "stretch"}}, "mode"),
            ({"canvas": {"precision": -1}}, "precision"),
            ({"markers": {"start": ""}}, "start"),
            ({"markers": {"start": "X", "end": "X"}}, "differ"),
            ({"input": {"encoding": "no-such-codec"}}, "encoding"),
            ({"geometry": {"on_empty": "ignore"}}, "on_empty"),
            ({"log": {"rotate": {"mode": "weekly"}}}, "mode"),
            ({"log": {"rotate": {"max_bytes": 0}}}, "max_bytes"),
            ({"schema": "converter.v2"}, "schema"),
            ({"unknown_section": {}}, "unknown_section"),
        ],
    )
    def test_invalid_values(self, tmp_path: Path, data: dict, field: str) -> None:
        with pytest.raises(ConfigError, match=field):
            load_config(_write(tmp_path, data))


# ---------------------------------------------------------------------------
# Overrides
# ---------------------------------------------------------------------------


class TestOverrides:
    def test_none_keeps_values(self, config: ConverterConfig) -> None:
        assert config.with_overrides() == config

    def test_override_fields(self, config: ConverterConfig, tmp_path: Path) -> None:
        cfg = config.with_overrides(
            input_path=tmp_path / "in.ps",
            output_path="-",
            target_size=300,
            reverse="y",
            canvas_mode="fixed",
            precision=1,
            on_empty="error",
        )
        assert cfg.paths.input == str(tmp_path / "in.ps")
        assert cfg.paths.output == "-"
        assert cfg.canvas.target_size == 300
        assert cfg.canvas.reverse == "y"
        assert cfg.canvas.mode == "fixed"
        assert cfg.canvas.precision == 1
        assert cfg.geometry.on_empty == "error"
        assert config.canvas.target_size == 800

    def test_invalid_override(self, config: ConverterConfig) -> None:
        with pytest.raises(ConfigError):
            config.with_overrides(target_size=-5)
