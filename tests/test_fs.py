"""Test atomic filesystem operations.

Tests for ps2svg.utils.fs:
    - Atomic writes leave no temporary file behind
    - Failed writes clean up and keep the previous file
    - ensure_dir creates parents
    - YAML loading and error paths
"""

from pathlib import Path

import pytest
import yaml

from ps2svg.utils import fs


def test_ensure_dir(tmp_path: Path):
    target = fs.ensure_dir(tmp_path / "a" / "b")
    assert target.is_dir()
    assert fs.ensure_dir(target) == target


def test_atomic_write_text(tmp_path: Path):
    path = tmp_path / "sub" / "out.svg"
    fs.atomic_write_text(path, "<svg/>\n")
    assert path.read_text(encoding="utf-8") == "<svg/>\n"
    assert not path.with_suffix(".svg.tmp").exists()


def test_atomic_write_replaces_existing(tmp_path: Path):
    path = tmp_path / "out.svg"
    path.write_text("old", encoding="utf-8")
    fs.atomic_write_bytes(path, b"new")
    assert path.read_bytes() == b"new"


def test_atomic_write_failure_cleans_up(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    path = tmp_path / "out.svg"
    path.write_text("old", encoding="utf-8")

    def boom(self, target):
        raise OSError("disk full")

    monkeypatch.setattr(Path, "replace", boom)
    with pytest.raises(RuntimeError, match="atomically"):
        fs.atomic_write_text(path, "new")
    assert path.read_text(encoding="utf-8") == "old"
    assert not (tmp_path / "out.svg.tmp").exists()


def test_load_yaml(tmp_path: Path):
    path = tmp_path / "cfg.yaml"
    path.write_text("canvas:\n  target_size: 10\n", encoding="utf-8")
    assert fs.load_yaml(path) == {"canvas": {"target_size": 10}}


def test_load_yaml_missing(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        fs.load_yaml(tmp_path / "missing.yaml")


def test_load_yaml_invalid(tmp_path: Path):
    path = tmp_path / "bad.yaml"
    path.write_text("canvas: [unclosed\n", encoding="utf-8")
    with pytest.raises(yaml.YAMLError):
        fs.load_yaml(path)
