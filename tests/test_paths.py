"""Tests for eagles/core/paths.py startup checks."""

import os

from eagles.core import paths


def test_validate_paths_ok(temp_data_dir):
    result = paths.validate_paths()
    assert result["ok"] is True
    assert result["resolved"]["DATA_DIR"] == temp_data_dir
    assert not os.path.exists(os.path.join(temp_data_dir, ".write_test"))


def test_validate_paths_creates_dir(tmp_path):
    target = str(tmp_path / "fresh" / "data")
    assert paths.validate_paths(target)["ok"] is True
    assert os.path.isdir(target)


def test_validate_paths_not_writable(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    result = paths.validate_paths(str(blocker / "data"))
    assert result["ok"] is False
    assert "DATA_DIR not writable" in result["errors"][0]
