"""Tests for path mapping."""

from pathlib import Path

import pytest

from shellkit.errors import ConfigError
from shellkit.path_utils import has_home_path_prefix, map_path


def test_home_prefix(monkeypatch, tmp_path):
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

    assert map_path("~") == str(tmp_path)
    assert map_path("~/scripts/setup.script") == str(tmp_path / "scripts" / "setup.script")


def test_absolute_path_unchanged(tmp_path):
    target = tmp_path / "a.txt"

    assert map_path(str(target)) == str(target)


def test_relative_path_resolved_against_cwd(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)

    assert map_path("sub/../job.script") == str((tmp_path / "job.script").resolve())


def test_surrounding_whitespace_ignored(tmp_path):
    assert map_path(f"  {tmp_path}  ") == str(tmp_path)


@pytest.mark.parametrize("bad", ["", "   ", "bad\x00name"])
def test_invalid_paths_rejected(bad):
    with pytest.raises(ConfigError):
        map_path(bad)


def test_has_home_path_prefix():
    assert has_home_path_prefix("~")
    assert has_home_path_prefix("~/x")
    assert has_home_path_prefix("~\\x")
    assert not has_home_path_prefix("~user/x")
    assert not has_home_path_prefix("x/~")
