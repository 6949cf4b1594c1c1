from pathlib import Path

import pytest
from setuptools import find_namespace_packages

ROOT = Path(__file__).resolve().parent.parent


def test_namespace_finder_picks_up_all_packages():
    pkgs = find_namespace_packages(where=str(ROOT), include=["game*", "rl*"])
    assert "game.asteroids" in pkgs
    assert "rl.configs" in pkgs
    assert "tests" not in pkgs


def test_pyproject_enables_namespace_discovery():
    tomllib = pytest.importorskip("tomllib")
    with open(ROOT / "pyproject.toml", "rb") as f:
        cfg = tomllib.load(f)
    find = cfg["tool"]["setuptools"]["packages"]["find"]
    assert find["namespaces"] is True
    assert find["include"] == ["game*", "rl*"]
