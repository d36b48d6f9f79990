"""Shared pytest fixtures for spritely tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

from PIL import Image
import pytest
import yaml

from spritely.core.config import load_project
from spritely.core.project import Project

# ============================================================================
# Image Fixtures
# ============================================================================

PngFactory = Callable[..., Path]


def write_png(
    path: Path, size: tuple[int, int] = (10, 20), colour: tuple[int, ...] = (255, 0, 0, 255)
) -> Path:
    """Write a solid RGBA PNG, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGBA", size, colour).save(path, format="PNG")
    return path


@pytest.fixture
def png() -> PngFactory:
    """Factory writing solid PNG images."""
    return write_png


# ============================================================================
# Project Fixtures
# ============================================================================


def write_config(root: Path, data: dict[str, Any], name: str = ".spritely") -> Path:
    """Write a YAML project config into ``root``."""
    path = root / name
    path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    return path


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Empty project directory."""
    root = tmp_path / "site"
    root.mkdir()
    return root


@pytest.fixture
def fry_dir(project_dir: Path) -> Path:
    """Project with one ``fry`` sprite of two 10x20 sources, default settings."""
    write_png(project_dir / "sources" / "fry" / "one.png", (10, 20), (255, 0, 0, 255))
    write_png(project_dir / "sources" / "fry" / "two.png", (10, 20), (0, 0, 255, 255))
    write_config(project_dir, {"sprites": [{"sources/:name/*": "images/:name.png"}]})
    return project_dir


@pytest.fixture
def fry_project(fry_dir: Path) -> Project:
    """Resolved ``fry`` project."""
    return load_project(fry_dir)


class FakeInspector:
    """Inspector answering from a fixed table and counting lookups."""

    def __init__(self, sizes: dict[str, tuple[int, int]]) -> None:
        self.sizes = sizes
        self.calls: list[Path] = []

    def dimensions(self, path: Path) -> tuple[int, int]:
        self.calls.append(path)
        return self.sizes[Path(path).stem]


@pytest.fixture
def fake_inspector() -> type[FakeInspector]:
    return FakeInspector
