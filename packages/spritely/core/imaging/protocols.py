"""Protocols for the image collaborators used by the build.

Pixel work and PNG optimisation are delegated; the build only relies on
these three narrow interfaces so tests can substitute fakes.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class ImageInspector(Protocol):
    """Reports image dimensions."""

    def dimensions(self, path: Path) -> tuple[int, int]:
        """Return ``(width, height)`` of the image at ``path``.

        Raises:
            MissingSourceError: If the file does not exist
        """
        ...


@runtime_checkable
class ImageComposer(Protocol):
    """Composes source images into one canvas."""

    def compose(self, placements: Sequence[tuple[Path, int, int]], size: tuple[int, int]) -> bytes:
        """Paste each ``(path, x, y)`` onto a transparent canvas of ``size``.

        Returns:
            Encoded PNG bytes
        """
        ...


@runtime_checkable
class ImageOptimiser(Protocol):
    """Losslessly re-compresses image files in place."""

    def optimise(self, path: Path) -> int:
        """Optimise ``path`` and return the number of bytes saved (0 if none).

        Must leave the file untouched on failure.
        """
        ...
