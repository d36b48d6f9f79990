"""Standalone optimisation of existing PNG files."""

from __future__ import annotations

from collections.abc import Iterable
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from spritely.core.caching import CacheTracker
from spritely.core.errors import OptimisationError
from spritely.core.imaging import ImageOptimiser

logger = logging.getLogger(__name__)


class FileOptimisation(BaseModel):
    """Outcome of optimising one file.

    ``skipped`` holds the reason a file was left alone, ``error`` the reason
    it could not be optimised.
    """

    path: Path
    size_before: int = 0
    bytes_saved: int = 0
    skipped: str | None = None
    error: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def percent_saved(self) -> float:
        if not self.size_before:
            return 0.0
        return self.bytes_saved / self.size_before * 100


def expand_paths(paths: Iterable[str | Path], cwd: Path) -> list[Path]:
    """Resolve ``paths`` against ``cwd``; directories expand to every PNG below them."""
    expanded: list[Path] = []
    for raw in paths:
        path = cwd / raw
        if path.is_dir():
            expanded.extend(sorted(path.glob("**/*.png")))
        else:
            expanded.append(path)
    return expanded


def optimise_files(
    paths: Iterable[Path],
    tracker: CacheTracker,
    optimiser: ImageOptimiser,
    force: bool = False,
) -> list[FileOptimisation]:
    """Optimise each path unless the tracker says it is unchanged.

    Successfully optimised files are recorded in the tracker; the caller
    decides when to write it.
    """
    outcomes = []
    for path in paths:
        if path.suffix.lower() != ".png":
            outcomes.append(FileOptimisation(path=path, skipped="not a PNG"))
            continue
        if not path.is_file():
            outcomes.append(FileOptimisation(path=path, error="no such file"))
            continue
        if not force and not tracker.stale(path):
            outcomes.append(FileOptimisation(path=path, skipped="unchanged"))
            continue

        before = path.stat().st_size
        try:
            saved = optimiser.optimise(path)
        except OptimisationError as e:
            logger.error(f"Could not optimise {path}: {e}")
            outcomes.append(FileOptimisation(path=path, size_before=before, error=str(e)))
            continue

        tracker.set(path)
        outcomes.append(FileOptimisation(path=path, size_before=before, bytes_saved=saved))
    return outcomes
