"""Protocol for staleness trackers."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

from spritely.core.project.models import Sprite

CacheTarget = Sprite | Path | str


class CacheTracker(Protocol):
    """
    Decides which build units need regenerating.

    A ``Sprite`` target lives in the compositing namespace; a path (absolute,
    or relative to the project root) lives in the optimisation namespace.

    Implementations must:
    - Treat a target with no recorded entry as stale
    - Serialize mutations (units may record entries concurrently)
    - Write the store atomically, idempotently
    """

    def stale(self, target: CacheTarget) -> bool:
        """Return True if ``target`` differs from its recorded digest."""
        ...

    def set(self, target: CacheTarget) -> None:
        """Record the current digest of ``target``."""
        ...

    def clean(self, known_sprites: Iterable[str] | None = None) -> None:
        """Drop entries whose file no longer exists, or whose sprite is gone."""
        ...

    def write(self) -> None:
        """Persist the recorded entries."""
        ...
