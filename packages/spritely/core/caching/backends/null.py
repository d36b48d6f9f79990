"""No-op tracker for projects with caching disabled.

Always reports stale, discards all records.
"""

from __future__ import annotations

from collections.abc import Iterable

from spritely.core.caching.protocols import CacheTarget


class NullCacheTracker:
    """
    No-op tracker.

    Used when ``cache: false`` is configured, and by ``optimise`` outside a
    project.
    """

    def stale(self, target: CacheTarget) -> bool:
        """Always returns True."""
        return True

    def set(self, target: CacheTarget) -> None:
        """Discard."""
        pass

    def clean(self, known_sprites: Iterable[str] | None = None) -> None:
        """No-op."""
        pass

    def write(self) -> None:
        """No-op."""
        pass
