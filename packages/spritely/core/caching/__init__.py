"""Persistent, content-addressed build cache.

Key features:
- Two namespaces in one file: sprite compositing and file optimisation
- SHA-256 content digests (mtimes are not trusted)
- Atomic commit (write to temp, then rename)
- Corrupt cache files are recovered as empty, never fatal
"""

from __future__ import annotations

from spritely.core.caching.backends.fs import FileCacheTracker, read_cache_document
from spritely.core.caching.backends.null import NullCacheTracker
from spritely.core.caching.fingerprint import file_digest, sprite_digest
from spritely.core.caching.models import CacheDocument, CacheKey, CacheNamespace
from spritely.core.caching.protocols import CacheTarget, CacheTracker
from spritely.core.project.models import Project


def create_tracker(project: Project) -> CacheTracker:
    """Return the tracker configured for a project."""
    if project.cache_path is None:
        return NullCacheTracker()
    return FileCacheTracker(project.cache_path, project.root)


__all__ = [
    # Core
    "CacheTracker",
    "CacheTarget",
    "CacheKey",
    "CacheNamespace",
    "CacheDocument",
    # Backends
    "FileCacheTracker",
    "NullCacheTracker",
    "create_tracker",
    "read_cache_document",
    # Utils
    "file_digest",
    "sprite_digest",
]
