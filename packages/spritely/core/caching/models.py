"""Models for the build cache.

Provides cache key and on-disk document models.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

CACHE_FORMAT_VERSION = 1


class CacheNamespace(str, Enum):
    """Logically separate key spaces sharing one cache file."""

    SPRITES = "sprites"  # compositing: has this sprite been generated from these sources?
    FILES = "files"  # post-processing: has this file been optimised?


class CacheKey(BaseModel):
    """
    Stable identifier for a cache entry.

    A sprite name in the ``sprites`` namespace, or a root-relative POSIX path
    in the ``files`` namespace.
    """

    namespace: CacheNamespace
    key: str = Field(description="Sprite name or root-relative path")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.namespace.value}:{self.key}"


class CacheDocument(BaseModel):
    """
    The persisted cache file.

    Maps keys to SHA-256 hex digests recorded at the last successful build.
    """

    version: int = Field(default=CACHE_FORMAT_VERSION)
    sprites: dict[str, str] = Field(default_factory=dict)
    files: dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")

    def entries(self, namespace: CacheNamespace) -> dict[str, str]:
        return self.sprites if namespace is CacheNamespace.SPRITES else self.files
