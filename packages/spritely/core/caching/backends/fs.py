"""File-backed staleness tracker.

The whole cache is one JSON document, loaded at construction and written
back with a write-to-temp-then-rename commit so an aborted build never leaves
a half-written file behind.
"""

from __future__ import annotations

from collections.abc import Iterable
import logging
import os
from pathlib import Path
import tempfile
import threading

from pydantic import ValidationError

from spritely.core.caching.fingerprint import file_digest, sprite_digest
from spritely.core.caching.models import (
    CACHE_FORMAT_VERSION,
    CacheDocument,
    CacheKey,
    CacheNamespace,
)
from spritely.core.caching.protocols import CacheTarget
from spritely.core.errors import CacheCorruptionError
from spritely.core.project.models import Sprite

logger = logging.getLogger(__name__)


def read_cache_document(path: Path) -> CacheDocument:
    """Load and validate a cache file.

    Returns:
        The document, or an empty one if the file does not exist

    Raises:
        CacheCorruptionError: If the file is unreadable or invalid
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return CacheDocument()
    except OSError as e:
        raise CacheCorruptionError(f"Could not read cache file {path}: {e}") from e

    try:
        document = CacheDocument.model_validate_json(raw)
    except (ValidationError, ValueError) as e:
        raise CacheCorruptionError(f"Cache file {path} is malformed") from e

    if document.version != CACHE_FORMAT_VERSION:
        raise CacheCorruptionError(
            f"Cache file {path} has unsupported version {document.version}"
        )
    return document


class FileCacheTracker:
    """
    Tracks digests of sprites and files in a single JSON cache file.

    A corrupt cache file is never fatal: it is logged and treated as empty,
    so every unit is stale.
    """

    def __init__(self, path: Path, root: Path) -> None:
        """
        Initialize the tracker and load any existing cache.

        Args:
            path: Cache file location
            root: Project root; file keys are stored relative to it
        """
        self.path = Path(path)
        self.root = Path(root)
        self._lock = threading.Lock()

        try:
            self._document = read_cache_document(self.path)
        except CacheCorruptionError as e:
            logger.warning(f"{e}; rebuilding everything")
            self._document = CacheDocument()

    def key_for(self, target: CacheTarget) -> CacheKey:
        """Map a sprite or path onto its namespaced cache key."""
        if isinstance(target, Sprite):
            return CacheKey(namespace=CacheNamespace.SPRITES, key=target.name)
        return CacheKey(namespace=CacheNamespace.FILES, key=self._relative(target).as_posix())

    def recorded(self, target: CacheTarget) -> str | None:
        """Return the recorded digest for ``target``, if any."""
        key = self.key_for(target)
        with self._lock:
            return self._document.entries(key.namespace).get(key.key)

    def stale(self, target: CacheTarget) -> bool:
        recorded = self.recorded(target)
        if recorded is None:
            return True

        if isinstance(target, Sprite):
            # A deleted sprite image must be regenerated even if sources are unchanged.
            if target.save_path is not None and not target.save_path.is_file():
                return True
            return recorded != sprite_digest(target, self.root)

        return recorded != file_digest(self._absolute(target))

    def set(self, target: CacheTarget) -> None:
        key = self.key_for(target)
        if isinstance(target, Sprite):
            digest = sprite_digest(target, self.root)
        else:
            digest = file_digest(self._absolute(target))

        with self._lock:
            self._document.entries(key.namespace)[key.key] = digest
        logger.debug(f"Recorded {key}")

    def clean(self, known_sprites: Iterable[str] | None = None) -> None:
        with self._lock:
            files = self._document.files
            for relative in [k for k in files if not (self.root / k).exists()]:
                logger.debug(f"Dropping cache entry for missing file {relative}")
                del files[relative]

            if known_sprites is not None:
                keep = set(known_sprites)
                sprites = self._document.sprites
                for name in [k for k in sprites if k not in keep]:
                    logger.debug(f"Dropping cache entry for removed sprite {name}")
                    del sprites[name]

    def write(self) -> None:
        with self._lock:
            payload = self._document.model_dump_json(indent=2)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.write("\n")
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug(f"Wrote cache to {self.path}")

    def _relative(self, target: Path | str) -> Path:
        path = Path(target)
        if not path.is_absolute():
            return path
        try:
            return path.relative_to(self.root)
        except ValueError:
            return path

    def _absolute(self, target: Path | str) -> Path:
        path = Path(target)
        return path if path.is_absolute() else self.root / path
