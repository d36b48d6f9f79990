"""Content digests used to decide staleness.

Digests are SHA-256 over file contents; modification times are never
consulted since they do not survive checkouts and copies.
"""

from __future__ import annotations

import hashlib
from pathlib import Path

from spritely.core.project.models import Sprite

# Digest input standing in for a file that does not exist.
MISSING_MARKER = b"\x00missing\x00"

_CHUNK_SIZE = 1 << 16


def file_digest(path: Path) -> str:
    """Return the SHA-256 hex digest of a file's contents.

    A missing file yields the digest of ``MISSING_MARKER``.
    """
    hasher = hashlib.sha256()
    try:
        with Path(path).open("rb") as f:
            for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
                hasher.update(chunk)
    except FileNotFoundError:
        hasher.update(MISSING_MARKER)
    return hasher.hexdigest()


def sprite_digest(sprite: Sprite, root: Path) -> str:
    """Return a digest covering everything that determines a sprite's image.

    Includes, in order, every source's root-relative path and content
    digest, then the padding and the destination.
    """
    hasher = hashlib.sha256()
    for source in sprite.sources:
        hasher.update(_relative_key(source.path, root).encode("utf-8"))
        hasher.update(b"\x00")
        hasher.update(file_digest(source.path).encode("ascii"))
        hasher.update(b"\n")

    hasher.update(f"padding={sprite.padding}\n".encode())
    destination = "data_uri" if sprite.save_path is None else _relative_key(sprite.save_path, root)
    hasher.update(f"destination={destination}\n".encode())
    return hasher.hexdigest()


def _relative_key(path: Path, root: Path) -> str:
    try:
        return Path(path).relative_to(root).as_posix()
    except ValueError:
        return Path(path).as_posix()
