"""Error kinds raised by Spritely.

Every error renders as a single human-readable line naming the offending
path or sprite. Library code raises these; only the CLI turns them into exit
codes.
"""

from __future__ import annotations

from pathlib import Path


class SpritelyError(Exception):
    """Base class for all Spritely errors."""


class ConfigurationError(SpritelyError):
    """The project configuration is malformed."""


class MissingMappingError(ConfigurationError):
    """A sprite directive has no ``{source: destination}`` pair."""


class DuplicateNameError(ConfigurationError):
    """Two sprites resolve to the same name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"You tried to create a sprite whose name is '{name}', "
            "but a sprite with this name has already been defined."
        )


class NameSegmentConflictError(ConfigurationError):
    """A sprite uses both a ``:name`` path segment and a ``name`` option."""


class MissingNameSegmentError(ConfigurationError):
    """A ``:name`` source pattern maps to a destination without ``:name``."""


class DataUriWithoutSassError(ConfigurationError):
    """A data URI sprite was defined while Sass output is disabled."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"The '{name}' sprite wants to use a data URI, but you have disabled Sass"
        )


class DuplicateSourceError(ConfigurationError):
    """Two sources within one sprite share a name."""


class MissingProjectError(SpritelyError):
    """No configuration file could be found."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"Spritely couldn't find a configuration file at '{path}'")


class MissingSourceError(SpritelyError):
    """A source image vanished between resolution and render."""

    def __init__(self, path: Path | str, sprite: str | None = None) -> None:
        self.path = Path(path)
        self.sprite = sprite
        where = f" (sprite '{sprite}')" if sprite else ""
        super().__init__(f"Source image is missing: {path}{where}")


class TargetNotWritableError(SpritelyError):
    """A sprite could not be written to its destination."""

    def __init__(self, path: Path | str, sprite: str | None = None) -> None:
        self.path = Path(path)
        self.sprite = sprite
        super().__init__(f"Can't save sprite to {path}: the location is not writable")


class UnreadableImageError(SpritelyError):
    """A source exists but Pillow cannot decode it (not an image, or truncated)."""

    def __init__(self, path: Path | str, reason: Exception | str) -> None:
        self.path = Path(path)
        super().__init__(f"Not a readable image: {path} ({reason})")


class CacheCorruptionError(SpritelyError):
    """The cache file could not be parsed. Always recovered, never fatal."""


class OptimisationError(SpritelyError):
    """An external optimiser failed; the original file is left untouched."""
