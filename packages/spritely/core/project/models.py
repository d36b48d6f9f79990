"""Build units: Project, Sprite and Source.

Constructed once per invocation by the config resolver and not mutated
afterwards, except for source dimensions which are measured lazily and kept
for the rest of the run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from spritely.core.config.models import ProjectSettings
    from spritely.core.imaging.protocols import ImageInspector


@dataclass(eq=False)
class Source:
    """One input image contributing to a sprite."""

    path: Path
    name: str
    _dimensions: tuple[int, int] | None = field(default=None, init=False, repr=False)

    def dimensions(self, inspector: ImageInspector) -> tuple[int, int]:
        """Return ``(width, height)``, asking the inspector only once per run."""
        if self._dimensions is None:
            self._dimensions = inspector.dimensions(self.path)
        return self._dimensions


@dataclass(frozen=True, eq=False)
class Sprite:
    """One composite-image build unit.

    ``save_path`` is ``None`` for data URI sprites: no file is kept and the
    bytes are inlined into the stylesheet instead.
    """

    name: str
    sources: tuple[Source, ...]
    save_path: Path | None
    padding: int
    url: str = ""

    @property
    def is_data_uri(self) -> bool:
        return self.save_path is None

    def source(self, name: str) -> Source | None:
        """Return the source called ``name``, if any."""
        return next((s for s in self.sources if s.name == name), None)

    def logical_name(self, source: Source | str) -> str:
        """Dispatch key used by stylesheets and position queries, e.g. ``fry/one``."""
        source_name = source if isinstance(source, str) else source.name
        return f"{self.name}/{source_name}"


@dataclass(frozen=True)
class Project:
    """The root build unit."""

    root: Path
    sprites: tuple[Sprite, ...]
    settings: ProjectSettings
    config_path: Path | None = None
    sass_path: Path | None = None
    css_path: Path | None = None
    cache_path: Path | None = None

    @property
    def padding(self) -> int:
        return self.settings.padding

    @property
    def url_template(self) -> str:
        return self.settings.url

    @property
    def data_uri_sprites(self) -> list[Sprite]:
        return [sprite for sprite in self.sprites if sprite.is_data_uri]

    def sprite(self, name: str) -> Sprite | None:
        """Return the sprite called ``name``, if any."""
        return next((s for s in self.sprites if s.name == name), None)
