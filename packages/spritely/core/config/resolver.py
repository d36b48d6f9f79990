"""Resolve configuration directives into a Project.

Resolution runs in two passes. The first collects every directive and folds
the global ones into final ``ProjectSettings``; the second materialises the
sprite directives against those settings. A global directive written after a
sprite therefore still applies to it.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path

from pydantic import ValidationError

from spritely.core.config.loader import find_config, load_directives
from spritely.core.config.models import (
    Directive,
    GlobalDirective,
    ProjectSettings,
    SpriteDirective,
    SpriteOptions,
    is_data_uri,
)
from spritely.core.errors import (
    ConfigurationError,
    DataUriWithoutSassError,
    DuplicateNameError,
    DuplicateSourceError,
    MissingNameSegmentError,
    NameSegmentConflictError,
)
from spritely.core.project.models import Project, Source, Sprite

logger = logging.getLogger(__name__)

NAME_SEGMENT = ":name"
FILENAME_SEGMENT = ":filename"

SASS_FILENAME = "_spritely.sass"
CSS_FILENAME = "spritely.css"


@dataclass(frozen=True)
class _PendingSprite:
    """A sprite directive after ``:name`` expansion, before defaults apply."""

    name: str
    source_pattern: str
    destination: Path | None
    options: SpriteOptions


class ConfigResolver:
    """Turns a root path plus directives into a Project.

    Example:
        >>> resolver = ConfigResolver(Path("/site"))
        >>> project = resolver.resolve([
        ...     SpriteDirective(source="sources/:name/*", destination="images/:name.png"),
        ...     GlobalDirective(key="padding", value=10),
        ... ])
    """

    def __init__(self, root: Path, config_path: Path | None = None) -> None:
        self.root = Path(root)
        self.config_path = config_path

    def resolve(self, directives: list[Directive]) -> Project:
        """Resolve directives into a Project.

        Raises:
            ConfigurationError: Or one of its subclasses, on any malformed directive
        """
        settings = self.collect_settings(directives)
        sprite_directives = [d for d in directives if isinstance(d, SpriteDirective)]

        pending: list[_PendingSprite] = []
        for directive in sprite_directives:
            pending.extend(self._expand(directive))

        seen: set[str] = set()
        for entry in pending:
            if entry.name in seen:
                raise DuplicateNameError(entry.name)
            seen.add(entry.name)

        sprites = tuple(self._materialize(entry, settings) for entry in pending)
        logger.debug(f"Resolved {len(sprites)} sprite(s) from {len(directives)} directive(s)")

        return Project(
            root=self.root,
            sprites=sprites,
            settings=settings,
            config_path=self.config_path,
            sass_path=self._output_path(settings.sass, ".sass", SASS_FILENAME),
            css_path=self._output_path(settings.css, ".css", CSS_FILENAME),
            cache_path=self._cache_path(settings.cache),
        )

    def collect_settings(self, directives: list[Directive]) -> ProjectSettings:
        """Fold every global directive into the final project settings."""
        values = {d.key: d.value for d in directives if isinstance(d, GlobalDirective)}
        try:
            return ProjectSettings.model_validate(values)
        except ValidationError as e:
            first = e.errors()[0]
            raise ConfigurationError(
                f"Invalid value for config.{first['loc'][0]}: {first['msg']}"
            ) from e

    # --- expansion -------------------------------------------------------

    def _expand(self, directive: SpriteDirective) -> list[_PendingSprite]:
        if NAME_SEGMENT not in directive.source:
            return [self._pending(directive.source, directive.destination, directive.options)]

        if directive.options.name is not None:
            raise NameSegmentConflictError(
                f"Sprite '{directive}' has both a :name path segment and a name option; "
                "please use only one."
            )
        if not directive.is_data_uri and NAME_SEGMENT not in directive.destination:
            raise MissingNameSegmentError(
                f"Sprite '{directive}' requires a :name segment in the sprite path."
            )

        leading, trailing = directive.source.split(NAME_SEGMENT, 1)
        candidates = sorted(self.root.glob(f"{leading}*"))

        expanded = []
        for entry in candidates:
            if not entry.is_dir():
                continue
            name = entry.name
            destination = (
                directive.destination
                if directive.is_data_uri
                else directive.destination.replace(NAME_SEGMENT, name)
            )
            options = directive.options.model_copy(update={"name": name})
            expanded.append(self._pending(f"{leading}{name}{trailing}", destination, options))

        if not expanded:
            logger.warning(f"Sprite '{directive}' matched no directories")
        return expanded

    def _pending(self, source: str, destination: str, options: SpriteOptions) -> _PendingSprite:
        save_path = None if is_data_uri(destination) else self.root / destination

        if options.name is not None:
            name = options.name
        elif save_path is not None:
            name = save_path.stem
        else:
            raise ConfigurationError(
                f"Sprite '{source} => {destination}' uses a data URI and needs a name option."
            )

        return _PendingSprite(name, source, save_path, options)

    # --- materialisation -------------------------------------------------

    def _materialize(self, entry: _PendingSprite, settings: ProjectSettings) -> Sprite:
        if entry.destination is None and settings.sass is False:
            raise DataUriWithoutSassError(entry.name)

        padding = entry.options.padding if entry.options.padding is not None else settings.padding

        url = ""
        if entry.destination is not None:
            template = entry.options.url if entry.options.url is not None else settings.url
            url = template.replace(NAME_SEGMENT, entry.name).replace(
                FILENAME_SEGMENT, entry.destination.name
            )

        return Sprite(
            name=entry.name,
            sources=self._sources(entry),
            save_path=entry.destination,
            padding=padding,
            url=url,
        )

    def _sources(self, entry: _PendingSprite) -> tuple[Source, ...]:
        pattern = entry.source_pattern
        # A bare directory means every file directly inside it.
        if (self.root / pattern).is_dir():
            pattern = f"{pattern.rstrip('/')}/*"

        paths = sorted(p for p in self.root.glob(pattern) if p.is_file())

        sources: list[Source] = []
        names: set[str] = set()
        for path in paths:
            if path.stem in names:
                raise DuplicateSourceError(
                    f"Sprite '{entry.name}' has more than one source named '{path.stem}'"
                )
            names.add(path.stem)
            sources.append(Source(path=path, name=path.stem))

        if not sources:
            logger.warning(f"Sprite '{entry.name}' has no source images ({entry.source_pattern})")
        return tuple(sources)

    # --- paths -----------------------------------------------------------

    def _output_path(self, value: str | bool, extension: str, filename: str) -> Path | None:
        if value is False:
            return None
        path = self.root / str(value)
        return path if path.suffix == extension else path / filename

    def _cache_path(self, value: str | bool | None) -> Path | None:
        if value is False:
            return None
        if isinstance(value, str):
            return self.root / value
        if self.config_path is not None:
            return derive_cache_path(self.config_path)
        return self.root / ".spritely-cache.json"


def derive_cache_path(config_path: Path) -> Path:
    """Return the cache file kept beside a config file.

    Example:
        >>> derive_cache_path(Path("/site/spritely.yml"))
        PosixPath('/site/spritely-cache.json')
    """
    return config_path.with_name(f"{config_path.stem}-cache.json")


def load_project(path: str | Path) -> Project:
    """Find the configuration for ``path`` and resolve it into a Project.

    Raises:
        MissingProjectError: If no configuration file is found
        ConfigurationError: If the configuration is malformed
    """
    config_path = find_config(path)
    directives = load_directives(config_path)
    return ConfigResolver(config_path.parent, config_path).resolve(directives)
