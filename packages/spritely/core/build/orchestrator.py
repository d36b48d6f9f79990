"""Build orchestration: resolve, select, lay out, render, optimise, emit.

Sprites are independent units of work and are built concurrently by a
bounded pool of worker threads. The cache tracker is the only shared mutable
state; it serializes its own mutations and is written once, after every unit
has finished.

Per-unit failures do not stop the other units. They are collected into the
``BuildResult`` and the build as a whole reports failure.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
import logging
from pathlib import Path
import tempfile
import time

from spritely.core.build.result import BuildResult, UnitResult, failure_unit, success_unit
from spritely.core.caching import CacheTracker, create_tracker
from spritely.core.errors import (
    ConfigurationError,
    MissingSourceError,
    SpritelyError,
    TargetNotWritableError,
)
from spritely.core.imaging import (
    ExternalToolOptimiser,
    ImageComposer,
    ImageInspector,
    ImageOptimiser,
    PillowImageComposer,
    PillowImageInspector,
)
from spritely.core.layout import LayoutResult, Placement, compute_layout, find_deviants
from spritely.core.project.models import Project, Sprite
from spritely.core.stylesheet import (
    CSSEmitter,
    SassEmitter,
    StylesheetEmitter,
    read_embedded_payloads,
    rendered_path,
    resolve_payloads,
)
from spritely.core.utils.logging import get_logger

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 4
STYLESHEET_FAILURE_KEY = "stylesheet"


@contextmanager
def scratch_directory(project: Project) -> Iterator[Path | None]:
    """Temporary directory for data URI renders, removed on every exit path.

    Yields None when the project has no data URI sprites.
    """
    if not project.data_uri_sprites:
        yield None
        return

    with tempfile.TemporaryDirectory(prefix="spritely-") as tmp:
        logger.debug(f"Rendering data URI sprites in {tmp}")
        yield Path(tmp)


class BuildOrchestrator:
    """Builds the sprites of a project and writes its stylesheets.

    Example:
        >>> orchestrator = BuildOrchestrator(project)
        >>> result = await orchestrator.build(["fry"], force=True)
        >>> result.generated
        ['fry']
    """

    def __init__(
        self,
        project: Project,
        *,
        tracker: CacheTracker | None = None,
        inspector: ImageInspector | None = None,
        composer: ImageComposer | None = None,
        optimiser: ImageOptimiser | None = None,
        emitters: Sequence[StylesheetEmitter] | None = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")

        self.project = project
        self.tracker = tracker if tracker is not None else create_tracker(project)
        self.inspector = inspector or PillowImageInspector()
        self.composer = composer or PillowImageComposer()
        self.optimiser = optimiser or ExternalToolOptimiser()
        self.emitters = list(emitters) if emitters is not None else [SassEmitter(), CSSEmitter()]
        self.max_workers = max_workers

    def select(self, names: Sequence[str] | None = None) -> list[Sprite]:
        """Return the requested sprites (all when ``names`` is empty).

        Raises:
            ConfigurationError: If a requested sprite does not exist
        """
        if not names:
            return list(self.project.sprites)

        unknown = [name for name in names if self.project.sprite(name) is None]
        if unknown:
            raise ConfigurationError(f"No such sprite: {', '.join(unknown)}")
        return [sprite for sprite in self.project.sprites if sprite.name in names]

    def stale_sprites(self, sprites: Sequence[Sprite], force: bool = False) -> list[Sprite]:
        """Return the subset of ``sprites`` that must be regenerated."""
        if force:
            return list(sprites)

        embedded = read_embedded_payloads(self.project.sass_path)
        stale = []
        for sprite in sprites:
            if self.tracker.stale(sprite):
                stale.append(sprite)
            elif sprite.is_data_uri and sprite.name not in embedded:
                # Its image only ever lived in the stylesheet, which has lost it.
                stale.append(sprite)
        return stale

    async def build(
        self,
        names: Sequence[str] | None = None,
        *,
        force: bool = False,
        fast: bool = False,
    ) -> BuildResult:
        """Build the requested sprites, then emit stylesheets for the whole project.

        Args:
            names: Sprite names to consider; all sprites when empty
            force: Rebuild regardless of the cache
            fast: Skip optimisation of generated images

        Returns:
            BuildResult describing generated, skipped and failed units

        Raises:
            ConfigurationError: If a requested sprite does not exist
        """
        start_time = time.perf_counter()

        selected = self.select(names)
        stale = self.stale_sprites(selected, force=force)
        stale_names = {sprite.name for sprite in stale}
        skipped = [sprite.name for sprite in selected if sprite.name not in stale_names]

        logger.debug(f"{len(stale)} of {len(selected)} sprite(s) need generating")

        failures: dict[str, str] = {}
        layouts = self._layouts(failures)
        deviants: dict[str, list[Placement]] = {}
        stylesheets: list[str] = []

        with scratch_directory(self.project) as scratch:
            semaphore = asyncio.Semaphore(self.max_workers)

            async def bounded(sprite: Sprite) -> UnitResult:
                async with semaphore:
                    return await self._build_unit(sprite, layouts[sprite.name], scratch, fast)

            buildable = [sprite for sprite in stale if sprite.name in layouts]
            units = list(await asyncio.gather(*(bounded(s) for s in buildable)))

            for unit in units:
                if unit.success:
                    offenders = find_deviants(layouts[unit.sprite])
                    if offenders:
                        deviants[unit.sprite] = offenders
                else:
                    failures[unit.sprite] = unit.error or "unknown error"

            stylesheets = self._emit(layouts, scratch, failures)

        self.tracker.write()

        return BuildResult(
            units=units,
            skipped=skipped,
            failures=failures,
            stylesheets=stylesheets,
            deviants=deviants,
            total_duration_ms=(time.perf_counter() - start_time) * 1000,
        )

    # --- steps -----------------------------------------------------------

    def _layouts(self, failures: dict[str, str]) -> dict[str, LayoutResult]:
        """Lay out every sprite; the stylesheet describes all of them."""
        layouts: dict[str, LayoutResult] = {}
        for sprite in self.project.sprites:
            try:
                layouts[sprite.name] = compute_layout(sprite, self.inspector)
            except SpritelyError as e:
                logger.error(f"Could not lay out '{sprite.name}': {e}")
                failures[sprite.name] = str(e)
        return layouts

    async def _build_unit(
        self, sprite: Sprite, layout: LayoutResult, scratch: Path | None, fast: bool
    ) -> UnitResult:
        log = get_logger(__name__, sprite=sprite.name)
        try:
            target = await asyncio.to_thread(self._render, sprite, layout, scratch)
            size = target.stat().st_size
            log.info(f"Generated {sprite.name}")

            bytes_saved = None
            if not fast:
                bytes_saved = await asyncio.to_thread(self.optimiser.optimise, target)

            # A later `optimise` run can skip an optimised file.
            record_target = not fast and not sprite.is_data_uri
            await asyncio.to_thread(self._record, sprite, target if record_target else None)

            return success_unit(
                sprite.name,
                bytes_saved=bytes_saved,
                metadata={"width": layout.width, "height": layout.height, "size": size},
            )
        except SpritelyError as e:
            log.error(f"Failed to build '{sprite.name}': {e}")
            return failure_unit(sprite.name, str(e))

    def _render(self, sprite: Sprite, layout: LayoutResult, scratch: Path | None) -> Path:
        placements = []
        for source, placement in zip(sprite.sources, layout.placements, strict=True):
            if not source.path.is_file():
                raise MissingSourceError(source.path, sprite.name)
            placements.append((source.path, placement.x, placement.y))

        data = self.composer.compose(placements, layout.size)

        if sprite.save_path is None:
            if scratch is None:
                raise SpritelyError(f"No scratch directory for data URI sprite '{sprite.name}'")
            target = rendered_path(scratch, sprite.name)
        else:
            target = sprite.save_path

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as e:
            raise TargetNotWritableError(target, sprite.name) from e
        return target

    def _record(self, sprite: Sprite, target: Path | None) -> None:
        self.tracker.set(sprite)
        if target is not None:
            self.tracker.set(target)

    def _emit(
        self, layouts: dict[str, LayoutResult], scratch: Path | None, failures: dict[str, str]
    ) -> list[str]:
        missing = [sprite.name for sprite in self.project.sprites if sprite.name not in layouts]
        if missing:
            failures[STYLESHEET_FAILURE_KEY] = (
                f"Stylesheets not written: no layout for {', '.join(missing)}"
            )
            return []

        written = []
        try:
            payloads = resolve_payloads(self.project, scratch)
            for emitter in self.emitters:
                if emitter.generate(self.project, layouts, payloads):
                    written.append(emitter.label)
        except SpritelyError as e:
            logger.error(f"Could not write stylesheets: {e}")
            failures[STYLESHEET_FAILURE_KEY] = str(e)
        return written
