"""Base class for stylesheet emitters."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from pathlib import Path
from typing import Any

from spritely.core.errors import SpritelyError, TargetNotWritableError
from spritely.core.layout.models import LayoutResult
from spritely.core.project.models import Project
from spritely.core.stylesheet.renderer import TemplateRenderer

logger = logging.getLogger(__name__)


class StylesheetEmitter:
    """Renders one stylesheet document covering every sprite of a project.

    Subclasses provide the template and the configured output path.
    """

    template: str = ""
    label: str = "stylesheet"

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    def output_path(self, project: Project) -> Path | None:
        """Where the document is written, or None when disabled."""
        raise NotImplementedError

    def entries(
        self,
        project: Project,
        layouts: Mapping[str, LayoutResult],
        payloads: Mapping[str, str],
    ) -> list[dict[str, Any]]:
        """One template entry per source, sprites and sources in resolved order."""
        entries = []
        for sprite in project.sprites:
            layout = self._layout(layouts, sprite.name)
            for placement in layout.placements:
                entries.append(
                    {
                        "key": sprite.logical_name(placement.name),
                        "sprite": sprite.name,
                        "source": placement.name,
                        "x": placement.x,
                        "y": placement.y,
                        "url": sprite.url,
                        "data_uri": sprite.is_data_uri,
                        "payload": payloads.get(sprite.name),
                    }
                )
        return entries

    def render(
        self,
        project: Project,
        layouts: Mapping[str, LayoutResult],
        payloads: Mapping[str, str] | None = None,
    ) -> str:
        """Render the document text without writing it."""
        payloads = payloads or {}
        data_sprites = [
            {"name": sprite.name, "payload": payloads[sprite.name]}
            for sprite in project.data_uri_sprites
            if sprite.name in payloads
        ]
        return self.renderer.render(
            self.template,
            {
                "entries": self.entries(project, layouts, payloads),
                "data_sprites": data_sprites,
            },
        )

    def generate(
        self,
        project: Project,
        layouts: Mapping[str, LayoutResult],
        payloads: Mapping[str, str] | None = None,
    ) -> bool:
        """Render and write the document.

        Returns:
            False when this output is disabled by configuration (nothing
            written), True otherwise

        Raises:
            TargetNotWritableError: If the document cannot be written
        """
        path = self.output_path(project)
        if path is None:
            logger.debug(f"{self.label} output disabled")
            return False

        text = self.render(project, layouts, payloads)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise TargetNotWritableError(path) from e

        logger.info(f"Wrote {self.label} to {path}")
        return True

    @staticmethod
    def _layout(layouts: Mapping[str, LayoutResult], name: str) -> LayoutResult:
        try:
            return layouts[name]
        except KeyError:
            raise SpritelyError(f"No layout computed for sprite '{name}'") from None
