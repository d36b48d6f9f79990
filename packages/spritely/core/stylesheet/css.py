"""Plain CSS generation: one class per source."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
import re
from typing import Any

from spritely.core.layout.models import LayoutResult
from spritely.core.project.models import Project
from spritely.core.stylesheet.emitter import StylesheetEmitter
from spritely.core.stylesheet.statements import data_uri, offset

CSS_TEMPLATE = """\
/* Generated by Spritely. Changes to this file will be overwritten. */
{% for entry in entries %}

.{{ entry.selector }} {
  background: url({{ entry.target }}) {{ entry.position }} no-repeat;
}
{% endfor %}
"""

_UNSAFE_SELECTOR_CHARS = re.compile(r"[^A-Za-z0-9_-]+")


def selector_for(sprite_name: str, source_name: str) -> str:
    """Class name for a source, e.g. ``fry-one``."""
    return _UNSAFE_SELECTOR_CHARS.sub("-", f"{sprite_name}-{source_name}")


class CSSEmitter(StylesheetEmitter):
    """Writes a CSS document with one rule per source."""

    template = CSS_TEMPLATE
    label = "CSS"

    def output_path(self, project: Project) -> Path | None:
        return project.css_path

    def entries(
        self,
        project: Project,
        layouts: Mapping[str, LayoutResult],
        payloads: Mapping[str, str],
    ) -> list[dict[str, Any]]:
        entries = []
        for sprite in project.sprites:
            layout = self._layout(layouts, sprite.name)
            for placement in layout.placements:
                if sprite.is_data_uri:
                    target = data_uri(payloads[sprite.name])
                else:
                    target = sprite.url
                entries.append(
                    {
                        "selector": selector_for(sprite.name, placement.name),
                        "target": target,
                        "position": offset(placement),
                    }
                )
        return entries
