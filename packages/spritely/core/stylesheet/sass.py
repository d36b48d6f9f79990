"""Sass mixin generation.

The generated document defines two mixins, each taking a ``sprite/source``
identifier plus optional x/y adjustments:

    +spritely("fry/one")                   // full background declaration
    +spritely-position("fry/two", 0px, -10px)  // background-position only

Data URI sprites carry their image in a ``.<sprite>_data`` placeholder class
which the mixin extends, so the payload appears once per sprite.
"""

from __future__ import annotations

from pathlib import Path

from spritely.core.project.models import Project
from spritely.core.stylesheet.emitter import StylesheetEmitter

SASS_TEMPLATE = """\
// Generated by Spritely. Changes to this file will be overwritten.
{% for sprite in data_sprites %}

.{{ sprite.name }}_data
  background: url(data:image/png;base64,{{ sprite.payload }}) no-repeat
{% endfor %}

=spritely($source, $x-offset: 0px, $y-offset: 0px)
{% for entry in entries %}
  {{ "@if" if loop.first else "@else if" }} $source == "{{ entry.key }}"
{% if entry.data_uri %}
    @extend .{{ entry.sprite }}_data
    background-position: ($x-offset - {{ entry.x }}px) ($y-offset - {{ entry.y }}px)
{% else %}
    background: url({{ entry.url }}) ($x-offset - {{ entry.x }}px) ($y-offset - {{ entry.y }}px) no-repeat
{% endif %}
{% else %}
  @warn "No sprite sources are defined"
{% endfor %}

=spritely-position($source, $x-offset: 0px, $y-offset: 0px)
{% for entry in entries %}
  {{ "@if" if loop.first else "@else if" }} $source == "{{ entry.key }}"
    background-position: ($x-offset - {{ entry.x }}px) ($y-offset - {{ entry.y }}px)
{% else %}
  @warn "No sprite sources are defined"
{% endfor %}
"""


class SassEmitter(StylesheetEmitter):
    """Writes the Sass mixin document."""

    template = SASS_TEMPLATE
    label = "Sass mixins"

    def output_path(self, project: Project) -> Path | None:
        return project.sass_path
