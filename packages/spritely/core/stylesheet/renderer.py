"""Jinja2 rendering for stylesheet and scaffold templates."""

from __future__ import annotations

import logging
from typing import Any

from jinja2 import Environment, StrictUndefined, Template, TemplateSyntaxError, UndefinedError

from spritely.core.errors import SpritelyError

logger = logging.getLogger(__name__)


class RenderError(SpritelyError):
    """A template referenced a missing variable or failed to parse."""


class TemplateRenderer:
    """Renders template strings in a strict, whitespace-controlled environment.

    Undefined variables raise instead of rendering as empty strings, so a
    stylesheet is never written with holes in it. Output is not escaped:
    the templates produce Sass, CSS and YAML, not HTML.
    """

    def __init__(self) -> None:
        self.env = Environment(
            undefined=StrictUndefined,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self._compiled: dict[str, Template] = {}

    def render(self, template: str, variables: dict[str, Any]) -> str:
        """Render ``template`` with ``variables``.

        Raises:
            RenderError: On a missing variable or a syntax error
        """
        try:
            compiled = self._compiled.get(template)
            if compiled is None:
                compiled = self._compiled[template] = self.env.from_string(template)
            return compiled.render(**variables)
        except UndefinedError as e:
            raise RenderError(f"Missing variable in template: {e}") from e
        except TemplateSyntaxError as e:
            raise RenderError(f"Invalid template syntax on line {e.lineno}: {e.message}") from e
