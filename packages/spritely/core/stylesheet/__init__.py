"""Stylesheet emitters driven by sprite layouts."""

from spritely.core.stylesheet.css import CSSEmitter, selector_for
from spritely.core.stylesheet.emitter import StylesheetEmitter
from spritely.core.stylesheet.payloads import (
    encode_payload,
    read_embedded_payloads,
    rendered_path,
    resolve_payloads,
)
from spritely.core.stylesheet.renderer import RenderError, TemplateRenderer
from spritely.core.stylesheet.sass import SassEmitter
from spritely.core.stylesheet.statements import (
    background_statement,
    data_uri,
    offset,
    position_statement,
)

__all__ = [
    # Emitters
    "StylesheetEmitter",
    "SassEmitter",
    "CSSEmitter",
    # Statements
    "background_statement",
    "position_statement",
    "offset",
    "data_uri",
    "selector_for",
    # Data URI payloads
    "encode_payload",
    "read_embedded_payloads",
    "rendered_path",
    "resolve_payloads",
    # Rendering
    "TemplateRenderer",
    "RenderError",
]
