"""Base64 payloads for data URI sprites.

The rendered image only exists in the build's scratch directory for the run
that produced it. When a data URI sprite was not rebuilt, its payload is
recovered from the previously generated Sass document instead.
"""

from __future__ import annotations

import base64
import logging
from pathlib import Path
import re

from spritely.core.errors import SpritelyError
from spritely.core.project.models import Project

logger = logging.getLogger(__name__)

_EMBEDDED_RE = re.compile(
    r"^\.(?P<name>\S+)_data\n[ \t]+background: url\(data:image/png;base64,(?P<payload>[A-Za-z0-9+/=]*)\)",
    re.MULTILINE,
)


def encode_payload(data: bytes) -> str:
    """Base64-encode image bytes without line breaks."""
    return base64.b64encode(data).decode("ascii")


def read_embedded_payloads(sass_path: Path | None) -> dict[str, str]:
    """Return ``{sprite name: payload}`` found in an existing Sass document."""
    if sass_path is None or not sass_path.is_file():
        return {}
    text = sass_path.read_text(encoding="utf-8")
    return {m.group("name"): m.group("payload") for m in _EMBEDDED_RE.finditer(text)}


def rendered_path(data_uri_dir: Path, sprite_name: str) -> Path:
    """Scratch location of a data URI sprite's rendered image."""
    return data_uri_dir / f"{sprite_name}.png"


def resolve_payloads(project: Project, data_uri_dir: Path | None = None) -> dict[str, str]:
    """Collect the payload of every data URI sprite in ``project``.

    Freshly rendered bytes win; otherwise the previously embedded payload is
    kept so the stylesheet stays unchanged.

    Raises:
        SpritelyError: If a sprite has neither rendered bytes nor a previous payload
    """
    if not project.data_uri_sprites:
        return {}

    previous = read_embedded_payloads(project.sass_path)
    payloads: dict[str, str] = {}

    for sprite in project.data_uri_sprites:
        path = rendered_path(data_uri_dir, sprite.name) if data_uri_dir else None
        if path is not None and path.is_file():
            payloads[sprite.name] = encode_payload(path.read_bytes())
        elif sprite.name in previous:
            logger.debug(f"Reusing embedded data for '{sprite.name}'")
            payloads[sprite.name] = previous[sprite.name]
        else:
            raise SpritelyError(f"No image data available for data URI sprite '{sprite.name}'")

    return payloads
