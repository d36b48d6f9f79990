"""Sample project creation for ``spritely init``."""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image

from spritely.core.errors import SpritelyError
from spritely.core.stylesheet.renderer import TemplateRenderer

logger = logging.getLogger(__name__)

SAMPLE_CONFIG_NAME = ".spritely"
DEFAULT_SPRITES_DIR = "public/images"
SOURCES_PLACEHOLDER = "<sprites>"
DEFAULT_SOURCES_DIR = f"{SOURCES_PLACEHOLDER}/sprites"

SAMPLE_CONFIG_TEMPLATE = """\
# Spritely project configuration.
#
# Each entry under "sprites" maps a glob of source images to the sprite
# they are combined into. A ":name" segment creates one sprite per matching
# directory, named after it.

# Where the Sass mixin file is written ("false" disables it).
sass: public/stylesheets/sass

# Write a plain CSS file as well.
css: false

# Transparent space between sources, in pixels.
padding: 20

# URL of each sprite as seen from your stylesheets.
url: /images/:name.png

sprites:
  - "{{ sources }}/:name/*": "{{ sprites }}/:name.png"
"""

# (sprite directory, file name, size, RGBA fill)
EXAMPLE_SOURCES = (
    ("fry", "one.png", (50, 50), (231, 76, 60, 255)),
    ("fry", "two.png", (50, 30), (52, 152, 219, 255)),
)


def write_sample_project(
    root: Path,
    sprites_dir: str = DEFAULT_SPRITES_DIR,
    sources_dir: str = DEFAULT_SOURCES_DIR,
    examples: bool = True,
) -> list[Path]:
    """Write a sample config (and example sources) into ``root``.

    Args:
        root: Project directory
        sprites_dir: Where generated sprites are saved, relative to ``root``
        sources_dir: Where source images live; ``<sprites>`` is replaced
            with ``sprites_dir``
        examples: Also write a pair of example source images

    Returns:
        Paths written, config first

    Raises:
        SpritelyError: If ``root`` already holds a config
    """
    config_path = root / SAMPLE_CONFIG_NAME
    if config_path.exists():
        raise SpritelyError(f"A {SAMPLE_CONFIG_NAME} file already exists in {root}")

    sources_dir = sources_dir.replace(SOURCES_PLACEHOLDER, sprites_dir)
    text = TemplateRenderer().render(
        SAMPLE_CONFIG_TEMPLATE, {"sprites": sprites_dir, "sources": sources_dir}
    )

    root.mkdir(parents=True, exist_ok=True)
    config_path.write_text(text, encoding="utf-8")
    written = [config_path]

    if examples:
        for sprite, filename, size, colour in EXAMPLE_SOURCES:
            path = root / sources_dir / sprite / filename
            path.parent.mkdir(parents=True, exist_ok=True)
            Image.new("RGBA", size, colour).save(path, format="PNG")
            written.append(path)

    logger.info(f"Created sample project in {root}")
    return written
