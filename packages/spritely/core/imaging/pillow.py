"""Pillow-backed image inspector and composer."""

from __future__ import annotations

from collections.abc import Sequence
import io
import logging
from pathlib import Path

from PIL import Image

from spritely.core.errors import MissingSourceError, UnreadableImageError

logger = logging.getLogger(__name__)


class PillowImageInspector:
    """Reads image dimensions without decoding pixel data."""

    def dimensions(self, path: Path) -> tuple[int, int]:
        try:
            with Image.open(path) as image:
                return image.size
        except FileNotFoundError as e:
            raise MissingSourceError(path) from e
        except OSError as e:
            raise UnreadableImageError(path, e) from e


class PillowImageComposer:
    """Stacks sources onto a transparent RGBA canvas and encodes it as PNG."""

    def compose(self, placements: Sequence[tuple[Path, int, int]], size: tuple[int, int]) -> bytes:
        width, height = size
        # PNG cannot encode a zero-sized image.
        canvas = Image.new("RGBA", (max(width, 1), max(height, 1)), (0, 0, 0, 0))

        for path, x, y in placements:
            try:
                with Image.open(path) as source:
                    canvas.paste(source.convert("RGBA"), (x, y))
            except FileNotFoundError as e:
                raise MissingSourceError(path) from e
            except (OSError, SyntaxError) as e:
                # Pillow reports some corrupt PNG chunks as SyntaxError.
                raise UnreadableImageError(path, e) from e

        buffer = io.BytesIO()
        canvas.save(buffer, format="PNG")
        logger.debug(f"Composed {len(placements)} source(s) into {width}x{height} canvas")
        return buffer.getvalue()
