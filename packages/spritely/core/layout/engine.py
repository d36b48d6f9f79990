"""Single-column sprite layout.

Sources are stacked vertically in order, separated by ``padding`` pixels,
all flush left. A source's offset depends only on the heights of the sources
before it.
"""

from __future__ import annotations

from collections.abc import Sequence

from spritely.core.errors import MissingSourceError
from spritely.core.imaging.protocols import ImageInspector
from spritely.core.layout.models import LayoutResult, Placement
from spritely.core.project.models import Sprite


def stack(sizes: Sequence[tuple[str, int, int]], padding: int) -> LayoutResult:
    """Stack named ``(name, width, height)`` boxes into a single column.

    Example:
        >>> result = stack([("one", 10, 20), ("two", 30, 20)], padding=20)
        >>> [(p.x, p.y) for p in result.placements]
        [(0, 0), (0, 40)]
        >>> result.size
        (30, 60)
    """
    if padding < 0:
        raise ValueError("padding must not be negative")

    placements: list[Placement] = []
    y = 0
    for index, (name, width, height) in enumerate(sizes):
        if index:
            y += padding
        placements.append(Placement(name=name, x=0, y=y, width=width, height=height))
        y += height

    width = max((p.width for p in placements), default=0)
    return LayoutResult(placements=tuple(placements), width=width, height=y)


def compute_layout(sprite: Sprite, inspector: ImageInspector) -> LayoutResult:
    """Compute the layout of a sprite from its ordered sources.

    Raises:
        MissingSourceError: If a source image cannot be found
    """
    try:
        sizes = [(source.name, *source.dimensions(inspector)) for source in sprite.sources]
    except MissingSourceError as e:
        if e.sprite is not None:
            raise
        raise MissingSourceError(e.path, sprite.name) from e
    return stack(sizes, sprite.padding)
