"""Concrete CSS statements for a single source.

Adjustments are supplied by the caller and added to the stored offset at
query time; the layout itself is never changed. Stored offsets are
positive, CSS background positions are their negation.
"""

from __future__ import annotations

from spritely.core.layout.models import LayoutResult, Placement
from spritely.core.project.models import Sprite


def data_uri(payload: str) -> str:
    """Wrap a base64 PNG payload as a CSS ``url()`` target."""
    return f"data:image/png;base64,{payload}"


def offset(placement: Placement, x_adjust: int = 0, y_adjust: int = 0) -> str:
    """CSS position of a placement with caller adjustments applied.

    Example:
        >>> offset(Placement(name="two", x=0, y=40, width=10, height=20), y_adjust=-10)
        '0px -50px'
    """
    return f"{x_adjust - placement.x}px {y_adjust - placement.y}px"


def _placement(layout: LayoutResult, sprite: Sprite, source: str) -> Placement:
    placement = layout.placement(source)
    if placement is None:
        raise KeyError(f"No such source: {sprite.logical_name(source)}")
    return placement


def background_statement(
    sprite: Sprite,
    layout: LayoutResult,
    source: str,
    x_adjust: int = 0,
    y_adjust: int = 0,
    payload: str | None = None,
) -> str | None:
    """Full ``background`` declaration for ``source``.

    None for a data URI sprite whose ``payload`` is not known yet.

    Example:
        ``background: url(/images/fry.png) 0px -40px no-repeat;``
    """
    position = offset(_placement(layout, sprite, source), x_adjust, y_adjust)
    if sprite.is_data_uri:
        if payload is None:
            return None
        target = data_uri(payload)
    else:
        target = sprite.url
    return f"background: url({target}) {position} no-repeat;"


def position_statement(
    sprite: Sprite,
    layout: LayoutResult,
    source: str,
    x_adjust: int = 0,
    y_adjust: int = 0,
) -> str:
    """``background-position`` declaration for ``source``.

    Example:
        ``background-position: 0px -40px;``
    """
    position = offset(_placement(layout, sprite, source), x_adjust, y_adjust)
    return f"background-position: {position};"
