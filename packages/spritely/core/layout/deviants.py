"""Detection of sources much wider than their siblings.

The canvas is as wide as its widest source, so one wide source leaves the
rest of the sprite mostly transparent.
"""

from __future__ import annotations

from statistics import median

from spritely.core.layout.models import LayoutResult, Placement

DEVIANCE_FACTOR = 2.0


def find_deviants(layout: LayoutResult, factor: float = DEVIANCE_FACTOR) -> list[Placement]:
    """Return placements wider than ``factor`` times the median source width.

    Sprites with fewer than two sources never have deviants.
    """
    if len(layout.placements) < 2:
        return []

    typical = median(p.width for p in layout.placements)
    return [p for p in layout.placements if p.width > typical * factor]


def format_deviants_message(sprite_name: str, deviants: list[Placement]) -> str:
    """Human-readable warning listing the deviant sources of a sprite."""
    listed = ", ".join(f"{p.name} ({p.width}px)" for p in deviants)
    return (
        f"The '{sprite_name}' sprite contains sources which are much wider than the others: "
        f"{listed}. Consider moving them to a separate sprite."
    )
