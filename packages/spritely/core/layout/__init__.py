"""Layout engine: deterministic placement of sources within a sprite."""

from spritely.core.layout.deviants import find_deviants, format_deviants_message
from spritely.core.layout.engine import compute_layout, stack
from spritely.core.layout.models import LayoutResult, Placement

__all__ = [
    "LayoutResult",
    "Placement",
    "compute_layout",
    "stack",
    "find_deviants",
    "format_deviants_message",
]
