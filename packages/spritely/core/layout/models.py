"""Layout result models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Placement(BaseModel):
    """Top-left offset and size of one source within its sprite canvas."""

    name: str
    x: int = Field(ge=0)
    y: int = Field(ge=0)
    width: int = Field(ge=0)
    height: int = Field(ge=0)

    model_config = ConfigDict(frozen=True)


class LayoutResult(BaseModel):
    """Placements for every source of a sprite, in source order, plus canvas size.

    Derived on every run; never persisted.
    """

    placements: tuple[Placement, ...] = ()
    width: int = Field(default=0, ge=0)
    height: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def placement(self, name: str) -> Placement | None:
        return next((p for p in self.placements if p.name == name), None)

    def position_of(self, name: str) -> int:
        """Return the stored vertical offset of source ``name``.

        Raises:
            KeyError: If the sprite has no such source
        """
        placement = self.placement(name)
        if placement is None:
            raise KeyError(name)
        return placement.y
