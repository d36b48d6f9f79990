"""Result types for a build.

Provides immutable result types with success/failure semantics.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from spritely.core.layout.models import Placement


class UnitResult(BaseModel):
    """Result of building a single sprite.

    Never raises; errors are captured in the result.

    Attributes:
        sprite: Name of the sprite
        success: Whether every step for the sprite succeeded
        error: Error message (if success=False)
        bytes_saved: Bytes saved by optimisation, None if not optimised
        metadata: Optional metadata (timing, canvas size, etc.)
    """

    sprite: str = Field(description="Sprite name")
    success: bool = Field(description="Whether the sprite was built successfully")
    error: str | None = Field(default=None, description="Error message (if failure)")
    bytes_saved: int | None = Field(default=None, description="Bytes saved by optimisation")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Optional metadata")

    model_config = ConfigDict(frozen=True, extra="forbid")


def success_unit(
    sprite: str, bytes_saved: int | None = None, metadata: dict[str, Any] | None = None
) -> UnitResult:
    """Create success result.

    Example:
        >>> success_unit("fry", bytes_saved=120).success
        True
    """
    return UnitResult(sprite=sprite, success=True, bytes_saved=bytes_saved, metadata=metadata or {})


def failure_unit(sprite: str, error: str, metadata: dict[str, Any] | None = None) -> UnitResult:
    """Create failure result.

    Example:
        >>> failure_unit("fry", "Source image is missing: one.png").success
        False
    """
    return UnitResult(sprite=sprite, success=False, error=error, metadata=metadata or {})


class BuildResult(BaseModel):
    """Result from a complete build.

    Attributes:
        units: Per-sprite results for every sprite that was (re)built
        skipped: Sprites left alone because they were up to date
        failures: Map of sprite name (or ``stylesheet``) -> error message
        stylesheets: Labels of the stylesheet documents written
        deviants: Map of sprite name -> placements of unusually wide sources
        total_duration_ms: Total build duration

    Example:
        >>> result = await orchestrator.build()
        >>> if not result.success:
        ...     print(f"Failed: {sorted(result.failures)}")
    """

    units: list[UnitResult] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)
    failures: dict[str, str] = Field(default_factory=dict)
    stylesheets: list[str] = Field(default_factory=list)
    deviants: dict[str, list[Placement]] = Field(default_factory=dict)
    total_duration_ms: float = Field(default=0.0, description="Total build duration (ms)")

    model_config = ConfigDict(frozen=True, extra="forbid")

    @property
    def success(self) -> bool:
        return not self.failures

    @property
    def generated(self) -> list[str]:
        """Names of sprites generated successfully."""
        return [unit.sprite for unit in self.units if unit.success]

    @property
    def optimised(self) -> dict[str, int]:
        """Map of sprite name -> bytes saved, for optimised sprites."""
        return {
            unit.sprite: unit.bytes_saved
            for unit in self.units
            if unit.success and unit.bytes_saved is not None
        }
