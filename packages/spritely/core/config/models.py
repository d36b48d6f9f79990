"""Configuration models for Spritely.

The front-ends (YAML or JSON) produce an ordered list of directives. The
resolver consumes that list; nothing else does.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Destination marker meaning "inline the sprite into the stylesheet".
DATA_URI = "data_uri"
_DATA_URI_ALIASES = frozenset({DATA_URI, ":data_uri"})

GLOBAL_KEYS = ("cache", "css", "sass", "padding", "url")
SPRITE_OPTION_KEYS = ("name", "padding", "url")


def is_data_uri(destination: Any) -> bool:
    """Return True when a destination is the data URI sentinel."""
    return isinstance(destination, str) and destination in _DATA_URI_ALIASES


def _padding_value(value: Any) -> Any:
    # `false` is an explicit zero, not "unset".
    if value is False:
        return 0
    if value is True:
        raise ValueError("padding must be a number of pixels or false")
    return value


class SpriteOptions(BaseModel):
    """Per-sprite options. ``None`` means "use the project default".

    Example:
        >>> SpriteOptions(padding=False).padding
        0
        >>> SpriteOptions().padding is None
        True
    """

    name: str | None = Field(default=None, description="Explicit sprite name")
    padding: int | None = Field(default=None, ge=0, description="Pixels between sources")
    url: str | None = Field(default=None, description="URL template override")

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("padding", mode="before")
    @classmethod
    def _coerce_padding(cls, value: Any) -> Any:
        return _padding_value(value)


class ProjectSettings(BaseModel):
    """Global project settings; defaults for every sprite."""

    sass: str | bool = Field(
        default="public/stylesheets/sass",
        description="Sass output path (file or directory), or false",
    )
    css: str | bool = Field(default=False, description="CSS output path, or false")
    padding: int = Field(default=20, ge=0, description="Default pixels between sources")
    url: str = Field(default="/images/:name.png", description="URL template")
    cache: str | bool | None = Field(
        default=None, description="Cache file path, false to disable, None for derived"
    )

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("padding", mode="before")
    @classmethod
    def _coerce_padding(cls, value: Any) -> Any:
        return _padding_value(value)

    @field_validator("sass", "css")
    @classmethod
    def _no_true(cls, value: str | bool) -> str | bool:
        if value is True:
            raise ValueError("expected a path or false")
        return value


class GlobalDirective(BaseModel):
    """A project-wide setting, e.g. ``padding: 10``."""

    key: str
    value: Any

    model_config = ConfigDict(frozen=True)


class SpriteDirective(BaseModel):
    """An unresolved ``{source: destination}`` pair plus options."""

    source: str
    destination: str
    options: SpriteOptions = Field(default_factory=SpriteOptions)

    model_config = ConfigDict(frozen=True)

    @property
    def is_data_uri(self) -> bool:
        return is_data_uri(self.destination)

    def __str__(self) -> str:
        return f"{self.source} => {self.destination}"


Directive = GlobalDirective | SpriteDirective
