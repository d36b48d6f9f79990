"""Configuration management for Spritely."""

from spritely.core.config.loader import (
    CONFIG_FILENAMES,
    detect_format,
    find_config,
    load_config,
    load_directives,
    parse_directives,
)
from spritely.core.config.models import (
    DATA_URI,
    Directive,
    GlobalDirective,
    ProjectSettings,
    SpriteDirective,
    SpriteOptions,
    is_data_uri,
)
from spritely.core.config.resolver import ConfigResolver, derive_cache_path, load_project

__all__ = [
    # Loaders
    "CONFIG_FILENAMES",
    "detect_format",
    "find_config",
    "load_config",
    "load_directives",
    "parse_directives",
    "load_project",
    # Resolution
    "ConfigResolver",
    "derive_cache_path",
    # Models
    "DATA_URI",
    "Directive",
    "GlobalDirective",
    "SpriteDirective",
    "SpriteOptions",
    "ProjectSettings",
    "is_data_uri",
]
