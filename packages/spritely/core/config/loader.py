"""Configuration loading utilities with JSON and YAML support."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError
import yaml

from spritely.core.config.models import (
    GLOBAL_KEYS,
    SPRITE_OPTION_KEYS,
    Directive,
    GlobalDirective,
    SpriteDirective,
    SpriteOptions,
)
from spritely.core.errors import ConfigurationError, MissingMappingError, MissingProjectError

logger = logging.getLogger(__name__)

# Searched in order within each directory while ascending.
CONFIG_FILENAMES = (".spritely", "spritely.yml", "spritely.yaml", "spritely.json")

_GLOBAL_PREFIX = "config."


def detect_format(file_path: Path | str) -> str:
    """Detect config file format from its name.

    Args:
        file_path: Path to config file

    Returns:
        Format string: "json" or "yaml"

    Raises:
        ConfigurationError: If format cannot be determined

    Example:
        >>> detect_format("spritely.json")
        'json'
        >>> detect_format(".spritely")
        'yaml'
    """
    path = Path(file_path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return "json"
    elif suffix in [".yaml", ".yml"] or path.name == ".spritely":
        return "yaml"
    else:
        raise ConfigurationError(f"Unsupported config format: {path.name}")


def load_config(path: str | Path) -> dict[str, Any]:
    """Load and return the raw configuration table.

    Args:
        path: Path to config file (.spritely, .json, .yaml, or .yml)

    Returns:
        Raw configuration dictionary (empty for an empty document)

    Raises:
        MissingProjectError: If config file does not exist
        ConfigurationError: If format is not supported or content is invalid
    """
    path = Path(path)

    if not path.is_file():
        raise MissingProjectError(path)

    fmt = detect_format(path)

    if fmt == "json":
        try:
            content = json.loads(path.read_text(encoding="utf-8") or "{}")
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in {path}: {e.msg} (line {e.lineno})") from e
    else:
        try:
            with path.open("r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except yaml.YAMLError as e:
            problem = getattr(e, "problem", None) or "syntax error"
            raise ConfigurationError(f"Invalid YAML in {path}: {problem}") from e

    # safe_load returns None for empty files
    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping at the top level")
    return content


def find_config(path: str | Path) -> Path:
    """Locate the project configuration file.

    If given a file, that file is the config. Otherwise each directory from
    ``path`` up to the filesystem root is searched for one of
    ``CONFIG_FILENAMES``.

    Args:
        path: A directory inside the project, or the config file itself

    Returns:
        Absolute path to the configuration file

    Raises:
        MissingProjectError: If no configuration file could be found
    """
    start = Path(path).expanduser().resolve()
    if start.is_file():
        return start
    if not start.is_dir():
        raise MissingProjectError(start)

    for directory in (start, *start.parents):
        for filename in CONFIG_FILENAMES:
            candidate = directory / filename
            if candidate.is_file():
                logger.debug(f"Found config at {candidate}")
                return candidate

    raise MissingProjectError(start)


def parse_directives(raw: dict[str, Any]) -> list[Directive]:
    """Turn a raw configuration table into an ordered list of directives.

    Global keys may appear before or after ``sprites``; ordering is kept so
    that the resolver sees the document as written.

    Raises:
        ConfigurationError: On unknown keys or malformed sprite entries
    """
    directives: list[Directive] = []

    for key, value in raw.items():
        bare = key[len(_GLOBAL_PREFIX) :] if key.startswith(_GLOBAL_PREFIX) else key

        if bare in GLOBAL_KEYS:
            directives.append(GlobalDirective(key=bare, value=value))
        elif key == "sprites":
            if not isinstance(value, list):
                raise ConfigurationError("'sprites' must be a list of sprite definitions")
            directives.extend(parse_sprite_directive(entry) for entry in value)
        else:
            raise ConfigurationError(f"Unknown configuration key: '{key}'")

    return directives


def parse_sprite_directive(entry: Any) -> SpriteDirective:
    """Split one sprite entry into its mapping pair and its options.

    Raises:
        MissingMappingError: If the entry holds no ``{source: destination}`` pair
        ConfigurationError: If it holds more than one pair, or bad options
    """
    if not isinstance(entry, dict):
        raise MissingMappingError("Sprite definition is missing a { source => sprite } pair.")

    options = {k: v for k, v in entry.items() if k in SPRITE_OPTION_KEYS}
    pairs = [(k, v) for k, v in entry.items() if k not in SPRITE_OPTION_KEYS]

    if not pairs:
        raise MissingMappingError("Sprite definition is missing a { source => sprite } pair.")
    if len(pairs) > 1:
        listed = ", ".join(str(k) for k, _ in pairs)
        raise ConfigurationError(f"Sprite definition has more than one source pair: {listed}")

    source, destination = pairs[0]
    if not isinstance(destination, str):
        raise ConfigurationError(f"Sprite '{source}' must map to a destination path or data_uri")

    try:
        sprite_options = SpriteOptions.model_validate(options)
    except ValidationError as e:
        first = e.errors()[0]
        raise ConfigurationError(
            f"Invalid option '{first['loc'][0]}' for sprite '{source}': {first['msg']}"
        ) from e

    return SpriteDirective(source=str(source), destination=destination, options=sprite_options)


def load_directives(path: str | Path) -> list[Directive]:
    """Load a config file and return its directives."""
    return parse_directives(load_config(path))
