"""Logging setup for Spritely.

Library modules log through ``logging.getLogger(__name__)`` and never
configure handlers. The CLI calls :func:`configure_logging` once, choosing
between human-readable lines and JSON lines (one object per record).

Output goes to stderr unless a file is given; stdout belongs to commands.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from datetime import UTC, datetime
import json
import logging
import sys
from typing import Any

TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

# Third-party loggers that chatter at DEBUG (PNG chunk parsing, selector choice).
NOISY_LOGGERS = ("PIL", "asyncio")

_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.NOTSET, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}


def record_context(record: logging.LogRecord) -> dict[str, Any]:
    """Fields attached to a record through ``extra`` or a context adapter."""
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RECORD_ATTRS and not key.startswith("_")
    }


class StructuredJSONFormatter(logging.Formatter):
    """One JSON object per record.

    Context fields (``sprite``, ``path`` ...) sit at the top level next to
    the fixed keys, and failures carry an ``error`` object::

        {"time": "...", "level": "ERROR", "logger": "spritely.core.build.orchestrator",
         "message": "Failed to build 'fry': ...", "sprite": "fry",
         "error": {"type": "TargetNotWritableError", "message": "...", "traceback": "..."}}
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(record_context(record))

        if record.exc_info and record.exc_info[0] is not None:
            entry["error"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        # Paths and other objects fall back to str().
        return json.dumps(entry, default=str)


class ContextAdapter(logging.LoggerAdapter):
    """Adapter that merges its bound context with per-call ``extra``."""

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def configure_logging(
    level: str = "WARNING",
    *,
    structured: bool = False,
    filename: str | None = None,
) -> None:
    """Install the single root handler.

    Replaces whatever handlers a previous call installed.

    Args:
        level: Level name, case-insensitive
        structured: Write JSON lines instead of text
        filename: Append to this file instead of writing to stderr
    """
    handler: logging.Handler
    if filename:
        handler = logging.FileHandler(filename)
    else:
        handler = logging.StreamHandler(sys.stderr)

    if structured:
        handler.setFormatter(StructuredJSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    logging.basicConfig(level=level.upper(), handlers=[handler], force=True)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.ERROR)


def get_logger(name: str, **context: Any) -> logging.Logger | ContextAdapter:
    """Return the named logger, bound to ``context`` when any is given.

    >>> log = get_logger(__name__, sprite="fry")
    >>> log.info("Generated fry")  # record.sprite == "fry"
    """
    logger = logging.getLogger(name)
    if context:
        return ContextAdapter(logger, context)
    return logger

