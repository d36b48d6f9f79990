"""Tests for logging setup."""

from __future__ import annotations

import json
import logging
from pathlib import Path
import sys

import pytest

from spritely.core.utils.logging import (
    ContextAdapter,
    StructuredJSONFormatter,
    configure_logging,
    get_logger,
    record_context,
)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Put the root logger back the way pytest configured it."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def make_record(msg: str = "Generated fry", level: int = logging.INFO, exc_info=None):
    return logging.LogRecord(
        name="spritely.test",
        level=level,
        pathname="/path/to/orchestrator.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )


class TestStructuredJSONFormatter:
    """Tests for StructuredJSONFormatter."""

    def test_fixed_keys(self):
        data = json.loads(StructuredJSONFormatter().format(make_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "spritely.test"
        assert data["message"] == "Generated fry"
        assert "time" in data
        assert "error" not in data

    def test_context_at_top_level(self):
        record = make_record()
        record.sprite = "fry"
        record.path = Path("/site/images/fry.png")

        data = json.loads(StructuredJSONFormatter().format(record))

        assert data["sprite"] == "fry"
        assert data["path"] == "/site/images/fry.png"

    def test_error_object(self):
        try:
            raise ValueError("bad PNG")
        except ValueError:
            exc_info = sys.exc_info()

        record = make_record("Failed", logging.ERROR, exc_info)
        data = json.loads(StructuredJSONFormatter().format(record))

        assert data["error"]["type"] == "ValueError"
        assert data["error"]["message"] == "bad PNG"
        assert "ValueError: bad PNG" in data["error"]["traceback"]


def test_record_context_ignores_standard_attributes():
    record = make_record()
    record.sprite = "fry"
    record._private = True

    assert record_context(record) == {"sprite": "fry"}


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_text_goes_to_stderr(self, capsys):
        configure_logging(level="info")

        logging.getLogger("spritely.text").info("Generated fry")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "spritely.text: Generated fry" in captured.err

    def test_level_filters(self, capsys):
        configure_logging(level="WARNING")

        logging.getLogger("spritely.quiet").info("hidden")

        assert "hidden" not in capsys.readouterr().err

    def test_json_lines_to_file(self, tmp_path: Path):
        log_file = tmp_path / "build.jsonl"
        configure_logging(level="DEBUG", structured=True, filename=str(log_file))

        get_logger("spritely.file", sprite="fry").debug("Rendering")
        logging.getLogger("spritely.file").warning("Slow")
        for handler in logging.getLogger().handlers:
            handler.flush()

        lines = [json.loads(line) for line in log_file.read_text().splitlines() if line]
        assert [line["level"] for line in lines[-2:]] == ["DEBUG", "WARNING"]
        assert lines[-2]["sprite"] == "fry"
        assert "sprite" not in lines[-1]

    def test_noisy_loggers_quietened(self):
        configure_logging(level="DEBUG")

        assert logging.getLogger("PIL").level == logging.ERROR
        assert logging.getLogger("asyncio").level == logging.ERROR


class TestGetLogger:
    """Tests for get_logger."""

    def test_plain_logger(self):
        assert get_logger("spritely.plain") is logging.getLogger("spritely.plain")

    def test_context_adapter(self):
        logger = get_logger("spritely.ctx", sprite="fry")

        assert isinstance(logger, ContextAdapter)
        assert logger.extra == {"sprite": "fry"}

    def test_call_extra_merges_with_bound_context(self, caplog):
        logger = get_logger("spritely.merge", sprite="fry")

        with caplog.at_level(logging.INFO, logger="spritely.merge"):
            logger.info("Optimised", extra={"bytes_saved": 12})

        record = caplog.records[-1]
        assert record.sprite == "fry"
        assert record.bytes_saved == 12
