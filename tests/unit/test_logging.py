"""Tests for tasklist logging."""

from __future__ import annotations

import io
import json
import logging
import sys

import pytest

from tasklist.logging import (
    HumanFormatter,
    JSONFormatter,
    StructuredLogger,
    configure_logging,
    get_logger,
)


def make_record(
    level: int = logging.INFO, msg: str = "Test message", **extra
) -> logging.LogRecord:
    record = logging.LogRecord(
        name="tasklist.test",
        level=level,
        pathname="test.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


# =============================================================================
# Formatter Tests
# =============================================================================


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_format_basic_message(self) -> None:
        data = json.loads(JSONFormatter().format(make_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "tasklist.test"
        assert data["message"] == "Test message"
        assert "timestamp" in data
        assert "location" not in data

    def test_format_with_extra(self) -> None:
        data = json.loads(JSONFormatter().format(make_record(task_id=3, path="todos.json")))

        assert data["task_id"] == 3
        assert data["path"] == "todos.json"

    def test_format_error_includes_location(self) -> None:
        data = json.loads(JSONFormatter().format(make_record(level=logging.ERROR)))

        assert data["location"]["line"] == 42

    def test_format_with_exception(self) -> None:
        try:
            raise ValueError("test error")
        except ValueError:
            exc_info = sys.exc_info()
        record = make_record(level=logging.ERROR)
        record.exc_info = exc_info

        data = json.loads(JSONFormatter().format(record))

        assert "ValueError" in data["exception"]


class TestHumanFormatter:
    """Tests for HumanFormatter."""

    def test_format_message(self) -> None:
        output = HumanFormatter().format(make_record(level=logging.WARNING, msg="Careful"))

        assert "WARNING" in output
        assert "tasklist.test: Careful" in output

    def test_format_context(self) -> None:
        output = HumanFormatter().format(make_record(task_id=7))

        assert output.endswith("task_id=7")


# =============================================================================
# StructuredLogger Tests
# =============================================================================


class TestStructuredLogger:
    """Tests for StructuredLogger."""

    def test_context_becomes_record_attributes(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = StructuredLogger("tasklist.test")

        with caplog.at_level(logging.INFO, logger="tasklist"):
            logger.info("Task added", task_id=5)

        assert caplog.records[-1].task_id == 5
        assert "Task added" in caplog.text

    def test_reserved_names_are_prefixed(self, caplog: pytest.LogCaptureFixture) -> None:
        """Context keys that clash with LogRecord attributes do not break logging."""
        logger = StructuredLogger("tasklist.test")

        with caplog.at_level(logging.INFO, logger="tasklist"):
            logger.info("Clash", name="x", levelname="y")

        record = caplog.records[-1]
        assert record.ctx_name == "x"
        assert record.ctx_levelname == "y"
        assert record.levelname == "INFO"

    def test_disabled_level_is_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = StructuredLogger("tasklist.test")

        with caplog.at_level(logging.WARNING, logger="tasklist"):
            logger.debug("hidden")

        assert "hidden" not in caplog.text

    def test_child_logger(self) -> None:
        child = StructuredLogger("tasklist").child("store")

        assert isinstance(child, StructuredLogger)
        assert child.name == "tasklist.store"


class TestGetLogger:
    def test_namespaced_under_tasklist(self) -> None:
        assert get_logger("cli").name == "tasklist.cli"
        assert get_logger("tasklist.store").name == "tasklist.store"
        assert get_logger("tasklist").name == "tasklist"


# =============================================================================
# configure_logging Tests
# =============================================================================


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_sets_level(self) -> None:
        configure_logging(level="DEBUG")

        assert logging.getLogger("tasklist").level == logging.DEBUG

    def test_json_output(self) -> None:
        stream = io.StringIO()
        configure_logging(level="INFO", format="json", stream=stream)

        get_logger("tasklist.test").info("hello", count=2)

        data = json.loads(stream.getvalue().strip())
        assert data["message"] == "hello"
        assert data["count"] == 2

    def test_reconfigure_replaces_handler(self) -> None:
        configure_logging(format="human")
        configure_logging(format="json")

        root = logging.getLogger("tasklist")
        handlers = [h for h in root.handlers if getattr(h, "_tasklist_handler", False)]
        assert len(handlers) == 1
        assert isinstance(handlers[0].formatter, JSONFormatter)
