"""Structured logging for tasklist.

Thin layer over the stdlib ``logging`` module:

- ``get_logger(name)`` returns a ``StructuredLogger`` that accepts keyword
  context (``logger.info("Saved", path=..., count=3)``).
- ``configure_logging(level, format)`` installs a single handler on the
  ``tasklist`` logger with either a human or a JSON formatter.

Example:
    ```python
    from tasklist.logging import configure_logging, get_logger

    configure_logging(level="DEBUG", format="json")
    logger = get_logger("tasklist.store")
    logger.info("Task added", task_id=3)
    ```
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any, Literal

__all__ = [
    "HumanFormatter",
    "JSONFormatter",
    "StructuredLogger",
    "configure_logging",
    "get_logger",
]

ROOT_LOGGER_NAME = "tasklist"

LogFormat = Literal["human", "json"]

# Attributes present on every LogRecord; anything else was passed as context.
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys() | {"message", "asctime"}
)


def _context_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {k: v for k, v in record.__dict__.items() if k not in _RESERVED_ATTRS}


class JSONFormatter(logging.Formatter):
    """One JSON object per line, for machine consumption."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.levelno >= logging.ERROR:
            data["location"] = {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName,
            }
        data.update(_context_fields(record))
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        return json.dumps(data, default=str)


class HumanFormatter(logging.Formatter):
    """Compact single-line output for terminals."""

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        line = f"{ts} {record.levelname:<8} {record.name}: {record.getMessage()}"
        context = _context_fields(record)
        if context:
            line += " " + " ".join(f"{k}={v}" for k, v in context.items())
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class StructuredLogger:
    """Logger wrapper that turns keyword arguments into record attributes."""

    def __init__(self, name: str):
        self.name = name
        self._logger = logging.getLogger(name)

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def _log(self, level: int, msg: str, exc_info: Any = None, **context: Any) -> None:
        if not self._logger.isEnabledFor(level):
            return
        extra = {(f"ctx_{k}" if k in _RESERVED_ATTRS else k): v for k, v in context.items()}
        self._logger.log(level, msg, exc_info=exc_info, extra=extra, stacklevel=3)

    def debug(self, msg: str, **context: Any) -> None:
        self._log(logging.DEBUG, msg, **context)

    def info(self, msg: str, **context: Any) -> None:
        self._log(logging.INFO, msg, **context)

    def warning(self, msg: str, **context: Any) -> None:
        self._log(logging.WARNING, msg, **context)

    def error(self, msg: str, **context: Any) -> None:
        self._log(logging.ERROR, msg, **context)

    def exception(self, msg: str, **context: Any) -> None:
        self._log(logging.ERROR, msg, exc_info=True, **context)

    def child(self, suffix: str) -> StructuredLogger:
        return StructuredLogger(f"{self.name}.{suffix}")


def get_logger(name: str) -> StructuredLogger:
    """Return a StructuredLogger, namespaced under ``tasklist``."""
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return StructuredLogger(name)


def configure_logging(
    level: str | int = "WARNING",
    format: LogFormat = "human",
    stream: Any = None,
) -> logging.Logger:
    """Configure the ``tasklist`` logger hierarchy.

    Calling this again replaces the handler installed by a previous call.

    Args:
        level: Level name ("DEBUG", "INFO", ...) or number.
        format: "human" for terminal output, "json" for one object per line.
        stream: Output stream, stderr by default.

    Returns:
        The configured ``tasklist`` logger.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    root.setLevel(level)

    for handler in list(root.handlers):
        if getattr(handler, "_tasklist_handler", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JSONFormatter() if format == "json" else HumanFormatter())
    handler._tasklist_handler = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    return root
