"""Error hierarchy for tasklist.

All tasklist errors share a common base so callers can catch one type:

    TaskListError
    ├── ConfigurationError
    └── PersistenceError
        ├── TaskFileReadError
        ├── TaskFileWriteError
        └── TaskFormatError

The store never raises these to its caller. The persistence adapter builds
them to describe what went wrong, and the store records the latest one on
``TaskStore.last_error`` after logging it.

Example:
    ```python
    from tasklist.errors import TaskListError

    try:
        config = TaskListConfig.from_env()
    except TaskListError as e:
        print(e)  # message plus "Hint: ..." when available
    ```
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Literal

__all__ = [
    "ConfigurationError",
    "PersistenceError",
    "TaskFileReadError",
    "TaskFileWriteError",
    "TaskFormatError",
    "TaskListError",
    "log_exception",
]


def log_exception(
    logger: logging.Logger | Any,
    msg: str,
    exc: BaseException,
    level: Literal["debug", "info", "warning", "error"] = "warning",
    include_traceback: bool = True,
) -> None:
    """Log a caught exception with its type name attached.

    Args:
        logger: A stdlib logger or a StructuredLogger.
        msg: What was being attempted.
        exc: The exception that was caught.
        level: Log level name.
        include_traceback: Attach exc_info to the record.
    """
    log = getattr(logger, level)
    text = f"{msg}: {type(exc).__name__}: {exc}"
    if include_traceback:
        log(text, exc_info=(type(exc), exc, exc.__traceback__))
    else:
        log(text)


class TaskListError(Exception):
    """Base exception for all tasklist errors.

    Attributes:
        message: Human-readable error message.
        details: Extra structured context.
        hint: Suggestion for fixing the problem.
    """

    def __init__(
        self,
        message: str,
        *,
        details: dict[str, Any] | None = None,
        hint: str | None = None,
    ):
        self.message = message
        self.details = details or {}
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.message]
        if self.hint:
            parts.append(f"Hint: {self.hint}")
        return "\n".join(parts)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


class ConfigurationError(TaskListError):
    """Invalid configuration value (environment or .env)."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        hint: str | None = None,
    ):
        self.config_key = config_key
        details: dict[str, Any] = {}
        if config_key:
            details["config_key"] = config_key
        super().__init__(message, details=details, hint=hint)


# =============================================================================
# Persistence Errors
# =============================================================================


class PersistenceError(TaskListError):
    """A read or write of the persisted task file failed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | str | None = None,
        details: dict[str, Any] | None = None,
        hint: str | None = None,
    ):
        self.path = Path(path) if path is not None else None
        details = dict(details or {})
        if self.path is not None:
            details["path"] = str(self.path)
        super().__init__(message, details=details, hint=hint)


class TaskFileReadError(PersistenceError):
    """The task file exists but could not be read."""

    def __init__(self, path: Path | str, reason: str):
        super().__init__(
            f"Could not read task file {path}: {reason}",
            path=path,
            details={"reason": reason},
            hint="Check the file permissions.",
        )


class TaskFileWriteError(PersistenceError):
    """The task file could not be written."""

    def __init__(self, path: Path | str, reason: str):
        super().__init__(
            f"Could not write task file {path}: {reason}",
            path=path,
            details={"reason": reason},
            hint="Changes are kept in memory and saved again on the next change.",
        )


class TaskFormatError(PersistenceError):
    """The task file content does not match the expected schema."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | str | None = None,
        field: str | None = None,
    ):
        self.field = field
        details: dict[str, Any] = {}
        if field:
            details["field"] = field
        super().__init__(
            message,
            path=path,
            details=details,
            hint="The file is ignored and the list starts empty."
            " It is overwritten on the next change.",
        )
