"""Configuration for the tasklist command line.

Values come from the environment, after loading a ``.env`` file found from
the current directory upwards:

    TASKLIST_FILE        Path of the task file (default: todos.json)
    TASKLIST_LOG_LEVEL   DEBUG, INFO, WARNING, ERROR (default: WARNING)
    TASKLIST_LOG_FORMAT  human or json (default: human)

The store itself takes its path as an argument and reads no environment.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv

from tasklist.errors import ConfigurationError
from tasklist.logging import LogFormat
from tasklist.persistence import DEFAULT_TASK_FILE

__all__ = ["TaskListConfig", "load_env"]

ENV_FILE = "TASKLIST_FILE"
ENV_LOG_LEVEL = "TASKLIST_LOG_LEVEL"
ENV_LOG_FORMAT = "TASKLIST_LOG_FORMAT"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS: tuple[LogFormat, ...] = ("human", "json")


def load_env() -> None:
    """Load ``.env`` into ``os.environ`` once per process."""
    if not os.environ.get("TASKLIST_ENV_LOADED"):
        load_dotenv(find_dotenv(usecwd=True))
        os.environ["TASKLIST_ENV_LOADED"] = "1"


@dataclass(frozen=True)
class TaskListConfig:
    """Settings for one CLI invocation.

    Attributes:
        task_file: Where the task list is persisted.
        log_level: Level for the ``tasklist`` logger.
        log_format: "human" or "json" log lines.
    """

    task_file: Path = Path(DEFAULT_TASK_FILE)
    log_level: str = "WARNING"
    log_format: LogFormat = "human"

    def __post_init__(self) -> None:
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError(
                f"Unknown log level: {self.log_level}",
                config_key=ENV_LOG_LEVEL,
                hint=f"Use one of: {', '.join(LOG_LEVELS)}",
            )
        if self.log_format not in LOG_FORMATS:
            raise ConfigurationError(
                f"Unknown log format: {self.log_format}",
                config_key=ENV_LOG_FORMAT,
                hint=f"Use one of: {', '.join(LOG_FORMATS)}",
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> TaskListConfig:
        """Build a config from environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ`` (for tests).
                When omitted, ``.env`` is loaded first.

        Raises:
            ConfigurationError: If a variable has an invalid value.
        """
        if environ is None:
            load_env()
            environ = os.environ

        task_file = environ.get(ENV_FILE, "").strip()
        if environ.get(ENV_FILE) is not None and not task_file:
            raise ConfigurationError(
                f"{ENV_FILE} is set but empty",
                config_key=ENV_FILE,
                hint=f"Unset it to use {DEFAULT_TASK_FILE} in the working directory",
            )

        return cls(
            task_file=Path(task_file or DEFAULT_TASK_FILE),
            log_level=environ.get(ENV_LOG_LEVEL, "WARNING").strip().upper(),
            log_format=environ.get(ENV_LOG_FORMAT, "human").strip().lower(),  # type: ignore
        )

    def with_overrides(self, **overrides: Any) -> TaskListConfig:
        """Return a copy with the non-None overrides applied."""
        values = {
            "task_file": self.task_file,
            "log_level": self.log_level,
            "log_format": self.log_format,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return TaskListConfig(**values)

    def to_dict(self) -> dict[str, Any]:
        return {
            "task_file": str(self.task_file),
            "log_level": self.log_level,
            "log_format": self.log_format,
        }
