"""tasklist: a small persistent task list."""

from tasklist.config import TaskListConfig
from tasklist.errors import (
    ConfigurationError,
    PersistenceError,
    TaskFileReadError,
    TaskFileWriteError,
    TaskFormatError,
    TaskListError,
)
from tasklist.logging import configure_logging, get_logger
from tasklist.models import Task, TaskStats
from tasklist.persistence import DEFAULT_TASK_FILE, JsonTaskFile, LoadResult, SaveResult
from tasklist.store import TaskStore

__version__ = "0.3.0"

__all__ = [
    "DEFAULT_TASK_FILE",
    "ConfigurationError",
    "JsonTaskFile",
    "LoadResult",
    "PersistenceError",
    "SaveResult",
    "Task",
    "TaskFileReadError",
    "TaskFileWriteError",
    "TaskFormatError",
    "TaskListConfig",
    "TaskListError",
    "TaskStats",
    "TaskStore",
    "configure_logging",
    "get_logger",
]
