"""JSON file persistence for the task list.

The task list is stored as a single human-readable JSON file, ``todos.json``
in the working directory by default:

    {
      "version": 1,
      "tasks": [
        {"id": 0, "text": "buy milk", "completed": false}
      ]
    }

Files written by earlier releases hold a bare JSON array of task objects;
those are still accepted on load.

Neither ``load`` nor ``save`` raises. Each returns a result object carrying
the error, if any, and the caller decides what to do with it.
"""

from __future__ import annotations

import contextlib
import json
import os
import stat
import tempfile
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from tasklist.errors import (
    PersistenceError,
    TaskFileReadError,
    TaskFileWriteError,
    TaskFormatError,
)
from tasklist.logging import get_logger
from tasklist.models import Task

logger = get_logger("tasklist.persistence")

DEFAULT_TASK_FILE = "todos.json"

# Version for the task file envelope
TASK_FILE_VERSION = 1

# Mode for a newly created task file
NEW_FILE_MODE = 0o644


@dataclass
class LoadResult:
    """Outcome of reading the task file.

    Attributes:
        tasks: Parsed tasks in file order, empty on any failure.
        error: What went wrong, or None.
        missing: True when there was no file to read (first run).
    """

    tasks: list[Task] = field(default_factory=list)
    error: PersistenceError | None = None
    missing: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class SaveResult:
    """Outcome of writing the task file."""

    path: Path
    error: PersistenceError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def encode_tasks(tasks: Iterable[Task]) -> str:
    """Serialize tasks to the versioned JSON envelope."""
    payload = {
        "version": TASK_FILE_VERSION,
        "tasks": [task.to_dict() for task in tasks],
    }
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"


def decode_tasks(content: str) -> list[Task]:
    """Parse task file content.

    Accepts the versioned envelope and the legacy bare array. Whitespace-only
    content is an empty list.

    Raises:
        TaskFormatError: On invalid JSON, an unknown shape or version,
            a bad task record, or duplicate ids.
    """
    if not content.strip():
        return []

    try:
        data = json.loads(content)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError is a ValueError; deep nesting exhausts the recursion limit
        raise TaskFormatError(f"Task file is not valid JSON: {e}") from e

    records = _unwrap(data)
    tasks = [Task.from_dict(record) for record in records]

    seen: set[int] = set()
    for task in tasks:
        if task.id in seen:
            raise TaskFormatError(f"Duplicate task id: {task.id}", field="id")
        seen.add(task.id)
    return tasks


def _unwrap(data: Any) -> list[Any]:
    if isinstance(data, list):
        return data

    if not isinstance(data, dict):
        raise TaskFormatError(f"Unexpected task file shape: {type(data).__name__}")

    version = data.get("version")
    if isinstance(version, bool) or not isinstance(version, int):
        raise TaskFormatError(f"Invalid task file version: {version!r}", field="version")
    if version > TASK_FILE_VERSION:
        raise TaskFormatError(
            f"Task file version {version} is newer than supported ({TASK_FILE_VERSION})",
            field="version",
        )

    records = data.get("tasks")
    if not isinstance(records, list):
        raise TaskFormatError("Task file has no 'tasks' list", field="tasks")
    return records


class JsonTaskFile:
    """Reads and writes the task list at a fixed path.

    Example:
        ```python
        task_file = JsonTaskFile("todos.json")
        result = task_file.load()
        if result.ok:
            tasks = result.tasks
        task_file.save(tasks)
        ```
    """

    def __init__(self, path: Path | str = DEFAULT_TASK_FILE):
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"JsonTaskFile({str(self.path)!r})"

    def load(self) -> LoadResult:
        """Read and parse the task file.

        Returns:
            LoadResult with the tasks, or an empty list plus the error.
            A missing file is not an error.
        """
        try:
            content = self.path.read_text(encoding="utf-8")
        except (FileNotFoundError, NotADirectoryError):
            logger.debug(f"No task file at {self.path}, starting empty")
            return LoadResult(missing=True)
        except (OSError, UnicodeError, ValueError) as e:
            return LoadResult(error=TaskFileReadError(self.path, str(e)))

        try:
            tasks = decode_tasks(content)
        except TaskFormatError as e:
            return LoadResult(error=TaskFormatError(e.message, path=self.path, field=e.field))

        logger.debug(f"Loaded {len(tasks)} task(s) from {self.path}")
        return LoadResult(tasks=tasks)

    def save(self, tasks: Iterable[Task]) -> SaveResult:
        """Write all tasks, replacing the file atomically.

        The content goes to a temporary file in the same directory which is
        then renamed over the target, so readers see either the old or the
        new file.

        Returns:
            SaveResult carrying the error if the write failed.
        """
        tmp_name: str | None = None
        try:
            data = encode_tasks(tasks).encode("utf-8")
            parent = self.path.parent
            parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            os.chmod(tmp_name, self._target_mode())
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
            tmp_name = None
        except (OSError, UnicodeError, ValueError) as e:
            return SaveResult(path=self.path, error=TaskFileWriteError(self.path, str(e)))
        finally:
            if tmp_name is not None:
                with contextlib.suppress(OSError):
                    Path(tmp_name).unlink(missing_ok=True)

        logger.debug(f"Saved task list to {self.path}")
        return SaveResult(path=self.path)

    def _target_mode(self) -> int:
        """Permission bits of the file being replaced, or NEW_FILE_MODE."""
        try:
            return stat.S_IMODE(os.stat(self.path).st_mode)
        except FileNotFoundError:
            return NEW_FILE_MODE
