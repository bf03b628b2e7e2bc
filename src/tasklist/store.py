"""In-memory task list backed by a JSON file.

``TaskStore`` owns the ordered tasks and the id counter. Every mutation is
saved immediately. Persistence failures never reach the caller: they are
logged and kept on ``last_error``, and the in-memory list stays
authoritative for the rest of the session.

Example:
    ```python
    from tasklist import TaskStore

    store = TaskStore.open("todos.json")
    task = store.add("buy milk")
    store.toggle(task.id)
    print(store.stats())  # TaskStats(total=1, completed=1)
    store.clear_completed()
    ```
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator
from pathlib import Path

from tasklist.errors import PersistenceError
from tasklist.logging import get_logger
from tasklist.models import Task, TaskStats
from tasklist.persistence import DEFAULT_TASK_FILE, JsonTaskFile, LoadResult, SaveResult

logger = get_logger("tasklist.store")


class TaskStore:
    """Ordered task list with a monotonic id counter.

    Insertion order is the storage order. ``display_order()`` gives the
    incomplete-first view without touching it.

    Invalid input (blank text, unknown ids) is a no-op, never an error.
    """

    def __init__(self, task_file: JsonTaskFile | None = None):
        self._file = task_file or JsonTaskFile(DEFAULT_TASK_FILE)
        self._tasks: list[Task] = []
        self._next_id = 0
        self.last_error: PersistenceError | None = None
        # True once any mutation has run
        self.modified = False

        result = self._file.load()
        self._absorb(result)
        if result.ok:
            self._tasks = list(result.tasks)
            self._next_id = max((t.id for t in self._tasks), default=-1) + 1

    @classmethod
    def open(cls, path: Path | str = DEFAULT_TASK_FILE) -> TaskStore:
        """Create a store persisted at ``path``, loading what is there."""
        return cls(JsonTaskFile(path))

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def path(self) -> Path:
        return self._file.path

    @property
    def items(self) -> tuple[Task, ...]:
        """Tasks in storage (insertion) order."""
        return tuple(self._tasks)

    @property
    def next_id(self) -> int:
        return self._next_id

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(tuple(self._tasks))

    def get(self, task_id: int) -> Task | None:
        return next((t for t in self._tasks if t.id == task_id), None)

    def display_order(self) -> list[Task]:
        """Incomplete tasks first, each group in storage order."""
        return sorted(self._tasks, key=lambda t: t.completed)

    def stats(self) -> TaskStats:
        return TaskStats.from_tasks(self._tasks)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add(self, text: str) -> Task | None:
        """Append a new task.

        Args:
            text: Task text; surrounding whitespace is stripped and
                characters that cannot be stored as UTF-8 become "?".

        Returns:
            The new task, or None if the text was blank (nothing changes
            and nothing is saved).
        """
        text = text.encode("utf-8", "replace").decode("utf-8").strip()
        if not text:
            return None

        task = Task(id=self._next_id, text=text)
        self._tasks.append(task)
        self._next_id += 1
        self.modified = True
        logger.debug("Task added", task_id=task.id)
        self.save()
        return task

    def toggle(self, task_id: int) -> Task | None:
        """Flip the completed flag of the first task with ``task_id``.

        Returns:
            The toggled task, or None if no task has that id.
        """
        index = next((i for i, t in enumerate(self._tasks) if t.id == task_id), None)
        if index is None:
            return None

        old = self._tasks[index]
        task = dataclasses.replace(old, completed=not old.completed)
        self._tasks[index] = task
        self.modified = True
        logger.debug("Task toggled", task_id=task_id, completed=task.completed)
        self.save()
        return task

    def delete(self, task_id: int) -> int:
        """Remove every task with ``task_id``. Saves even if none matched.

        Returns:
            Number of tasks removed.
        """
        before = len(self._tasks)
        self._tasks = [t for t in self._tasks if t.id != task_id]
        removed = before - len(self._tasks)
        self.modified = True
        logger.debug("Task deleted", task_id=task_id, removed=removed)
        self.save()
        return removed

    def clear_completed(self) -> int:
        """Remove all completed tasks. Always saves.

        Returns:
            Number of tasks removed.
        """
        before = len(self._tasks)
        self._tasks = [t for t in self._tasks if not t.completed]
        removed = before - len(self._tasks)
        self.modified = True
        logger.debug("Completed tasks cleared", removed=removed)
        self.save()
        return removed

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def save(self) -> SaveResult:
        """Write the current list to disk.

        Called after every mutation, and by the presentation layer on
        shutdown. Never raises; a failure is logged and kept on
        ``last_error``.
        """
        result = self._file.save(self._tasks)
        self._absorb(result)
        return result

    def _absorb(self, result: LoadResult | SaveResult) -> None:
        # Every persistence outcome passes through here. Failures are logged
        # and recorded, never raised.
        if result.ok:
            self.last_error = None
            return

        self.last_error = result.error
        if isinstance(result, LoadResult):
            logger.warning(
                "Could not load task list, starting empty",
                path=str(self._file.path),
                error=str(result.error.message),
            )
        else:
            logger.warning(
                "Could not save task list, keeping changes in memory",
                path=str(self._file.path),
                error=str(result.error.message),
            )
