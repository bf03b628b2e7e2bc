"""Data models for the task list."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from tasklist.errors import TaskFormatError


@dataclass(frozen=True)
class Task:
    """A single entry in the task list.

    Attributes:
        id: Non-negative integer, unique within a store, never reused.
        text: Trimmed, non-empty task text.
        completed: Whether the task has been checked off.
    """

    id: int
    text: str
    completed: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, data: Any) -> Task:
        """Create a Task from a decoded JSON record.

        Raises:
            TaskFormatError: If a field is missing or has the wrong type.
        """
        if not isinstance(data, dict):
            raise TaskFormatError(f"Task record must be an object, got {type(data).__name__}")

        task_id = data.get("id")
        # bool is an int subclass; true/false are not ids
        if isinstance(task_id, bool) or not isinstance(task_id, int) or task_id < 0:
            raise TaskFormatError(f"Invalid task id: {task_id!r}", field="id")

        text = data.get("text")
        if not isinstance(text, str):
            raise TaskFormatError(f"Invalid text for task {task_id}: {text!r}", field="text")

        completed = data.get("completed")
        if not isinstance(completed, bool):
            raise TaskFormatError(
                f"Invalid completed flag for task {task_id}: {completed!r}", field="completed"
            )

        return cls(id=task_id, text=text, completed=completed)


@dataclass(frozen=True)
class TaskStats:
    """Counts derived from the current task list."""

    total: int
    completed: int

    @property
    def pending(self) -> int:
        return self.total - self.completed

    @classmethod
    def from_tasks(cls, tasks: list[Task] | tuple[Task, ...]) -> TaskStats:
        return cls(total=len(tasks), completed=sum(1 for t in tasks if t.completed))

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "completed": self.completed,
            "pending": self.pending,
        }
