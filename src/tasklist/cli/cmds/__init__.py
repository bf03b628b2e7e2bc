from .task_cmds import register as register_tasks

__all__ = [
    "register_tasks",
]
