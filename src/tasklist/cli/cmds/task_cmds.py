"""
CLI commands for working with the task list.

Usage:
    tasklist add "buy milk"     # Add a task
    tasklist list               # Incomplete first, with counts
    tasklist toggle 0           # Mark done / not done
    tasklist delete 0           # Remove a task
    tasklist clear              # Remove all completed tasks
    tasklist stats --json       # Counts only

Every command saves the list again on exit, so a save that failed during
the command gets one more attempt.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Annotated

import typer
from rich.markup import escape

from tasklist.cli.output import (
    print_notice,
    print_persistence_warning,
    print_success,
    print_task_list,
)
from tasklist.config import TaskListConfig
from tasklist.logging import get_logger
from tasklist.store import TaskStore

logger = get_logger("tasklist.cli")


@contextmanager
def task_session(ctx: typer.Context) -> Iterator[TaskStore]:
    """Open the store for one command and save it on the way out.

    A file that failed to load is left alone unless the command changed
    the list.
    """
    config: TaskListConfig = ctx.obj
    store = TaskStore.open(config.task_file)
    logger.debug("Task list opened", path=str(store.path), count=len(store))
    load_failed = store.last_error is not None
    if load_failed:
        print_persistence_warning(store.last_error)
    try:
        yield store
    finally:
        if load_failed and not store.modified:
            logger.debug("Task list unchanged, leaving unreadable file as is")
        else:
            store.save()
            if store.last_error is not None:
                print_persistence_warning(store.last_error)


def show_list(store: TaskStore, output_json: bool = False) -> None:
    if output_json:
        payload = {
            "tasks": [t.to_dict() for t in store.display_order()],
            "stats": store.stats().to_dict(),
        }
        typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        print_task_list(store.display_order(), store.stats())


def add_cmd(
    ctx: typer.Context,
    text: Annotated[list[str], typer.Argument(help="Task text")],
):
    """Add a task."""
    with task_session(ctx) as store:
        task = store.add(" ".join(text))
        if task is None:
            print_notice("Nothing added: task text is empty.")
        else:
            print_success(f"Added [bold]{task.id}[/bold]: {escape(task.text)}")


def list_cmd(
    ctx: typer.Context,
    output_json: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
):
    """List tasks, incomplete first."""
    with task_session(ctx) as store:
        show_list(store, output_json)


def toggle_cmd(
    ctx: typer.Context,
    task_id: Annotated[int, typer.Argument(help="Task ID")],
):
    """Mark a task done, or not done again."""
    with task_session(ctx) as store:
        task = store.toggle(task_id)
        if task is None:
            print_notice(f"No task with ID {task_id}.")
        elif task.completed:
            print_success(f"Completed [bold]{task.id}[/bold]: {escape(task.text)}")
        else:
            print_success(f"Reopened [bold]{task.id}[/bold]: {escape(task.text)}")


def delete_cmd(
    ctx: typer.Context,
    task_id: Annotated[int, typer.Argument(help="Task ID")],
):
    """Delete a task."""
    with task_session(ctx) as store:
        if store.delete(task_id):
            print_success(f"Deleted task {task_id}.")
        else:
            print_notice(f"No task with ID {task_id}.")


def clear_cmd(ctx: typer.Context):
    """Remove all completed tasks."""
    with task_session(ctx) as store:
        removed = store.clear_completed()
        if removed:
            print_success(f"Cleared {removed} completed task(s).")
        else:
            print_notice("No completed tasks to clear.")


def stats_cmd(
    ctx: typer.Context,
    output_json: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
):
    """Show task counts."""
    with task_session(ctx) as store:
        stats = store.stats()
        if output_json:
            typer.echo(json.dumps(stats.to_dict(), indent=2))
        else:
            typer.echo(
                f"Total: {stats.total}  Pending: {stats.pending}  Completed: {stats.completed}"
            )


def register(parent: typer.Typer):
    """Register task commands with the parent CLI app."""
    parent.command("add")(add_cmd)
    parent.command("list")(list_cmd)
    parent.command("toggle")(toggle_cmd)
    parent.command("delete")(delete_cmd)
    parent.command("clear")(clear_cmd)
    parent.command("stats")(stats_cmd)
