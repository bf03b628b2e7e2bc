"""Rich output helpers for the tasklist CLI."""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from tasklist.errors import TaskListError
from tasklist.models import Task, TaskStats

console = Console()
err_console = Console(stderr=True)

STATUS_ICONS = {
    False: "[dim]○[/dim]",
    True: "[green]✓[/green]",
}


def render_tasks(tasks: Sequence[Task]) -> Table:
    """Build the task table, in the order given."""
    table = Table(show_header=True, header_style="bold", box=None)
    table.add_column("", width=1)
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Task")

    for task in tasks:
        text = Text(task.text, style="dim strike" if task.completed else "")
        table.add_row(STATUS_ICONS[task.completed], str(task.id), text)
    return table


def render_stats(stats: TaskStats) -> Text:
    return Text.assemble(
        ("Total: ", "bold"),
        str(stats.total),
        "   ",
        ("Pending: ", "bold yellow"),
        str(stats.pending),
        "   ",
        ("Completed: ", "bold green"),
        str(stats.completed),
    )


def print_task_list(tasks: Sequence[Task], stats: TaskStats) -> None:
    console.print(render_stats(stats))
    console.print()
    if not tasks:
        console.print("[dim]No todos yet. Add one with:[/dim] [white]tasklist add TEXT[/white]")
        return
    console.print(render_tasks(tasks))


def print_success(message: str) -> None:
    console.print(f"[green]✓[/green] {message}")


def print_notice(message: str) -> None:
    console.print(f"[dim]{message}[/dim]")


def print_persistence_warning(error: TaskListError) -> None:
    err_console.print(f"[yellow]⚠ {error.message}[/yellow]")
    if error.hint:
        err_console.print(f"  [dim]{error.hint}[/dim]")


def print_cli_error(message: str, hint: str | None = None) -> None:
    err_console.print(f"[red]Error:[/red] {message}")
    if hint:
        err_console.print(f"  [dim]{hint}[/dim]")
