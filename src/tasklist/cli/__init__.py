from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from tasklist import __version__
from tasklist.cli.cmds import register_tasks
from tasklist.cli.cmds.task_cmds import show_list, task_session
from tasklist.cli.output import print_cli_error
from tasklist.config import TaskListConfig
from tasklist.errors import ConfigurationError
from tasklist.logging import configure_logging

_TYPER_HELP = """A small task list that lives in a JSON file.

**Quick start:**

* `tasklist add "buy milk"` — Add a task
* `tasklist toggle 0` — Mark it done
* `tasklist list` — Show tasks, incomplete first
"""

app = typer.Typer(
    invoke_without_command=True,
    no_args_is_help=False,
    add_completion=False,
    help=_TYPER_HELP,
    rich_markup_mode="markdown",
)


def version_callback(value: bool):
    """Show version and exit."""
    if value:
        typer.echo(f"tasklist {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    file: Annotated[
        Path | None,
        typer.Option(
            "--file",
            "-f",
            help="Task file (default: $TASKLIST_FILE or ./todos.json)",
            dir_okay=False,
        ),
    ] = None,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
):
    """tasklist: add, complete and remove tasks."""
    try:
        config = TaskListConfig.from_env().with_overrides(task_file=file)
    except ConfigurationError as e:
        print_cli_error(e.message, hint=e.hint)
        raise typer.Exit(1)

    configure_logging(level=config.log_level, format=config.log_format)
    ctx.obj = config

    # No command: show the list, like opening the app
    if ctx.invoked_subcommand is None:
        with task_session(ctx) as store:
            show_list(store)


register_tasks(app)


def main():
    app()


if __name__ == "__main__":
    main()
