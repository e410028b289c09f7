"""Command 'rm' of timed - delete a task by id."""

from pathlib import Path

import typer

from timed_cli.utils.ui.formatters import format_success

from .decorators import command_wrapper
from .utils import open_store


@command_wrapper
def remove(
    task_id: int = typer.Argument(..., help="Id of the task to remove"),
    tasks_file: Path | None = typer.Option(
        None, "--file", "-f", help="Task file to use instead of the configured one"
    ),
) -> None:
    """Remove a task; other tasks keep their ids."""
    with open_store(tasks_file) as store:
        task = store.remove_task(task_id)
        format_success(f"Removed task {task.id}: {task.name}")
