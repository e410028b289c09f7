"""Command 'start' of timed - start a task with a freeform name."""

from pathlib import Path

import typer

from timed_cli.utils.ui.formatters import format_success

from .decorators import command_wrapper
from .utils import open_store


@command_wrapper
def start(
    name: str = typer.Argument(..., help="Task name"),
    tags: str | None = typer.Option(
        None, "--tags", help="Comma-separated tags, e.g. deep,focus"
    ),
    tasks_file: Path | None = typer.Option(
        None, "--file", "-f", help="Task file to use instead of the configured one"
    ),
) -> None:
    """Start timing a task."""
    with open_store(tasks_file) as store:
        task = store.create_task(name, tags)
        format_success(f"Started task: {task.name}")
