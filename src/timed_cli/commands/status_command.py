"""Command 'status' of timed - show the running task."""

from pathlib import Path

import typer

from .decorators import command_wrapper
from .utils import open_store


@command_wrapper
def status(
    tasks_file: Path | None = typer.Option(
        None, "--file", "-f", help="Task file to use instead of the configured one"
    ),
) -> None:
    """Show the current status."""
    with open_store(tasks_file) as store:
        store.show_active_task()
