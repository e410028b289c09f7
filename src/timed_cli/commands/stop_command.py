"""Command 'stop' of timed - close the running task."""

from pathlib import Path

import typer

from timed_cli.ui.prompts import get_prompt_provider
from timed_cli.utils.ui.formatters import format_success

from .decorators import command_wrapper
from .utils import open_store


@command_wrapper
def stop(
    tasks_file: Path | None = typer.Option(
        None, "--file", "-f", help="Task file to use instead of the configured one"
    ),
) -> None:
    """Stop timing the active task, recording energy and a comment."""
    with open_store(tasks_file) as store:
        task = store.stop_active_task(get_prompt_provider())
        minutes = int(task.duration.total_seconds() // 60)
        format_success(f"Stopped task: {task.name} ({minutes} minutes)")
