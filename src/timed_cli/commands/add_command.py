"""Command 'add' of timed - start a task from the category menu or log a past one."""

from pathlib import Path

import typer

from timed_cli.models.errors import InvalidSelection
from timed_cli.ui.prompts import get_prompt_provider
from timed_cli.utils.ui.formatters import format_success

from .decorators import command_wrapper
from .utils import open_store

ENTRY_TYPES = ("live", "manual")


@command_wrapper
def add(
    entry_type: str = typer.Option(
        "live",
        "--type",
        "-t",
        help="Entry type: 'live' starts timing now, 'manual' logs a past task",
    ),
    tags: str | None = typer.Option(
        None, "--tags", help="Comma-separated tags, e.g. deep,focus"
    ),
    tasks_file: Path | None = typer.Option(
        None, "--file", "-f", help="Task file to use instead of the configured one"
    ),
) -> None:
    """
    Add a task picked from the category menu.

    Examples:
      timed add
      timed add --tags deep,focus
      timed add --type manual
    """
    entry_type = entry_type.lower()
    if entry_type not in ENTRY_TYPES:
        raise InvalidSelection(
            f"Unknown entry type '{entry_type}'; expected one of: {', '.join(ENTRY_TYPES)}"
        )

    prompts = get_prompt_provider()
    with open_store(tasks_file) as store:
        if entry_type == "manual":
            task = store.create_manual_task(prompts, tags=tags)
            minutes = int(task.duration.total_seconds() // 60)
            day = task.start_time.date().isoformat()
            format_success(f"Logged task: {task.name} on {day} ({minutes} minutes)")
        else:
            task = store.create_interactive_task(prompts, tags=tags)
            format_success(f"Started task: {task.name}")
