"""Command 'ls' of timed - list every recorded task."""

from pathlib import Path

import typer

from timed_cli.models.errors import InvalidSelection
from timed_cli.services.config_service import get_config_service
from timed_cli.utils.ui.formatters import format_tasks

from .decorators import command_wrapper
from .utils import open_store

OUTPUT_FORMATS = ("pretty", "table", "json", "yaml")


@command_wrapper
def list_tasks(
    output: str | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format (pretty/table/json/yaml); defaults to output.format",
    ),
    json_opt: bool = typer.Option(
        False, "--json", help="Output as JSON (alias for --output json)"
    ),
    tasks_file: Path | None = typer.Option(
        None, "--file", "-f", help="Task file to use instead of the configured one"
    ),
) -> None:
    """List all tasks in creation order."""
    if json_opt:
        output = "json"
    if output is None:
        output = get_config_service().config.output.format
    if output not in OUTPUT_FORMATS:
        raise InvalidSelection(
            f"Unknown output format '{output}'; expected one of: {', '.join(OUTPUT_FORMATS)}"
        )

    with open_store(tasks_file) as store:
        format_tasks(store.tasks, output)
