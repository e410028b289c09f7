"""Output formatters for different formats."""

from __future__ import annotations

import json
from collections.abc import Iterable
from datetime import datetime
from typing import Any

import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from timed_cli.models.task import Task

from .console import get_console

console = get_console()
error_console = get_console(stderr=True)

LABEL_STYLE = "bright_yellow"


def format_output(data: Any, output_format: str = "pretty") -> None:
    """Format and display plain data based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str, ensure_ascii=False))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False))
    elif output_format == "table":
        format_table(data)
    else:
        format_pretty(data)


def format_table(data: Any) -> None:
    """Format data as a table."""
    if isinstance(data, list):
        if not data:
            console.print("[yellow]No items found[/yellow]")
        elif isinstance(data[0], dict):
            format_dict_table(data)
        else:
            for item in data:
                console.print(item)
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        console.print(data)


def format_pretty(data: Any) -> None:
    if isinstance(data, dict):
        format_single_item(data)
    elif isinstance(data, list):
        for item in data:
            format_pretty(item)
    else:
        console.print(data)


def _cell(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    if value is None:
        return "-"
    return str(value)


def format_dict_table(items: list[dict]) -> None:
    """Format a list of dictionaries as a table."""
    if not items:
        console.print("[yellow]No items found[/yellow]")
        return

    columns = list(items[0].keys())
    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col.replace("_", " ").title())

    for item in items:
        table.add_row(*(escape(_cell(item.get(col))) for col in columns))

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        if isinstance(value, dict):
            for sub_key, sub_value in value.items():
                table.add_row(f"{key}.{sub_key}", escape(_cell(sub_value)))
        else:
            table.add_row(key, escape(_cell(value)))

    console.print(table)


# ============================================================================
# Task rendering
# ============================================================================


def task_block(task: Task, now: datetime | None = None) -> Text:
    """Multi-line summary of a task with highlighted labels."""
    text = Text()
    for label, value in task.render_fields(now):
        text.append(f"{label}: ", style=LABEL_STYLE)
        text.append(value)
        text.append("\n")
    return text


def print_task_blocks(
    tasks: Iterable[Task],
    out: Console | None = None,
    now: datetime | None = None,
) -> None:
    """Print one block per task, separated by blank lines."""
    out = out or console
    for task in tasks:
        out.print(task_block(task, now), highlight=False)


def format_tasks(tasks: list[Task], output_format: str = "pretty") -> None:
    """Display tasks in the requested output format."""
    if output_format == "pretty":
        print_task_blocks(tasks)
    elif output_format == "table":
        if not tasks:
            console.print("[yellow]No tasks recorded[/yellow]")
            return
        format_dict_table([task.summary() for task in tasks])
    else:
        format_output([task.summary() for task in tasks], output_format)


# ============================================================================
# Status messages
# ============================================================================


def format_error(message: str) -> None:
    """Format and display an error message on stderr."""
    error_console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def format_hint(message: str) -> None:
    error_console.print(f"[dim]{escape(message)}[/dim]")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {escape(message)}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {escape(message)}")
