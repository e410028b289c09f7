"""Configuration management commands."""

import typer
from pydantic import ValidationError

from timed_cli.services.config_service import get_config_service
from timed_cli.utils.exit_codes import ERROR_INVALID_ARGS
from timed_cli.utils.logger import get_log_file
from timed_cli.utils.typer_helpers import SuggestingGroup
from timed_cli.utils.ui.console import get_console
from timed_cli.utils.ui.formatters import format_error, format_output, format_success

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Configuration management commands")
console = get_console()


def _unknown_key(key: str) -> typer.Exit:
    format_error(f"Configuration key '{key}' not found")
    return typer.Exit(ERROR_INVALID_ARGS)


@app.command("show")
@command_wrapper
def show_config(
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Show the current configuration."""
    config_svc = get_config_service()
    format_output(config_svc.config.model_dump(), output)


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., output.format)"),
) -> None:
    """Get a configuration value."""
    try:
        value = get_config_service().get(key)
    except KeyError:
        raise _unknown_key(key) from None
    console.print(value, markup=False, highlight=False)


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., long_task_minutes)"),
    value: str = typer.Argument(..., help="Configuration value"),
) -> None:
    """Set a configuration value."""
    config_svc = get_config_service()
    try:
        config_svc.set(key, value)
    except KeyError:
        raise _unknown_key(key) from None
    except ValidationError as e:
        errors = "; ".join(err["msg"] for err in e.errors())
        format_error(f"Invalid value for '{key}': {errors}")
        raise typer.Exit(ERROR_INVALID_ARGS) from e
    format_success(f"Configuration '{key}' set to '{config_svc.get(key)}'")


@app.command("reset")
@command_wrapper
def reset_config(
    key: str | None = typer.Argument(None, help="Configuration key to reset"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    if not yes:
        msg = "entire configuration" if not key else f"'{key}'"
        if not typer.confirm(f"Are you sure you want to reset {msg}?"):
            format_error("Cancelled")
            raise typer.Exit(0)

    config_svc = get_config_service()
    if key:
        try:
            config_svc.reset(key)
        except KeyError:
            raise _unknown_key(key) from None
        format_success(f"Configuration '{key}' reset to default")
    else:
        config_svc.reset_config()
        format_success("Configuration reset to defaults")


@app.command("path")
@command_wrapper
def show_paths() -> None:
    """Show where the task file, config and log live."""
    config_svc = get_config_service()
    format_output(
        {
            "tasks": str(config_svc.resolve_tasks_path()),
            "config": str(config_svc.config_path),
            "log": str(get_log_file()),
        },
        "table",
    )
