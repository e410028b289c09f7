"""Main entry point for the timed CLI."""

import typer

from timed_cli.commands import (
    add_command,
    config_command,
    list_command,
    remove_command,
    start_command,
    status_command,
    stop_command,
    version_command,
)
from timed_cli.utils.typer_helpers import SuggestingGroup

app = typer.Typer(
    name="timed",
    cls=SuggestingGroup,
    help="Track what you spend your time on, one task at a time",
    no_args_is_help=True,
)

# Top-level commands
app.command("add")(add_command.add)
app.command("start")(start_command.start)
app.command("stop")(stop_command.stop)
app.command("status")(status_command.status)
app.command("ls")(list_command.list_tasks)
app.command("rm")(remove_command.remove)
app.command("version")(version_command.version)

# Subcommands
app.add_typer(config_command.app, name="config", help="Configuration management")


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
