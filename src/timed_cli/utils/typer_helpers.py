"""Typer helper utilities."""

from difflib import get_close_matches

import typer
from typer.core import TyperGroup

from timed_cli.utils.exit_codes import ERROR_INVALID_ARGS
from timed_cli.utils.ui.console import get_console

MAX_SUGGESTIONS = 3


def suggest_commands(attempted: str, names: list[str]) -> list[str]:
    """Commands the user probably meant: prefix matches first, then look-alikes."""
    prefixed = sorted(name for name in names if attempted and name.startswith(attempted))
    similar = get_close_matches(attempted, names, n=MAX_SUGGESTIONS, cutoff=0.6)
    suggestions = list(dict.fromkeys(prefixed + similar))
    return suggestions[:MAX_SUGGESTIONS]


class SuggestingGroup(TyperGroup):
    """Typer group that answers an unknown command with suggestions.

    ``timed stpo`` prints "Did you mean this? stop" and ``timed st`` lists
    start, status and stop, instead of a bare usage error.
    """

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except Exception as e:
            if not args:
                raise
            attempted = args[0]
            suggestions = suggest_commands(attempted, list(self.commands))
            if not suggestions:
                raise

            err = get_console(stderr=True)
            err.print(
                f'[red]Error:[/red] unknown command "{attempted}" for "{ctx.info_name}"\n'
            )
            if len(suggestions) == 1:
                err.print("[yellow]Did you mean this?[/yellow]")
            else:
                err.print("[yellow]Did you mean one of these?[/yellow]")
            for suggestion in suggestions:
                err.print(f"        {suggestion}")
            raise typer.Exit(ERROR_INVALID_ARGS) from e
