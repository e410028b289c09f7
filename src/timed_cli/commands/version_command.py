"""Command 'version' of timed"""

from timed_cli import __version__
from timed_cli.utils.logger import get_log_file
from timed_cli.utils.ui.console import get_console

console = get_console()


def version() -> None:
    """Show version information"""
    console.print(f"[bold]timed[/bold] version [cyan]{__version__}[/cyan]")
    console.print(f"[dim]Log file: {get_log_file()}[/dim]", highlight=False)
