"""Console utilities for the timed CLI."""

from functools import lru_cache

from rich.console import Console


@lru_cache(maxsize=4)
def get_console(highlight: bool = True, stderr: bool = False) -> Console:
    """Get a Rich Console instance for consistent output formatting.

    ``stderr=True`` returns the console used for error messages.
    """
    return Console(highlight=highlight, stderr=stderr)
