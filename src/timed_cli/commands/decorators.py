"""Decorators for command functions."""

import functools
import time
import traceback
from collections.abc import Callable

import typer

from timed_cli.models.errors import TrackerError
from timed_cli.utils.exit_codes import ERROR_GENERAL, get_hint
from timed_cli.utils.logger import get_logger
from timed_cli.utils.ui.formatters import format_error, format_hint


def command_wrapper(func: Callable):
    """Decorator to wrap command functions with logging and error reporting.

    TrackerError subclasses are reported as ``Error: <message>`` and end the
    process with their own exit code.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            result = func(*args, **kwargs)
            elapsed = time.monotonic() - start
            logger.info("command completed: %s (%.3fs)", cmd, elapsed)
            return result

        except TrackerError as e:
            elapsed = time.monotonic() - start
            logger.error(
                "command failed: %s (%.3fs) - %s: %s",
                cmd,
                elapsed,
                type(e).__name__,
                str(e),
            )
            format_error(str(e))
            hint = get_hint(e.exit_code)
            if hint:
                format_hint(hint)
            raise typer.Exit(code=e.exit_code) from e

        except (typer.Exit, typer.Abort):
            raise

        except (KeyboardInterrupt, EOFError) as e:
            logger.info("command cancelled: %s", cmd)
            format_error("Cancelled")
            raise typer.Exit(code=ERROR_GENERAL) from e

        except Exception as e:
            elapsed = time.monotonic() - start
            logger.error(
                "command failed: %s (%.3fs) - %s\n%s",
                cmd,
                elapsed,
                str(e),
                traceback.format_exc(),
            )
            format_error(f"An unexpected error occurred: {str(e)}")
            raise typer.Exit(code=ERROR_GENERAL) from e

    return wrapper
