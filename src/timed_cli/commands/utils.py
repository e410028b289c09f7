"""Helpers shared by the task commands."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from timed_cli.adapters.csv_codec import load_store, save_store
from timed_cli.services.config_service import get_config_service
from timed_cli.services.task_store import TaskStore
from timed_cli.utils.ui.formatters import format_warning


@contextmanager
def open_store(tasks_file: Path | None = None) -> Iterator[TaskStore]:
    """Load the task store, hand it to one operation, then save it.

    The store is saved even when the operation fails, so a refused
    operation still leaves a well-formed file behind. A file that fails to
    parse aborts before the operation and is never rewritten, and a file
    that exists but cannot be read is never saved over.
    """
    config_svc = get_config_service()
    path = config_svc.resolve_tasks_path(tasks_file)
    store = load_store(path, long_task_minutes=config_svc.config.long_task_minutes)
    try:
        yield store
    finally:
        if store.read_only:
            format_warning(f"Could not read {path}; changes were not saved")
        else:
            save_store(store, path)
