"""CSV persistence for the task store.

Layout, one header row then one row per task in store order::

    id,name,start_time,end_time,duration,tags,energy,comments

Timestamps use ``%Y-%m-%d %H:%M:%S.%f %z``, ``duration`` is whole seconds
and ``tags`` are comma-joined. Empty cells mean "not set". Rows written by
older versions without the ``comments`` column are still accepted.
"""

from __future__ import annotations

import csv
import os
import re
import tempfile
from collections.abc import Iterable
from datetime import datetime, timedelta
from pathlib import Path
from typing import TextIO

from timed_cli.models.errors import TaskFileError
from timed_cli.models.task import LONG_TASK_MINUTES, Task
from timed_cli.services.task_store import TaskStore
from timed_cli.utils.logger import get_logger

SAVE_TIME_FORMAT = "%Y-%m-%d %H:%M:%S.%f %z"

HEADER = [
    "id",
    "name",
    "start_time",
    "end_time",
    "duration",
    "tags",
    "energy",
    "comments",
]
LEGACY_FIELD_COUNT = len(HEADER) - 1

# Older files carry nanoseconds and "+01:00" offsets
_TIMESTAMP_RE = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<frac>\d+))?\s*"
    r"(?P<tz>[+-]\d{2}:?\d{2}(?::?\d{2})?)$"
)


def format_timestamp(value: datetime) -> str:
    # strftime drops the leading zeros of years before 1000
    return f"{value.year:04d}" + value.strftime(SAVE_TIME_FORMAT[2:])


def parse_timestamp(text: str) -> datetime:
    """Parse a saved timestamp.

    Raises:
        ValueError: if *text* is not a timestamp with a UTC offset.
    """
    match = _TIMESTAMP_RE.match(text.strip())
    if match is None:
        raise ValueError(f"malformed timestamp '{text}'")
    frac = (match.group("frac") or "0")[:6].ljust(6, "0")
    tz = match.group("tz").replace(":", "")
    return datetime.strptime(f"{match.group('base')}.{frac} {tz}", SAVE_TIME_FORMAT)


def task_to_row(task: Task) -> list[str]:
    return [
        str(task.id),
        task.name,
        format_timestamp(task.start_time),
        format_timestamp(task.end_time) if task.end_time is not None else "",
        str(int(task.duration.total_seconds())),
        ",".join(task.tags),
        str(task.energy) if task.energy is not None else "",
        task.comments or "",
    ]


def row_to_task(row: list[str]) -> Task:
    """Build a task from one positional row.

    Raises:
        ValueError: on a malformed timestamp or a non-numeric number cell.
    """
    cells = row + [""] * (len(HEADER) - len(row))
    task_id, name, start, end, duration, tags, energy, comments = cells[: len(HEADER)]
    return Task(
        id=int(task_id),
        name=name,
        start_time=parse_timestamp(start),
        end_time=parse_timestamp(end) if end.strip() else None,
        duration=timedelta(seconds=int(duration)) if duration.strip() else timedelta(),
        tags=[tag for tag in tags.split(",") if tag] if tags else [],
        energy=int(energy) if energy.strip() else None,
        comments=comments or None,
    )


def _is_skipped(row: list[str]) -> bool:
    if not row or all(not cell.strip() for cell in row):
        return True
    if row[0].strip() == "id":
        return True
    return len(row) < LEGACY_FIELD_COUNT


def read_tasks(stream: TextIO, source: str = "<stream>") -> list[Task]:
    """Parse every task row of *stream*.

    Raises:
        TaskFileError: on a malformed row, a duplicated id or text that is
            not UTF-8.
    """
    tasks: list[Task] = []
    seen: set[int] = set()
    reader = csv.reader(stream)
    try:
        for row in reader:
            if _is_skipped(row):
                continue
            try:
                task = row_to_task(row)
            except ValueError as e:
                raise TaskFileError(f"{source}, line {reader.line_num}: {e}") from e
            if task.id in seen:
                raise TaskFileError(
                    f"{source}, line {reader.line_num}: duplicate task id {task.id}"
                )
            seen.add(task.id)
            tasks.append(task)
    except UnicodeDecodeError as e:
        raise TaskFileError(
            f"{source}, after line {reader.line_num}: not valid UTF-8 ({e.reason})"
        ) from e
    return tasks


def write_tasks(tasks: Iterable[Task], stream: TextIO) -> None:
    writer = csv.writer(stream)
    writer.writerow(HEADER)
    for task in tasks:
        writer.writerow(task_to_row(task))


def load_store(path: Path, long_task_minutes: int = LONG_TASK_MINUTES) -> TaskStore:
    """Load the task store from *path*.

    A missing file gives an empty store. A file that exists but cannot be
    read also gives an empty store, marked read-only so it is never saved
    over the unread data. A malformed row raises TaskFileError.
    """
    logger = get_logger()
    try:
        with open(path, newline="", encoding="utf-8") as f:
            tasks = read_tasks(f, source=str(path))
    except FileNotFoundError:
        logger.info("no task file at %s, starting with no tasks", path)
        return TaskStore(long_task_minutes=long_task_minutes)
    except OSError as e:
        logger.warning("could not read %s (%s), starting read-only", path, e)
        return TaskStore(long_task_minutes=long_task_minutes, read_only=True)

    logger.debug("loaded %d tasks from %s", len(tasks), path)
    return TaskStore(tasks, long_task_minutes=long_task_minutes)


def save_store(store: TaskStore, path: Path) -> None:
    """Write the store to *path* through a temporary file and a rename.

    Raises:
        TaskFileError: if the file cannot be written.
    """
    logger = get_logger()
    tmp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
        with os.fdopen(fd, "w", newline="", encoding="utf-8") as f:
            write_tasks(store.tasks, f)
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise TaskFileError(f"Failed to save tasks to {path}: {e}") from e

    logger.debug("saved %d tasks to %s", len(store), path)
