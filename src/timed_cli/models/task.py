"""Task data models."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from .errors import (
    InvalidSelection,
    InvalidTaskDuration,
    InvalidTaskEnergy,
    InvalidTaskName,
    InvalidTaskTags,
)

SHOW_TIME_FORMAT = "%Y-%m-%d %H:%M"
IN_PROGRESS = "In Progress..."

LONG_TASK_MINUTES = 120
MAX_MANUAL_MINUTES = 24 * 60
MIN_ENERGY = 1
MAX_ENERGY = 10
MAX_TAG_LENGTH = 32


def local_now() -> datetime:
    """Current time as a timezone-aware local datetime."""
    return datetime.now().astimezone()


def show_time(value: datetime) -> str:
    # strftime drops the leading zeros of years before 1000
    return f"{value.year:04d}" + value.strftime(SHOW_TIME_FORMAT[2:])


class PredefinedTask(Enum):
    """Categories offered by the interactive task menu, in menu order."""

    MEETINGS = "Meetings"
    READING = "Reading"
    JOURNALING = "Journaling"
    HOBBY_CODE = "Hobby Code"
    WORK_CODE = "Work Code"
    BROWSE_INTERNET = "Browse Internet"
    ANKI = "Anki"
    OTHER = "Other"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def menu(cls) -> list[str]:
        """Menu lines, numbered from 1."""
        return [f"{number}: {item.value}" for number, item in enumerate(cls, start=1)]

    @classmethod
    def from_selection(cls, raw: str) -> PredefinedTask:
        """Resolve a 1-indexed menu selection.

        Raises:
            InvalidSelection: if *raw* is not a number within the menu.
        """
        text = (raw or "").strip()
        items = list(cls)
        if not text.isdecimal():
            raise InvalidSelection(f"'{text}' is not a menu number")
        number = int(text)
        if not 1 <= number <= len(items):
            raise InvalidSelection(
                f"Selection {number} is out of range (1-{len(items)})"
            )
        return items[number - 1]


def parse_tags(raw: str | Iterable[str] | None) -> list[str]:
    """Normalize tags given as a comma-separated string or a sequence.

    Blank entries are dropped. Raises InvalidTaskTags for a tag that contains
    a comma or is longer than MAX_TAG_LENGTH characters.
    """
    if raw is None:
        return []
    items = raw.split(",") if isinstance(raw, str) else list(raw)
    tags = [item.strip() for item in items if item and item.strip()]
    for tag in tags:
        if "," in tag:
            raise InvalidTaskTags(f"Tag '{tag}' must not contain a comma")
        if len(tag) > MAX_TAG_LENGTH:
            raise InvalidTaskTags(
                f"Tag '{tag}' is longer than {MAX_TAG_LENGTH} characters"
            )
    return tags


def validate_energy(energy: int) -> int:
    if not MIN_ENERGY <= energy <= MAX_ENERGY:
        raise InvalidTaskEnergy(
            f"Energy must be between {MIN_ENERGY} and {MAX_ENERGY}, got {energy}"
        )
    return energy


def _clean_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise InvalidTaskName("Task name must not be empty")
    return cleaned


def _clean_comment(comment: str | None) -> str | None:
    if comment is None:
        return None
    cleaned = comment.strip()
    return cleaned or None


class Task(BaseModel):
    """A single timed or manually entered activity.

    A task without ``end_time`` is the active task. ``duration`` stays zero
    until the task is stopped.
    """

    id: int = 0
    name: str
    start_time: datetime
    end_time: datetime | None = None
    duration: timedelta = Field(default_factory=timedelta)
    tags: list[str] = Field(default_factory=list)
    energy: int | None = None
    comments: str | None = None

    @classmethod
    def create(
        cls,
        name: str,
        tags: str | Iterable[str] | None = None,
        now: datetime | None = None,
    ) -> Task:
        """Create a running task that starts *now*."""
        return cls(
            name=_clean_name(name),
            start_time=now or local_now(),
            tags=parse_tags(tags),
        )

    @classmethod
    def create_manual(
        cls,
        name: str,
        day: date,
        minutes: int,
        energy: int,
        comment: str | None,
        tags: str | Iterable[str] | None = None,
    ) -> Task:
        """Create an already closed task starting at local midnight of *day*."""
        if not 0 <= minutes <= MAX_MANUAL_MINUTES:
            raise InvalidTaskDuration(
                f"Duration must be between 0 and {MAX_MANUAL_MINUTES} minutes, got {minutes}"
            )
        start = datetime.combine(day, time.min).astimezone()
        duration = timedelta(minutes=minutes)
        return cls(
            name=_clean_name(name),
            start_time=start,
            end_time=start + duration,
            duration=duration,
            tags=parse_tags(tags),
            energy=validate_energy(energy),
            comments=_clean_comment(comment),
        )

    @property
    def is_active(self) -> bool:
        return self.end_time is None

    def elapsed(self, now: datetime | None = None) -> timedelta:
        """Recorded duration, or the time since start for the active task."""
        if self.end_time is not None:
            return self.duration
        return (now or local_now()) - self.start_time

    def stop(
        self,
        energy: int,
        comment: str | None,
        now: datetime | None = None,
        confirm_duration: Callable[[int], int] | None = None,
        threshold_minutes: int = LONG_TASK_MINUTES,
    ) -> None:
        """Close the task.

        When the elapsed time exceeds *threshold_minutes*, *confirm_duration*
        is called with the computed minute count and its answer replaces the
        stored duration. Nothing is modified if validation fails.
        """
        energy = validate_energy(energy)
        end = now or local_now()
        if end < self.start_time:
            raise InvalidTaskDuration("Task cannot end before it started")

        duration = end - self.start_time
        if confirm_duration is not None and duration > timedelta(
            minutes=threshold_minutes
        ):
            minutes = confirm_duration(int(duration.total_seconds() // 60))
            if minutes < 0:
                raise InvalidTaskDuration(
                    f"Duration must not be negative, got {minutes}"
                )
            duration = timedelta(minutes=minutes)

        self.end_time = end
        self.duration = duration
        self.energy = energy
        self.comments = _clean_comment(comment)

    def render_fields(self, now: datetime | None = None) -> list[tuple[str, str]]:
        """Label/value pairs of the human-readable summary."""
        minutes = int(self.elapsed(now).total_seconds() // 60)
        return [
            ("Task", self.name),
            ("Start", show_time(self.start_time)),
            (
                "End",
                show_time(self.end_time)
                if self.end_time is not None
                else IN_PROGRESS,
            ),
            ("Duration", f"{minutes} minutes"),
            ("Life Energy", str(self.energy if self.energy is not None else 0)),
            ("Tags", ",".join(self.tags) if self.tags else "None"),
            ("Comments", self.comments if self.comments is not None else "None"),
        ]

    def render(self, now: datetime | None = None) -> str:
        return "\n".join(f"{label}: {value}" for label, value in self.render_fields(now))

    def summary(self, now: datetime | None = None) -> dict[str, Any]:
        """Flat dictionary used by the table and JSON outputs."""
        return {
            "id": self.id,
            "name": self.name,
            "start": show_time(self.start_time),
            "end": show_time(self.end_time) if self.end_time else None,
            "minutes": int(self.elapsed(now).total_seconds() // 60),
            "tags": list(self.tags),
            "energy": self.energy,
            "comments": self.comments,
        }
