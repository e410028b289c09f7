"""Task store - the in-memory list of tasks and its invariants.

The store owns every Task of one invocation, assigns ids and guarantees
that at most one task is running. Failing operations raise a
TrackerError subclass and leave the store untouched.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from datetime import date, datetime

from rich.console import Console

from timed_cli.models.errors import (
    InvalidTaskDate,
    InvalidTaskId,
    NoActiveTasks,
    TaskAlreadyActive,
)
from timed_cli.models.task import LONG_TASK_MINUTES, PredefinedTask, Task
from timed_cli.ui.prompts import PromptProvider
from timed_cli.utils.logger import get_logger
from timed_cli.utils.ui.formatters import print_task_blocks

DATE_FORMAT = "%Y-%m-%d"


def parse_day(raw: str) -> date:
    """Parse a ``YYYY-MM-DD`` date."""
    try:
        return datetime.strptime(raw.strip(), DATE_FORMAT).date()
    except ValueError as e:
        raise InvalidTaskDate(f"'{raw.strip()}' is not a YYYY-MM-DD date") from e


class TaskStore:
    """Ordered collection of tasks in creation order."""

    def __init__(
        self,
        tasks: Iterable[Task] | None = None,
        long_task_minutes: int = LONG_TASK_MINUTES,
        read_only: bool = False,
    ):
        self._tasks: list[Task] = list(tasks or [])
        self._next_id = max((task.id for task in self._tasks), default=0) + 1
        self.long_task_minutes = long_task_minutes
        # Set when the task file exists but could not be read
        self.read_only = read_only
        self.logger = get_logger()

    # -------------------- queries --------------------

    @property
    def tasks(self) -> list[Task]:
        """Snapshot of the tasks in store order."""
        return list(self._tasks)

    @property
    def next_id(self) -> int:
        return self._next_id

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks))

    def get(self, task_id: int) -> Task:
        for task in self._tasks:
            if task.id == task_id:
                return task
        raise InvalidTaskId(f"No task with id {task_id}")

    def active_task(self) -> Task | None:
        """The running task, scanning from the most recent one."""
        for task in reversed(self._tasks):
            if task.is_active:
                return task
        return None

    # -------------------- creation --------------------

    def _ensure_no_active_task(self) -> None:
        active = self.active_task()
        if active is not None:
            raise TaskAlreadyActive(
                f"Task already active: '{active.name}' (id {active.id})"
            )

    def _append(self, task: Task) -> Task:
        task.id = self._next_id
        self._next_id += 1
        self._tasks.append(task)
        self.logger.info("task %d created: %s", task.id, task.name)
        return task

    def create_task(
        self,
        name: str,
        tags: str | Iterable[str] | None = None,
        now: datetime | None = None,
    ) -> Task:
        """Start a task with a freeform name."""
        self._ensure_no_active_task()
        return self._append(Task.create(name, tags, now=now))

    def create_interactive_task(
        self,
        prompts: PromptProvider,
        tags: str | Iterable[str] | None = None,
        now: datetime | None = None,
    ) -> Task:
        """Start a task whose name is picked from the predefined menu."""
        self._ensure_no_active_task()
        choice = PredefinedTask.from_selection(prompts.select_task(PredefinedTask.menu()))
        return self._append(Task.create(choice.value, tags, now=now))

    def create_manual_task(
        self,
        prompts: PromptProvider,
        tags: str | Iterable[str] | None = None,
    ) -> Task:
        """Record a finished task for a past date.

        The entry is created already closed, but like a live task it is
        refused while another task is running.
        """
        self._ensure_no_active_task()
        choice = PredefinedTask.from_selection(prompts.select_task(PredefinedTask.menu()))
        day = parse_day(prompts.ask_date())
        minutes = prompts.ask_duration()
        energy = prompts.ask_energy()
        comment = prompts.ask_comment()
        task = Task.create_manual(choice.value, day, minutes, energy, comment, tags)
        return self._append(task)

    # -------------------- mutation --------------------

    def stop_active_task(
        self,
        prompts: PromptProvider,
        now: datetime | None = None,
    ) -> Task:
        """Close the running task with the energy and comment from *prompts*."""
        task = self.active_task()
        if task is None:
            raise NoActiveTasks()

        energy = prompts.ask_energy()
        comment = prompts.ask_comment()
        task.stop(
            energy,
            comment,
            now=now,
            confirm_duration=prompts.confirm_duration,
            threshold_minutes=self.long_task_minutes,
        )
        self.logger.info(
            "task %d stopped after %d seconds",
            task.id,
            int(task.duration.total_seconds()),
        )
        return task

    def remove_task(self, task_id: int) -> Task:
        """Remove a task by id; remaining tasks keep their ids and order."""
        task = self.get(task_id)
        self._tasks = [t for t in self._tasks if t is not task]
        self.logger.info("task %d removed", task_id)
        return task

    # -------------------- display --------------------

    def show_active_task(self, console: Console | None = None) -> Task:
        task = self.active_task()
        if task is None:
            raise NoActiveTasks()
        print_task_blocks([task], console)
        return task

    def show_all_tasks(self, console: Console | None = None) -> list[Task]:
        tasks = self.tasks
        print_task_blocks(tasks, console)
        return tasks
