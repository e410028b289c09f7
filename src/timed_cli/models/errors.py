"""Error types raised by the task store, the task file codec and the prompts."""

from timed_cli.utils.exit_codes import (
    ERROR_CONFLICT,
    ERROR_FILE,
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_NOT_FOUND,
)


class TrackerError(Exception):
    """Base exception for all tracker errors.

    Every subclass carries the exit code the CLI terminates with.
    """

    exit_code: int = ERROR_GENERAL
    default_message = "Tracker error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class TaskAlreadyActive(TrackerError):
    """Raised when a task is created while another one is still running."""

    exit_code = ERROR_CONFLICT
    default_message = "Task already active"


class NoActiveTasks(TrackerError):
    """Raised when an operation needs a running task and there is none."""

    exit_code = ERROR_NOT_FOUND
    default_message = "No active tasks"


class InvalidTaskId(TrackerError):
    """Raised when no task carries the requested id."""

    exit_code = ERROR_NOT_FOUND
    default_message = "Invalid task id"


class InvalidTaskName(TrackerError):
    exit_code = ERROR_INVALID_ARGS
    default_message = "Invalid task name"


class InvalidTaskDuration(TrackerError):
    exit_code = ERROR_INVALID_ARGS
    default_message = "Invalid task duration"


class InvalidTaskTags(TrackerError):
    exit_code = ERROR_INVALID_ARGS
    default_message = "Invalid task tags"


class InvalidTaskEnergy(TrackerError):
    exit_code = ERROR_INVALID_ARGS
    default_message = "Invalid task energy"


class InvalidTaskDate(TrackerError):
    exit_code = ERROR_INVALID_ARGS
    default_message = "Invalid task date"


class InvalidSelection(TrackerError):
    """Raised for a menu choice that is not one of the listed numbers."""

    exit_code = ERROR_INVALID_ARGS
    default_message = "Invalid selection"


class TaskFileError(TrackerError):
    """Raised when the task file holds a malformed row or cannot be written."""

    exit_code = ERROR_FILE
    default_message = "Task file error"
