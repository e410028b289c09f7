"""Domain models of the timed CLI.

Pydantic models for tasks and configuration, plus the error types raised
while manipulating them.
"""

from .config_models import AppConfig, OutputConfig
from .errors import (
    InvalidSelection,
    InvalidTaskDate,
    InvalidTaskDuration,
    InvalidTaskEnergy,
    InvalidTaskId,
    InvalidTaskName,
    InvalidTaskTags,
    NoActiveTasks,
    TaskAlreadyActive,
    TaskFileError,
    TrackerError,
)
from .task import PredefinedTask, Task, parse_tags

__all__ = [
    # Task models
    "Task",
    "PredefinedTask",
    "parse_tags",
    # Configuration
    "AppConfig",
    "OutputConfig",
    # Errors
    "TrackerError",
    "TaskAlreadyActive",
    "NoActiveTasks",
    "InvalidTaskId",
    "InvalidTaskName",
    "InvalidTaskDuration",
    "InvalidTaskTags",
    "InvalidTaskEnergy",
    "InvalidTaskDate",
    "InvalidSelection",
    "TaskFileError",
]
