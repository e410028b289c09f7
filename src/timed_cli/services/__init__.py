"""Services module for the timed CLI - business logic layer."""

from .config_service import ConfigService, get_config_service
from .task_store import TaskStore

__all__ = [
    "TaskStore",
    "ConfigService",
    "get_config_service",
]
