"""
Exit codes for the timed CLI.

Every error kind maps to its own code so shell scripts can tell
"nothing to stop" apart from "task file is corrupt".
"""

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments or validation error
ERROR_INVALID_ARGS = 2

# Task id or active task not found
ERROR_NOT_FOUND = 3

# A task is already running
ERROR_CONFLICT = 4

# Task file could not be parsed or written
ERROR_FILE = 5


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
        ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
        ERROR_NOT_FOUND: "ERROR_NOT_FOUND",
        ERROR_CONFLICT: "ERROR_CONFLICT",
        ERROR_FILE: "ERROR_FILE",
    }
    return code_names.get(code, f"UNKNOWN({code})")


def get_exit_code_description(code: int) -> str:
    """Get a human-readable description of an exit code."""
    descriptions = {
        SUCCESS: "Command executed successfully",
        ERROR_GENERAL: "A general error occurred",
        ERROR_INVALID_ARGS: "Invalid arguments or validation error",
        ERROR_NOT_FOUND: "Task not found",
        ERROR_CONFLICT: "Another task is already active",
        ERROR_FILE: "Task file could not be read or written",
    }
    return descriptions.get(code, "Unknown error")


# Follow-up suggestions printed under an error message
HINTS = {
    ERROR_INVALID_ARGS: "Check the value and run the command again",
    ERROR_NOT_FOUND: "Run 'timed ls' to see the recorded tasks",
    ERROR_CONFLICT: "Run 'timed stop' to close the running task first",
    ERROR_FILE: "Inspect the task file with 'timed config get tasks_path'",
}


def get_hint(code: int) -> str | None:
    """Get the follow-up suggestion for an exit code, if there is one."""
    return HINTS.get(code)
