"""Shared test fixtures and configuration.

Every test runs with platformdirs pointed at a temporary directory, so
config.json, the log file and the default task file never touch the real
home directory.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest

from timed_cli.ui.prompts import PromptProvider

FIXED_NOW = datetime(2024, 3, 1, 9, 30, tzinfo=timezone(timedelta(hours=1)))


class ScriptedPrompts(PromptProvider):
    """PromptProvider returning canned answers and recording each question."""

    def __init__(
        self,
        selection: str = "2",
        energy: int = 7,
        comment: str = "went well",
        day: str = "2024-02-28",
        duration: int = 45,
        confirmed_minutes: int | None = None,
    ):
        self.selection = selection
        self.energy = energy
        self.comment = comment
        self.day = day
        self.duration = duration
        self.confirmed_minutes = confirmed_minutes
        self.calls: list[str] = []
        self.options: list[str] | None = None
        self.confirm_asked_with: int | None = None

    def select_task(self, options):
        self.calls.append("select_task")
        self.options = options
        return self.selection

    def ask_energy(self):
        self.calls.append("ask_energy")
        return self.energy

    def ask_comment(self):
        self.calls.append("ask_comment")
        return self.comment

    def ask_date(self):
        self.calls.append("ask_date")
        return self.day

    def ask_duration(self):
        self.calls.append("ask_duration")
        return self.duration

    def confirm_duration(self, minutes):
        self.calls.append("confirm_duration")
        self.confirm_asked_with = minutes
        if self.confirmed_minutes is None:
            return minutes
        return self.confirmed_minutes


# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------


def _drop_log_handlers() -> None:
    logger = logging.getLogger("timed_cli")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    """Redirect config and log directories and reset cached singletons."""
    import timed_cli.utils.logger as logger_mod
    from timed_cli.services.config_service import get_config_service

    monkeypatch.delenv("TIMED_TASKS", raising=False)
    monkeypatch.delenv("TIMED_LOG_LEVEL", raising=False)

    config_dir = tmp_path / "config"
    log_dir = tmp_path / "logs"

    get_config_service.cache_clear()
    logger_mod._logger = None
    _drop_log_handlers()

    with patch(
        "timed_cli.services.config_service.user_config_dir",
        return_value=str(config_dir),
    ):
        with patch("timed_cli.utils.logger.user_log_dir", return_value=str(log_dir)):
            yield tmp_path

    get_config_service.cache_clear()
    logger_mod._logger = None
    _drop_log_handlers()


@pytest.fixture()
def config_dir(tmp_path):
    return tmp_path / "config"


@pytest.fixture()
def log_dir(tmp_path):
    return tmp_path / "logs"


@pytest.fixture()
def tasks_file(tmp_path):
    return tmp_path / "tasks.csv"


@pytest.fixture()
def now():
    return FIXED_NOW


@pytest.fixture()
def prompts():
    return ScriptedPrompts()
