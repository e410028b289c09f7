"""Configuration service for the timed CLI.

This module provides the ConfigService class, the single source of truth
for configuration. It handles:

- Loading and saving config.json
- First-run defaults, seeded from a legacy ``.env`` settings file
- Dotted-key get/set/reset used by ``timed config``
- Resolving the task file path for one invocation
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir
from pydantic import BaseModel, ValidationError

from timed_cli.models.config_models import AppConfig
from timed_cli.utils.logger import get_logger

TASKS_FILE_NAME = "timed_tasks.csv"
TASKS_PATH_ENV = "TIMED_TASKS"
LEGACY_SETTINGS_FILE = ".env"


def read_settings_file(path: Path) -> dict[str, str]:
    """Read ``KEY=value`` lines; quotes around values are dropped."""
    settings: dict[str, str] = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        settings[key.strip()] = value.strip().strip("'\"")
    return settings


class ConfigService:
    """Service for managing application configuration."""

    def __init__(self):
        """Initialize the config service."""

        self.config_dir = Path(user_config_dir("timed_cli"))
        self.config_path = self.config_dir / "config.json"
        self.legacy_settings_path = self.config_dir / LEGACY_SETTINGS_FILE

        # Ensure directories exist
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self._config: AppConfig | None = None
        self.logger = get_logger()

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load configuration from storage."""
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # First run
            self._config = self.create_default_config()
            self.save_config()
        except (OSError, ValidationError) as e:
            raise RuntimeError(f"Failed to load config: {e}") from e

        return self._config

    def save_config(self) -> None:
        """Save the current configuration to storage."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self.config.model_dump_json(indent=4))
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def default_tasks_path(self) -> str:
        """Task file location for a fresh configuration.

        A ``TIMED_TASKS`` entry in the legacy settings file wins over the
        file next to config.json.
        """
        if self.legacy_settings_path.exists():
            legacy = read_settings_file(self.legacy_settings_path).get(TASKS_PATH_ENV)
            if legacy:
                self.logger.info(
                    "using tasks path from %s: %s", self.legacy_settings_path, legacy
                )
                return legacy
        return str(self.config_dir / TASKS_FILE_NAME)

    def create_default_config(self) -> AppConfig:
        return AppConfig(tasks_path=self.default_tasks_path())

    def reset_config(self) -> AppConfig:
        """Reset configuration to defaults."""
        self._config = self.create_default_config()
        self.save_config()
        return self._config

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key."""
        value: Any = self.config
        for k in key.split("."):
            if not isinstance(value, BaseModel) or k not in type(value).model_fields:
                raise KeyError(key)
            value = getattr(value, k)
        if isinstance(value, BaseModel):
            return value.model_dump()
        return value

    def set(self, key: str, value: Any) -> AppConfig:
        """Set a configuration value by dot-separated key.

        Raises:
            KeyError: for an unknown key.
            ValueError: when pydantic rejects the value.
        """
        self.get(key)
        keys = key.split(".")
        config_dict = self.config.model_dump()

        current = config_dict
        for k in keys[:-1]:
            current = current[k]
        current[keys[-1]] = value

        self._config = AppConfig.model_validate(config_dict)
        self.save_config()
        return self._config

    def reset(self, key: str) -> AppConfig:
        """Reset a single key to its default value."""
        default_config = self.create_default_config()
        value: Any = default_config
        for k in key.split("."):
            if not isinstance(value, BaseModel) or k not in type(value).model_fields:
                raise KeyError(key)
            value = getattr(value, k)
        if isinstance(value, BaseModel):
            value = value.model_dump()
        return self.set(key, value)

    def resolve_tasks_path(self, override: str | Path | None = None) -> Path:
        """Task file for this invocation.

        Priority: explicit override, then the ``TIMED_TASKS`` environment
        variable, then ``tasks_path`` from config.json.
        """
        raw = override or os.environ.get(TASKS_PATH_ENV) or self.config.tasks_path
        return Path(raw).expanduser()


@lru_cache
def get_config_service() -> ConfigService:
    """Get the global config service instance."""
    return ConfigService()
