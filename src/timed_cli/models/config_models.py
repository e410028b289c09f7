"""Configuration models for the timed CLI."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from .task import LONG_TASK_MINUTES

OutputFormat = Literal["pretty", "table", "json", "yaml"]


class OutputConfig(BaseModel):
    """Output configuration."""

    format: OutputFormat = Field(default="pretty")


class AppConfig(BaseModel):
    """Main configuration."""

    tasks_path: str = Field(..., description="CSV file holding the recorded tasks")
    long_task_minutes: int = Field(
        default=LONG_TASK_MINUTES,
        ge=1,
        description="Elapsed minutes above which stopping asks to confirm the duration",
    )
    output: OutputConfig = Field(default_factory=OutputConfig)

    @field_validator("tasks_path")
    @classmethod
    def _tasks_path_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("tasks_path must not be empty")
        return value.strip()
