"""Interactive prompts used while creating and stopping tasks.

The task store never reads the terminal itself. It asks a PromptProvider,
so commands plug in the rich-based TerminalPrompts and tests plug in
canned answers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from rich.console import Console
from rich.prompt import IntPrompt, Prompt

from timed_cli.models.task import MAX_ENERGY, MAX_MANUAL_MINUTES, MIN_ENERGY
from timed_cli.utils.ui.console import get_console


class PromptProvider(ABC):
    """Source of the answers the task store needs from the user."""

    @abstractmethod
    def select_task(self, options: list[str]) -> str:
        """Present the numbered *options* and return the raw selection."""
        raise NotImplementedError

    @abstractmethod
    def ask_energy(self) -> int:
        """Return the 1-10 energy rating of the finished task."""
        raise NotImplementedError

    @abstractmethod
    def ask_comment(self) -> str:
        """Return a free-text comment about the finished task."""
        raise NotImplementedError

    @abstractmethod
    def ask_date(self) -> str:
        """Return the raw ``YYYY-MM-DD`` date of a manual entry."""
        raise NotImplementedError

    @abstractmethod
    def ask_duration(self) -> int:
        """Return the duration of a manual entry in minutes."""
        raise NotImplementedError

    @abstractmethod
    def confirm_duration(self, minutes: int) -> int:
        """Confirm or override the *minutes* computed for a long task."""
        raise NotImplementedError


class TerminalPrompts(PromptProvider):
    """Line-based prompts on the terminal, built on rich.prompt."""

    def __init__(self, console: Console | None = None):
        self.console = console or get_console()

    def select_task(self, options: list[str]) -> str:
        self.console.print("Select a task:")
        for line in options:
            self.console.print(line, markup=False, highlight=False)
        return Prompt.ask("Task number", console=self.console)

    def ask_energy(self) -> int:
        while True:
            energy = IntPrompt.ask(
                f"How much life energy did this task give you? ({MIN_ENERGY}-{MAX_ENERGY})",
                console=self.console,
            )
            if MIN_ENERGY <= energy <= MAX_ENERGY:
                return energy
            self.console.print(
                f"[prompt.invalid]Please enter a number between {MIN_ENERGY} and {MAX_ENERGY}"
            )

    def ask_comment(self) -> str:
        return Prompt.ask(
            "How did the task go?",
            console=self.console,
            default="",
            show_default=False,
        )

    def ask_date(self) -> str:
        return Prompt.ask(
            "Enter task date (YYYY-MM-DD)",
            console=self.console,
            default=date.today().isoformat(),
        )

    def ask_duration(self) -> int:
        return IntPrompt.ask(
            f"Enter task duration in minutes (0-{MAX_MANUAL_MINUTES})",
            console=self.console,
        )

    def confirm_duration(self, minutes: int) -> int:
        return IntPrompt.ask(
            "The task took a long time; can you confirm the actual duration? (N min)",
            console=self.console,
            default=minutes,
        )


def get_prompt_provider() -> PromptProvider:
    """Prompt provider used by the CLI commands."""
    return TerminalPrompts()
