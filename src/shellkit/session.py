"""Session state container for the shellkit runtime."""

from dataclasses import dataclass, field
from typing import Any

from .commands.registry import CommandRegistry
from .constants import DEFAULT_PROMPT, PROMPT_VARIABLE
from .history import HistoryManager


@dataclass
class ShellSession:
    """In-memory state owned by the single controller loop.

    Nothing here is locked; exposing a session to other threads needs an
    explicit synchronization wrapper around each map first.
    """

    registry: CommandRegistry = field(default_factory=CommandRegistry)
    history: HistoryManager = field(default_factory=HistoryManager)
    aliases: dict[str, str] = field(default_factory=dict)
    variables: dict[str, str] = field(default_factory=dict)
    plugins: list[Any] = field(default_factory=list)
    running: bool = False
    base_prompt: str = DEFAULT_PROMPT

    @property
    def prompt(self) -> str:
        """Prompt text; a ``prompt`` variable overrides the configured one."""
        return self.variables.get(PROMPT_VARIABLE, self.base_prompt)

    def set_alias(self, name: str, expansion: str) -> None:
        self.aliases[name] = expansion

    def remove_alias(self, name: str) -> bool:
        return self.aliases.pop(name, None) is not None

    def set_variable(self, name: str, value: str) -> None:
        self.variables[name] = value

    def remove_variable(self, name: str) -> bool:
        return self.variables.pop(name, None) is not None

    def get_variable(self, name: str) -> str | None:
        return self.variables.get(name)

    def stop(self) -> None:
        self.running = False
