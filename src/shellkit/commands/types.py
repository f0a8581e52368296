"""Command descriptor record exchanged between hosts, plugins and the shell."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional, Sequence

if TYPE_CHECKING:
    from ..session import ShellSession


ExecuteFn = Callable[[Sequence[str], "ShellSession"], Optional[bool]]
CompleteFn = Callable[[list[str], int], Sequence[str]]


@dataclass(frozen=True)
class CommandDescriptor:
    """Capability record for one command.

    ``execute(args, session)`` returns success; ``None`` counts as success.
    ``complete(args, current_index)`` returns candidates for the argument
    word at ``current_index``.
    """

    name: str
    execute: ExecuteFn
    description: str = ""
    usage: str = ""
    aliases: tuple[str, ...] = ()
    complete: CompleteFn | None = None

    def keys(self) -> tuple[str, ...]:
        """Registry keys this descriptor occupies, case-folded."""
        return tuple(key.casefold() for key in (self.name, *self.aliases))
