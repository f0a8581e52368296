"""Command lookup table and the dispatch error boundary."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Sequence

from ..errors import CommandExecutionError, CommandNotFoundError, ShellError
from .types import CommandDescriptor

if TYPE_CHECKING:
    from ..session import ShellSession


class CommandRegistry:
    """Map case-folded names and aliases to shared descriptor objects."""

    def __init__(self, descriptors: Iterable[CommandDescriptor] = ()) -> None:
        self._commands: dict[str, CommandDescriptor] = {}
        for descriptor in descriptors:
            self.register(descriptor)

    def register(self, descriptor: CommandDescriptor) -> None:
        """Insert the name and every alias; later registrations win a key."""
        for key in descriptor.keys():
            self._commands[key] = descriptor

    def unregister(self, name: str) -> None:
        descriptor = self.resolve(name)
        for key in [k for k, v in self._commands.items() if v is descriptor]:
            del self._commands[key]

    def lookup(self, token: str) -> CommandDescriptor | None:
        return self._commands.get(token.casefold())

    def resolve(self, token: str) -> CommandDescriptor:
        descriptor = self.lookup(token)
        if descriptor is None:
            raise CommandNotFoundError(token)
        return descriptor

    def dispatch(self, name: str, args: Sequence[str], session: "ShellSession") -> bool:
        """Run a command; unexpected faults inside it become CommandExecutionError.

        ShellError subclasses raised by the command (usage mistakes, IO
        faults) propagate as-is so their message reaches the user unchanged.
        """
        descriptor = self.resolve(name)
        try:
            result = descriptor.execute(list(args), session)
        except ShellError:
            raise
        except Exception as e:
            raise CommandExecutionError(descriptor.name, e) from e
        return result is None or bool(result)

    def keys(self) -> list[str]:
        return list(self._commands)

    def descriptors(self) -> list[CommandDescriptor]:
        """Distinct descriptors sorted by name."""
        unique = {id(d): d for d in self._commands.values()}
        return sorted(unique.values(), key=lambda d: d.name.casefold())

    def __contains__(self, token: object) -> bool:
        return isinstance(token, str) and token.casefold() in self._commands

    def __len__(self) -> int:
        return len(self._commands)
