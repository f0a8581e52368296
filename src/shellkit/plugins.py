"""Structural contract for command-providing plugins.

The shell never discovers or imports plugins itself. A host hands it ready
plugin objects through ``Shell.register_plugin``; see ``plugin_loader`` for
the directory loader the bundled CLI uses.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from .commands.types import CommandDescriptor
    from .session import ShellSession


@runtime_checkable
class ShellPlugin(Protocol):
    name: str
    version: str
    description: str

    def initialize(self, session: "ShellSession") -> None:
        ...

    def cleanup(self) -> None:
        ...

    def get_commands(self) -> Sequence["CommandDescriptor"]:
        ...


def describe_plugin(plugin: ShellPlugin) -> str:
    return f"{plugin.name} v{plugin.version}"
