"""Built-in shell commands bound to a running Shell."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Sequence

from prompt_toolkit.shortcuts import clear as clear_screen

from ..completion import filter_prefix
from ..constants import EXIT_MESSAGE, SCRIPT_FILE_SUFFIXES
from ..errors import CommandNotFoundError, UsageError
from ..plugins import describe_plugin
from ..substitution import split_assignment
from .types import CommandDescriptor

if TYPE_CHECKING:
    from ..session import ShellSession
    from ..shell import Shell


@dataclass(frozen=True, slots=True)
class BuiltinSpec:
    """One built-in registration entry."""

    name: str
    method_name: str
    description: str
    usage: str
    aliases: tuple[str, ...] = ()
    completer_name: Optional[str] = None


BUILTIN_SPECS: tuple[BuiltinSpec, ...] = (
    BuiltinSpec("help", "help", "Display help information", "help [command]", ("?",), "complete_command_name"),
    BuiltinSpec("exit", "exit", "Exit the shell", "exit", ("quit", "q")),
    BuiltinSpec("history", "history", "Display command history", "history [count]", ("hist",)),
    BuiltinSpec("alias", "alias", "Create or list command aliases", "alias [name=command]"),
    BuiltinSpec("unalias", "unalias", "Remove a command alias", "unalias <name>", (), "complete_alias_name"),
    BuiltinSpec("set", "set", "Set or list shell variables", "set [name=value]"),
    BuiltinSpec("unset", "unset", "Remove a shell variable", "unset <name>", (), "complete_variable_name"),
    BuiltinSpec("echo", "echo", "Display text", "echo [text]"),
    BuiltinSpec("clear", "clear", "Clear the screen", "clear", ("cls",)),
    BuiltinSpec("script", "script", "Execute commands from a file", "script <filename>", ("source",), "complete_script_file"),
    BuiltinSpec("plugin", "plugin", "Manage shell plugins", "plugin <list|info|load> [args]", (), "complete_plugin_action"),
)

_PLUGIN_ACTIONS = ("info", "list", "load")


class BuiltinCommands:
    """Execute/complete capabilities for the built-in commands."""

    def __init__(self, shell: "Shell") -> None:
        self.shell = shell

    # ------------------------------------------------------------------
    # Execute capabilities
    # ------------------------------------------------------------------

    def help(self, args: Sequence[str], session: "ShellSession") -> bool:
        if not args:
            descriptors = session.registry.descriptors()
            width = max((len(d.name) for d in descriptors), default=0)
            print("Available commands:")
            for descriptor in descriptors:
                print(f"  {descriptor.name.ljust(width)}  {descriptor.description}")
            print()
            print("Type 'help <command>' for detailed usage information.")
            return True

        descriptor = session.registry.lookup(args[0])
        if descriptor is None:
            raise CommandNotFoundError(args[0])
        print(f"Command: {descriptor.name}")
        print(f"Description: {descriptor.description}")
        print(f"Usage: {descriptor.usage}")
        if descriptor.aliases:
            print(f"Aliases: {', '.join(descriptor.aliases)}")
        return True

    def exit(self, args: Sequence[str], session: "ShellSession") -> bool:
        print(EXIT_MESSAGE)
        session.stop()
        return True

    def history(self, args: Sequence[str], session: "ShellSession") -> bool:
        count: int | None = None
        if args:
            try:
                count = int(args[0])
            except ValueError:
                raise UsageError("Usage: history [count]") from None
        for number, line in session.history.tail(count):
            print(f"{number:4}: {line}")
        return True

    def alias(self, args: Sequence[str], session: "ShellSession") -> bool:
        if not args:
            if not session.aliases:
                print("No aliases defined.")
                return True
            print("Current aliases:")
            for name, expansion in sorted(session.aliases.items()):
                print(f"  {name} = {expansion}")
            return True

        assignment = split_assignment(" ".join(args))
        if assignment is None:
            raise UsageError("Usage: alias name=command")
        name, expansion = assignment
        session.set_alias(name, expansion)
        print(f"Alias created: {name} = {expansion}")
        return True

    def unalias(self, args: Sequence[str], session: "ShellSession") -> bool:
        if len(args) != 1:
            raise UsageError("Usage: unalias <name>")
        if not session.remove_alias(args[0]):
            raise UsageError(f"No such alias: {args[0]}")
        print(f"Alias removed: {args[0]}")
        return True

    def set(self, args: Sequence[str], session: "ShellSession") -> bool:
        if not args:
            if not session.variables:
                print("No variables defined.")
                return True
            print("Shell variables:")
            for name, value in session.variables.items():
                print(f"  {name} = {value}")
            return True

        assignment = split_assignment(" ".join(args))
        if assignment is None:
            raise UsageError("Usage: set name=value")
        name, value = assignment
        session.set_variable(name, value)
        print(f"Variable set: {name} = {value}")
        return True

    def unset(self, args: Sequence[str], session: "ShellSession") -> bool:
        if len(args) != 1:
            raise UsageError("Usage: unset <name>")
        if not session.remove_variable(args[0]):
            raise UsageError(f"No such variable: {args[0]}")
        print(f"Variable removed: {args[0]}")
        return True

    def echo(self, args: Sequence[str], session: "ShellSession") -> bool:
        print(" ".join(args))
        return True

    def clear(self, args: Sequence[str], session: "ShellSession") -> bool:
        clear_screen()
        return True

    def script(self, args: Sequence[str], session: "ShellSession") -> bool:
        if len(args) != 1:
            raise UsageError("Usage: script <filename>")
        return self.shell.run_script(args[0]) == 0

    def plugin(self, args: Sequence[str], session: "ShellSession") -> bool:
        if not args:
            raise UsageError("Usage: plugin <list|info|load> [args]")

        action = args[0].lower()
        if action == "list":
            if not session.plugins:
                print("No plugins loaded.")
                return True
            print("Loaded plugins:")
            for plugin in session.plugins:
                print(f"  {describe_plugin(plugin)}")
            return True

        if action == "info":
            if len(args) != 2:
                raise UsageError("Usage: plugin info <name>")
            for plugin in session.plugins:
                if plugin.name == args[1]:
                    print(f"Plugin: {describe_plugin(plugin)}")
                    print(f"Description: {plugin.description}")
                    names = ", ".join(d.name for d in plugin.get_commands())
                    print(f"Commands: {names or '(none)'}")
                    return True
            raise UsageError(f"No such plugin: {args[1]}")

        if action == "load":
            if len(args) != 2:
                raise UsageError("Usage: plugin load <directory>")
            loaded = self.shell.load_plugins(args[1])
            print(f"Loaded {loaded} plugin(s) from {args[1]}")
            return True

        raise UsageError("Unknown plugin action. Use: list, info, or load")

    # ------------------------------------------------------------------
    # Completion capabilities
    # ------------------------------------------------------------------

    def complete_command_name(self, args: list[str], current_index: int) -> list[str]:
        if current_index != 0:
            return []
        prefix = args[0] if args else ""
        return self.shell.completion.command_names(prefix)

    def complete_alias_name(self, args: list[str], current_index: int) -> list[str]:
        if current_index != 0:
            return []
        return filter_prefix(list(self.shell.session.aliases), args, current_index)

    def complete_variable_name(self, args: list[str], current_index: int) -> list[str]:
        if current_index != 0:
            return []
        return filter_prefix(list(self.shell.session.variables), args, current_index)

    def complete_script_file(self, args: list[str], current_index: int) -> list[str]:
        if current_index != 0:
            return []
        try:
            names = [
                path.name
                for path in Path.cwd().iterdir()
                if path.is_file() and path.suffix in SCRIPT_FILE_SUFFIXES
            ]
        except OSError:
            return []
        return filter_prefix(names, args, current_index)

    def complete_plugin_action(self, args: list[str], current_index: int) -> list[str]:
        if current_index == 0:
            return filter_prefix(_PLUGIN_ACTIONS, args, current_index)
        if current_index == 1 and args and args[0] == "info":
            return filter_prefix([p.name for p in self.shell.session.plugins], args, current_index)
        return []


def build_builtin_commands(shell: "Shell") -> list[CommandDescriptor]:
    """Build one descriptor per BUILTIN_SPECS entry, bound to ``shell``."""
    handler = BuiltinCommands(shell)
    descriptors: list[CommandDescriptor] = []
    for spec in BUILTIN_SPECS:
        complete = getattr(handler, spec.completer_name) if spec.completer_name else None
        descriptors.append(
            CommandDescriptor(
                name=spec.name,
                execute=getattr(handler, spec.method_name),
                description=spec.description,
                usage=spec.usage,
                aliases=spec.aliases,
                complete=complete,
            )
        )
    return descriptors
