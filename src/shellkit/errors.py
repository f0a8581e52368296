"""Custom exception hierarchy for shellkit."""


class ShellError(Exception):
    """Base exception for shell failures."""


class GrammarError(ValueError, ShellError):
    """Argument definition conflicts with the grammar registry."""


class UsageError(ValueError, ShellError):
    """Command syntax or built-in command usage errors."""


class ConfigError(ValueError, ShellError):
    """Configuration path or value errors."""


class ShellIOError(ShellError):
    """Script, config, or plugin directory could not be read."""


class CommandNotFoundError(ShellError):
    """No command is registered under the given name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown command: {name}. Type 'help' for available commands.")


class CommandExecutionError(ShellError):
    """A command's execute capability raised."""

    def __init__(self, name: str, error: Exception) -> None:
        self.name = name
        super().__init__(f"Command '{name}' failed: {error}")
