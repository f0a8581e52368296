"""Shell controller: read, substitute, resolve, dispatch."""

from __future__ import annotations

import logging
import os
import time
import traceback
from pathlib import Path
from typing import Callable, Optional, Sequence

from .commands.builtins import build_builtin_commands
from .commands.types import CommandDescriptor
from .completion import CompletionEngine
from .config import StartupConfig
from .constants import APP_NAME, COMMENT_PREFIX
from .editor import KeySource, LineEditor
from .errors import CommandExecutionError, CommandNotFoundError, ShellError, ShellIOError, UsageError
from .logging import log_event, summarize_command_args
from .path_utils import map_path
from .plugins import ShellPlugin, describe_plugin
from .session import ShellSession
from .substitution import expand_alias, substitute_variables, tokenize
from .terminal import TerminalKeySource, terminal_supported

PluginLoader = Callable[[str], Sequence[ShellPlugin]]


def _report_unexpected_error(error: Exception) -> None:
    """Print an unexpected exception with optional debug traceback."""
    print(f"Error: {error}")
    if os.getenv("SHELLKIT_DEBUG"):
        print("Debug traceback:")
        traceback.print_exc()


class Shell:
    """Owns the session, registries, history, completion and line editor.

    Everything runs on the caller's thread; commands mutate the session maps
    directly and nothing is locked.
    """

    def __init__(
        self,
        session: Optional[ShellSession] = None,
        *,
        plugin_loader: Optional[PluginLoader] = None,
        key_source: Optional[KeySource] = None,
    ) -> None:
        self.session = session if session is not None else ShellSession()
        self.registry = self.session.registry
        self.completion = CompletionEngine(self.registry)
        self.editor = LineEditor(self.session.history, self.completion)
        self.plugin_loader = plugin_loader
        self.key_source = key_source

        for descriptor in build_builtin_commands(self):
            self.registry.register(descriptor)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_command(self, descriptor: CommandDescriptor) -> None:
        self.registry.register(descriptor)

    def register_plugin(self, plugin: ShellPlugin) -> bool:
        """Initialize a plugin and register its commands; report failures."""
        try:
            plugin.initialize(self.session)
            commands = list(plugin.get_commands())
            for descriptor in commands:
                self.registry.register(descriptor)
        except Exception as e:
            print(f"Failed to load plugin {getattr(plugin, 'name', plugin)}: {e}")
            log_event(
                "plugin_error",
                level=logging.ERROR,
                plugin=getattr(plugin, "name", None),
                error_type=type(e).__name__,
                error=str(e),
            )
            return False

        self.session.plugins.append(plugin)
        print(f"Loaded plugin: {describe_plugin(plugin)}")
        log_event(
            "plugin_loaded",
            level=logging.INFO,
            plugin=plugin.name,
            version=plugin.version,
            command_count=len(commands),
        )
        return True

    def load_plugins(self, directory: str) -> int:
        """Ask the host's loader for plugins in ``directory``; return how many registered."""
        if self.plugin_loader is None:
            raise UsageError("Plugin loading is not available in this shell.")
        return sum(1 for plugin in self.plugin_loader(directory) if self.register_plugin(plugin))

    def apply_config(self, config: StartupConfig, source: Optional[str] = None) -> None:
        """Seed aliases and variables; print each config warning."""
        self.session.aliases.update(config.aliases)
        self.session.variables.update(config.variables)
        for warning in config.warnings:
            print(f"Warning: {warning}")
            log_event("config_warning", level=logging.WARNING, config_file=source, warning=warning)
        log_event(
            "config_loaded",
            level=logging.INFO,
            config_file=source,
            alias_count=len(config.aliases),
            variable_count=len(config.variables),
            warning_count=len(config.warnings),
        )

    # ------------------------------------------------------------------
    # Line processing
    # ------------------------------------------------------------------

    def expand_line(self, line: str) -> str:
        """Variables first, then a single alias expansion of the first word."""
        substituted = substitute_variables(line, self.session.variables)
        return expand_alias(substituted, self.session.aliases)

    def process_line(self, line: str, *, record_history: bool = True) -> bool:
        """Run one line through substitute -> alias -> tokenize -> dispatch.

        Blank lines are ignored and never recorded. Errors propagate; see
        ``execute_line`` for the reporting boundary.
        """
        if not line.strip():
            return True

        expanded = self.expand_line(line)
        if record_history:
            self.session.history.append(line)

        tokens = tokenize(expanded)
        if not tokens:
            return True

        command, args = tokens[0], tokens[1:]
        started = time.perf_counter()
        success = self.registry.dispatch(command, args, self.session)
        log_event(
            "command_exec",
            level=logging.INFO,
            command=command,
            args_summary=summarize_command_args(command, args),
            success=success,
            elapsed_ms=round((time.perf_counter() - started) * 1000, 1),
        )
        return success

    def execute_line(self, line: str, *, record_history: bool = True) -> bool:
        """Process a line and report any fault; never raises ShellError."""
        try:
            return self.process_line(line, record_history=record_history)

        except CommandNotFoundError as e:
            log_event("command_not_found", level=logging.WARNING, command=e.name)
            print(f"Error: {e}")

        except CommandExecutionError as e:
            cause = e.__cause__
            log_event(
                "command_error",
                level=logging.ERROR,
                command=e.name,
                error_type=type(cause).__name__ if cause else type(e).__name__,
                error=str(cause or e),
            )
            logging.error("Command fault (command=%s): %s", e.name, cause, exc_info=cause)
            print(f"Error: {e}")

        except ShellError as e:
            # Expected user errors (usage mistakes, unreadable files)
            log_event(
                "command_error",
                level=logging.WARNING,
                error_type=type(e).__name__,
                error=str(e),
            )
            print(f"Error: {e}")

        except Exception as e:
            logging.error("Unexpected shell error: %s", e, exc_info=True)
            _report_unexpected_error(e)

        return False

    # ------------------------------------------------------------------
    # Batch execution
    # ------------------------------------------------------------------

    def run_script(self, path: str) -> int:
        """Run each command line of a script; return how many lines failed.

        Blank lines and ``#`` comments are skipped. A failing line is
        reported and the script moves on; an exit command stops it.
        """
        script_path = Path(map_path(path))
        try:
            lines = script_path.read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError) as e:
            raise ShellIOError(f"Could not read script {script_path}: {e}") from e

        error_count = 0
        for line_number, line in enumerate(lines, start=1):
            if not self.session.running:
                break
            stripped = line.strip()
            if not stripped or stripped.startswith(COMMENT_PREFIX):
                continue
            if not self.execute_line(line, record_history=False):
                error_count += 1
                log_event(
                    "script_line_error",
                    level=logging.WARNING,
                    script_file=str(script_path),
                    line_number=line_number,
                    error=stripped,
                )

        log_event(
            "script_run",
            level=logging.INFO,
            script_file=str(script_path),
            line_count=len(lines),
            error_count=error_count,
        )
        return error_count

    def run_scripts(self, scripts: Sequence[str]) -> int:
        """Run scripts in order while the session is running; return total failures.

        The running flag is left as the scripts leave it, so an exit command
        in any script is still visible to the caller afterwards.
        """
        failures = 0
        for script in scripts:
            if not self.session.running:
                break
            try:
                failures += self.run_script(script)
            except ShellIOError as e:
                print(f"Error: {e}")
                failures += 1
        return failures

    def run_batch(self, scripts: Sequence[str]) -> int:
        """Run scripts in order without the interactive editor; return total failures."""
        self.session.running = True
        try:
            return self.run_scripts(scripts)
        finally:
            self.session.running = False

    # ------------------------------------------------------------------
    # Interactive loop
    # ------------------------------------------------------------------

    def read_line(self) -> str:
        """Read one submitted line from the key source, terminal, or plain stdin."""
        prompt = self.session.prompt
        if self.key_source is None and terminal_supported():
            self.key_source = TerminalKeySource()
        if isinstance(self.key_source, TerminalKeySource):
            with self.key_source.raw_mode():
                return self.editor.read_line(self.key_source, prompt)
        if self.key_source is not None:
            return self.editor.read_line(self.key_source, prompt)
        return input(prompt)

    def run(self) -> None:
        """Run the interactive loop until exit or end of input."""
        self.session.running = True
        print(f"{APP_NAME} interactive shell")
        print("Type 'help' for available commands or 'exit' to quit.")
        print()
        log_event(
            "session_start",
            level=logging.INFO,
            prompt=self.session.prompt,
            command_count=len(self.registry.descriptors()),
            alias_count=len(self.session.aliases),
            variable_count=len(self.session.variables),
        )

        reason = "exit_command"
        while self.session.running:
            try:
                line = self.read_line()
            except EOFError:
                print()
                reason = "eof"
                break
            except KeyboardInterrupt:
                print()
                continue

            self.execute_line(line)

        self.session.running = False
        log_event(
            "session_stop",
            level=logging.INFO,
            reason=reason,
            history_count=len(self.session.history),
        )

    def shutdown(self) -> None:
        """Call every plugin's cleanup hook, reporting faults."""
        for plugin in self.session.plugins:
            try:
                plugin.cleanup()
            except Exception as e:
                print(f"Plugin cleanup failed for {plugin.name}: {e}")
                log_event(
                    "plugin_error",
                    level=logging.ERROR,
                    plugin=plugin.name,
                    error_type=type(e).__name__,
                    error=str(e),
                )
