"""CLI bootstrap entry point for shellkit."""

import logging
import sys
import time
from contextlib import redirect_stdout
from pathlib import Path
from typing import Optional, Sequence

from .config import load_startup_config
from .constants import DEFAULT_CONFIG_FILE
from .errors import ShellError, ShellIOError
from .grammar import render_help, render_version, standard_grammar
from .logging import log_event, setup_logging
from .parser import ArgumentParser
from .path_utils import map_path
from .plugin_loader import load_plugins_from_directory
from .shell import Shell

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def _resolve_config_path(explicit: Optional[str]) -> Optional[str]:
    """Explicit --config wins; otherwise the default file, only if present."""
    if explicit:
        return explicit
    default_path = map_path(DEFAULT_CONFIG_FILE)
    return default_path if Path(default_path).is_file() else None


def build_shell(parser: ArgumentParser) -> Shell:
    """Create a shell seeded from parsed CLI arguments, config and plugins."""
    shell = Shell(plugin_loader=load_plugins_from_directory)
    shell.session.set_variable("format", str(parser.value("format")))
    shell.session.set_variable("role", str(parser.value("role")))

    config_path = _resolve_config_path(parser.value("config") or None)
    if config_path:
        try:
            shell.apply_config(load_startup_config(config_path), source=config_path)
        except ShellIOError as e:
            print(f"Warning: {e}")
            log_event("config_warning", level=logging.WARNING, config_file=config_path, warning=str(e))

    plugin_dir = parser.value("plugin-dir")
    if plugin_dir:
        try:
            shell.load_plugins(str(plugin_dir))
        except ShellIOError as e:
            print(f"Warning: {e}")
            log_event(
                "plugin_error",
                level=logging.WARNING,
                plugin_dir=str(plugin_dir),
                error_type=type(e).__name__,
                error=str(e),
            )
    return shell


def _run_batch(shell: Shell, scripts: Sequence[str], output: Optional[str]) -> int:
    """Run scripts non-interactively; any failing line makes the exit code 1."""
    if not output:
        failures = shell.run_batch(scripts)
        return EXIT_FAILURE if failures else EXIT_OK

    output_path = Path(map_path(output))
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f, redirect_stdout(f):
        failures = shell.run_batch(scripts)
    return EXIT_FAILURE if failures else EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the shellkit CLI."""
    tokens = list(sys.argv[1:] if argv is None else argv)
    parser = ArgumentParser(standard_grammar())

    if not parser.parse(tokens):
        for error in parser.errors:
            print(f"Error: {error}")
        print("Run 'shellkit --help' for usage.")
        return EXIT_USAGE

    if parser.is_present("help"):
        print(render_help(parser.grammar))
        return EXIT_OK

    if parser.is_present("version"):
        print(render_version())
        return EXIT_OK

    batch = parser.is_present("batch")
    scripts = [str(parser.value("input"))] if parser.is_present("input") else []
    scripts.extend(parser.positionals)
    if batch and not scripts:
        print("Error: --batch requires --input <script> or a script path")
        return EXIT_USAGE

    setup_logging(
        log_file=str(parser.value("log")) if parser.is_present("log") else None,
        level=str(parser.value("log-level")),
        verbose=parser.is_present("verbose"),
    )
    app_started = time.perf_counter()
    log_event(
        "app_start",
        level=logging.INFO,
        mode="batch" if batch else "interactive",
        config_file=parser.value("config"),
        log_file=parser.value("log"),
        plugin_dir=parser.value("plugin-dir"),
        format=parser.value("format"),
        role=parser.value("role"),
    )

    shell: Optional[Shell] = None
    try:
        shell = build_shell(parser)
        if batch:
            output = parser.value("output")
            exit_code = _run_batch(shell, scripts, str(output) if output else None)
        else:
            shell.session.running = True
            shell.run_scripts(scripts)
            if shell.session.running:
                shell.run()
            exit_code = EXIT_OK

    except ShellError as e:
        print(f"Error: {e}")
        log_event(
            "app_stop",
            level=logging.ERROR,
            reason="shell_error",
            error_type=type(e).__name__,
            error=str(e),
            uptime_ms=round((time.perf_counter() - app_started) * 1000, 1),
        )
        return EXIT_FAILURE

    except KeyboardInterrupt:
        print("\nInterrupted")
        exit_code = EXIT_OK

    finally:
        if shell is not None:
            shell.shutdown()

    log_event(
        "app_stop",
        level=logging.INFO,
        reason="normal",
        uptime_ms=round((time.perf_counter() - app_started) * 1000, 1),
    )
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
