"""Startup configuration: pre-seeded aliases and variables."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .constants import COMMENT_PREFIX
from .errors import ShellIOError
from .path_utils import map_path
from .substitution import split_assignment

_ALIAS_PREFIX = "alias "
_SET_PREFIX = "set "


@dataclass
class StartupConfig:
    """Parsed config file contents; malformed lines become warnings."""

    aliases: dict[str, str] = field(default_factory=dict)
    variables: dict[str, str] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)


def parse_startup_config(text: str) -> StartupConfig:
    """Parse ``alias name=value`` / ``set name=value`` lines."""
    config = StartupConfig()
    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith(COMMENT_PREFIX):
            continue

        if line.startswith(_ALIAS_PREFIX):
            target = config.aliases
            body = line[len(_ALIAS_PREFIX):]
        elif line.startswith(_SET_PREFIX):
            target = config.variables
            body = line[len(_SET_PREFIX):]
        else:
            config.warnings.append(f"line {line_number}: unrecognized entry '{line}'")
            continue

        assignment = split_assignment(body)
        if assignment is None:
            config.warnings.append(f"line {line_number}: expected name=value in '{line}'")
            continue
        name, value = assignment
        target[name] = value

    return config


def load_startup_config(path: str) -> StartupConfig:
    """Read and parse a config file; unreadable files raise ShellIOError."""
    config_path = Path(map_path(path))
    try:
        text = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ShellIOError(f"Could not read config file {config_path}: {e}") from e
    return parse_startup_config(text)
