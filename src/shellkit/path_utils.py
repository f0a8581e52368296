"""Map user-typed file arguments (scripts, config, plugin dirs) to absolute paths."""

import unicodedata
from pathlib import Path

from .errors import ConfigError


def has_home_path_prefix(path: str) -> bool:
    """True for ``~`` alone or ``~`` followed by a separator."""
    return path == "~" or path[:2] in ("~/", "~\\")


def map_path(path: str) -> str:
    """Return ``path`` as an absolute path string.

    ``~`` expands to the home directory, absolute paths pass through and
    anything else is resolved against the working directory. Text is NFC
    normalized first.

    Raises:
        ConfigError: If the path is blank or contains a NUL character

    Examples:
        >>> map_path("~/scripts/setup.script")  # Unix
        '/home/username/scripts/setup.script'
    """
    if "\x00" in path:
        raise ConfigError("Path contains NUL character")
    text = unicodedata.normalize("NFC", path).strip()
    if not text:
        raise ConfigError("Path is empty")

    if has_home_path_prefix(text):
        return str(Path.home().joinpath(text[1:].lstrip("/\\")))

    candidate = Path(text)
    if candidate.is_absolute():
        return str(candidate)
    return str((Path.cwd() / candidate).resolve())
