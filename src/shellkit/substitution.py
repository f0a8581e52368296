"""Variable and alias rewriting applied to raw input before tokenizing."""

from __future__ import annotations

import shlex
from typing import Mapping

from .constants import VARIABLE_SIGIL
from .errors import UsageError


def substitute_variables(line: str, variables: Mapping[str, str], sigil: str = VARIABLE_SIGIL) -> str:
    """Replace every literal ``$name`` with its value.

    Plain substring replacement, longest name first so ``$ab`` is rewritten
    before ``$a`` can claim its prefix. Equal-length names keep the map's
    insertion order.
    """
    order = sorted(enumerate(variables), key=lambda item: (-len(item[1]), item[0]))
    for _, name in order:
        if not name:
            continue
        line = line.replace(f"{sigil}{name}", variables[name])
    return line


def expand_alias(line: str, aliases: Mapping[str, str]) -> str:
    """Swap the first word for its alias expansion, once; no recursion."""
    words = line.split()
    if not words or words[0] not in aliases:
        return line
    rest = line.lstrip()[len(words[0]):]
    return aliases[words[0]] + rest


def tokenize(line: str) -> list[str]:
    """Split a command line shell-style; only double quotes group words."""
    try:
        lexer = shlex.shlex(line, posix=True)
        lexer.whitespace_split = True
        lexer.commenters = ""
        lexer.quotes = '"'
        return list(lexer)
    except ValueError as e:
        raise UsageError(f"Invalid command syntax: {e}") from e


def split_assignment(text: str) -> tuple[str, str] | None:
    """Split ``name=value`` (both sides trimmed); None when malformed."""
    name, separator, value = text.partition("=")
    name = name.strip()
    if not separator or not name:
        return None
    return name, value.strip()
