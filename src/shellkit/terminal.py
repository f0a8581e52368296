"""Raw keystroke source backed by prompt_toolkit's terminal input."""

from __future__ import annotations

import os
import select
import sys
from collections import deque
from contextlib import contextmanager
from typing import Iterator

from prompt_toolkit.input import Input, create_input
from prompt_toolkit.key_binding import KeyPress

# Seconds to wait for the rest of an escape sequence; prompt_toolkit's
# Application.ttimeoutlen default.
ESCAPE_FLUSH_TIMEOUT = 0.5


def terminal_supported() -> bool:
    """True when stdin is an interactive POSIX terminal."""
    return os.name != "nt" and sys.stdin.isatty()


class TerminalKeySource:
    """Block until the terminal delivers a key, then hand keys out one by one."""

    def __init__(self, pt_input: Input | None = None) -> None:
        self._input = pt_input if pt_input is not None else create_input()
        self._pending: deque[KeyPress] = deque()

    @contextmanager
    def raw_mode(self) -> Iterator["TerminalKeySource"]:
        with self._input.raw_mode():
            yield self

    def read_key(self) -> KeyPress:
        while not self._pending:
            if self._input.closed:
                raise EOFError
            fd = self._input.fileno()
            select.select([fd], [], [])
            keys = self._input.read_keys()
            if not keys and not select.select([fd], [], [], ESCAPE_FLUSH_TIMEOUT)[0]:
                # A held-back prefix (lone Escape) with nothing following it
                keys = self._input.flush_keys()
            self._pending.extend(keys)
        return self._pending.popleft()
