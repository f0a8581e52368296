"""Per-keystroke line editing with history recall and tab completion."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Protocol, TextIO

from prompt_toolkit.key_binding import KeyPress
from prompt_toolkit.keys import Keys

from .completion import apply_completion, format_candidates

if TYPE_CHECKING:
    from .completion import CompletionEngine
    from .history import HistoryManager


_SUBMIT_KEYS = frozenset((Keys.ControlM, Keys.ControlJ))


class KeySource(Protocol):
    def read_key(self) -> KeyPress:
        ...


class LineEditor:
    """Single-state (editing) input machine over a text buffer and cursor.

    Recalled history entries and single completions rewrite the whole
    visible line instead of diffing it; lines are short.
    """

    def __init__(
        self,
        history: "HistoryManager",
        completer: "CompletionEngine",
        output: TextIO | None = None,
    ) -> None:
        self.history = history
        self.completer = completer
        self._output = output
        self.prompt = ""
        self.buffer = ""
        self.cursor = 0

    @property
    def output(self) -> TextIO:
        return self._output if self._output is not None else sys.stdout

    def _write(self, text: str) -> None:
        self.output.write(text)
        self.output.flush()

    def reset(self, prompt: str = "") -> None:
        self.prompt = prompt
        self.buffer = ""
        self.cursor = 0

    def read_line(self, keys: KeySource, prompt: str) -> str:
        """Block on ``keys`` one unit at a time until a line is submitted.

        Raises EOFError on Ctrl-D with an empty buffer.
        """
        self.reset(prompt)
        self._write(prompt)
        while True:
            line = self.handle_key(keys.read_key())
            if line is not None:
                return line

    def handle_key(self, key_press: KeyPress) -> str | None:
        """Apply one key; return the submitted line, or None to keep editing."""
        key = key_press.key

        if key in _SUBMIT_KEYS:
            return self.submit()
        if key == Keys.ControlI:
            self.complete()
        elif key == Keys.ControlH:
            self.backspace()
        elif key == Keys.Up:
            self.recall(self.history.recall_older())
        elif key == Keys.Down:
            self.recall(self.history.recall_newer())
        elif key == Keys.ControlC:
            self._discard()
        elif key == Keys.ControlD:
            if not self.buffer:
                self._write("\n")
                raise EOFError
        elif key == Keys.BracketedPaste:
            self.insert(key_press.data)
        elif not isinstance(key, Keys):
            self.insert(key_press.data)
        return None

    def insert(self, text: str) -> None:
        text = "".join(ch for ch in text if ch.isprintable())
        if not text:
            return
        at_end = self.cursor == len(self.buffer)
        old = self.buffer
        self.buffer = self.buffer[: self.cursor] + text + self.buffer[self.cursor :]
        self.cursor += len(text)
        if at_end:
            self._write(text)
        else:
            self._rewrite(old)

    def backspace(self) -> None:
        if self.cursor == 0:
            return
        at_end = self.cursor == len(self.buffer)
        old = self.buffer
        self.buffer = self.buffer[: self.cursor - 1] + self.buffer[self.cursor :]
        self.cursor -= 1
        if at_end:
            self._write("\b \b")
        else:
            self._rewrite(old)

    def submit(self) -> str:
        line = self.buffer
        self._write("\n")
        self.buffer = ""
        self.cursor = 0
        return line

    def recall(self, entry: str | None) -> None:
        if entry is None:
            return
        self.replace_line(entry)

    def complete(self) -> None:
        candidates = self.completer.complete(self.buffer, self.cursor)
        if not candidates:
            return
        if len(candidates) == 1:
            self.replace_line(apply_completion(self.buffer, candidates[0]))
            return
        listing = "\n".join(format_candidates(candidates))
        self._write(f"\n{listing}\n{self.prompt}{self.buffer}")

    def replace_line(self, text: str) -> None:
        old = self.buffer
        self.buffer = text
        self.cursor = len(text)
        self._rewrite(old)

    def _rewrite(self, old: str) -> None:
        blank = " " * (len(self.prompt) + len(old))
        self._write(f"\r{blank}\r{self.prompt}{self.buffer}")

    def _discard(self) -> None:
        self.buffer = ""
        self.cursor = 0
        self._write(f"^C\n{self.prompt}")
