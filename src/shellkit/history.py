"""Submitted-line history with an up/down recall cursor."""

from __future__ import annotations


class HistoryManager:
    """Append-only log of submitted lines plus a recall cursor.

    The cursor ranges over ``[0, len(entries)]``; ``len(entries)`` means
    "past the newest entry", which is where every append leaves it.

    Recall is asymmetric: ``recall_newer`` stops at the newest
    entry and keeps returning nothing there, rather than stepping forward to
    an empty line.
    """

    def __init__(self) -> None:
        self._entries: list[str] = []
        self._cursor = 0

    def append(self, line: str) -> None:
        """Record a submitted line, even one that later fails to parse."""
        self._entries.append(line)
        self._cursor = len(self._entries)

    def recall_older(self) -> str | None:
        if self._cursor <= 0:
            return None
        self._cursor -= 1
        return self._entries[self._cursor]

    def recall_newer(self) -> str | None:
        if self._cursor >= len(self._entries) - 1:
            return None
        self._cursor += 1
        return self._entries[self._cursor]

    def tail(self, count: int | None = None) -> list[tuple[int, str]]:
        """Return the last ``count`` entries as (1-based number, line) pairs."""
        start = 0 if count is None else max(0, len(self._entries) - max(count, 0))
        return [(i + 1, self._entries[i]) for i in range(start, len(self._entries))]

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    @property
    def cursor(self) -> int:
        return self._cursor

    def __len__(self) -> int:
        return len(self._entries)
