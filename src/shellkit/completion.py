"""Tab-completion candidates for a partially typed line."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .constants import COMPLETION_DISPLAY_LIMIT

if TYPE_CHECKING:
    from .commands.registry import CommandRegistry


class CompletionEngine:
    """Produce candidates from the command registry and per-command completers."""

    def __init__(self, registry: "CommandRegistry") -> None:
        self.registry = registry

    def complete(self, buffer: str, cursor: int | None = None) -> list[str]:
        """Return candidates for the word being typed at ``cursor``.

        Only the text left of the cursor is considered; the editor always
        completes at the end of its buffer.
        """
        text = buffer if cursor is None else buffer[:cursor]
        words = text.split()
        trailing_space = bool(text) and text[-1].isspace()

        if not words or (len(words) == 1 and not trailing_space):
            prefix = words[0] if words else ""
            return self.command_names(prefix)

        descriptor = self.registry.lookup(words[0])
        if descriptor is None or descriptor.complete is None:
            return []

        args = words[1:]
        current_index = len(args) if trailing_space else len(args) - 1
        return list(descriptor.complete(args, current_index))

    def command_names(self, prefix: str = "") -> list[str]:
        """Registry keys (names and aliases) starting with ``prefix``, sorted."""
        folded = prefix.casefold()
        return sorted({key for key in self.registry.keys() if key.startswith(folded)})


def apply_completion(buffer: str, candidate: str) -> str:
    """Replace the last space-separated word of ``buffer`` with ``candidate``."""
    head, separator, _ = buffer.rpartition(" ")
    return f"{head}{separator}{candidate}"


def format_candidates(candidates: list[str], limit: int = COMPLETION_DISPLAY_LIMIT) -> list[str]:
    """Render the candidate listing shown when completion is ambiguous."""
    lines = [f"  {candidate}" for candidate in candidates[:limit]]
    if len(candidates) > limit:
        lines.append(f"  +{len(candidates) - limit} more")
    return lines


def filter_prefix(options: list[str] | tuple[str, ...], args: list[str], current_index: int) -> list[str]:
    """Helper for command completers: keep options matching the current word."""
    prefix = args[current_index] if 0 <= current_index < len(args) else ""
    return sorted(option for option in options if option.startswith(prefix))
