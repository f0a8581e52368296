"""Command descriptors, registry, and built-in shell commands."""

from .registry import CommandRegistry
from .types import CommandDescriptor, CompleteFn, ExecuteFn

__all__ = [
    "CommandDescriptor",
    "CommandRegistry",
    "CompleteFn",
    "ExecuteFn",
]
