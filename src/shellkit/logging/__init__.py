"""Structured logging primitives for shellkit."""

from .events import (
    LOG_LEVELS,
    log_event,
    setup_logging,
    summarize_command_args,
    summarize_text,
)
from .formatter import StructuredTextFormatter
from .schema import DEFAULT_EVENT_KEY_ORDER, EVENT_KEY_ORDER, LOG_PATH_FIELDS

__all__ = [
    "DEFAULT_EVENT_KEY_ORDER",
    "EVENT_KEY_ORDER",
    "LOG_LEVELS",
    "LOG_PATH_FIELDS",
    "StructuredTextFormatter",
    "log_event",
    "setup_logging",
    "summarize_command_args",
    "summarize_text",
]
