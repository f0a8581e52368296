"""Structured event emission and logging setup for shellkit."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from .formatter import StructuredTextFormatter
from .schema import LOG_PATH_FIELDS

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


def _jsonable(value: Any) -> Any:
    """Reduce a field value to something json.dumps accepts."""
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, Mapping):
        return {str(key): _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_jsonable(item) for item in value]
    return str(value)


def _absolute_path(value: str) -> str:
    """Best-effort absolute form of a logged path; unmappable text is kept."""
    from ..path_utils import map_path

    try:
        return map_path(value) if value.strip() else value
    except ValueError:
        return value


def summarize_text(text: Any) -> str:
    """Collapse whitespace runs so a value fits on one log line."""
    return "" if text is None else " ".join(str(text).split())


def summarize_command_args(_command: str, args: Sequence[str]) -> str:
    """Summarize a dispatched command's arguments for ``command_exec``."""
    return summarize_text(" ".join(args))


def log_event(event: str, level: int = logging.INFO, **fields: Any) -> None:
    """Emit one structured event as a JSON message on the root logger."""
    payload: dict[str, Any] = {"ts": datetime.now().astimezone().isoformat(), "event": event}
    for key, value in fields.items():
        if key in LOG_PATH_FIELDS and isinstance(value, str):
            value = _absolute_path(value)
        payload[key] = _jsonable(value)
    logging.log(level, json.dumps(payload, ensure_ascii=False, separators=(",", ":")))


def setup_logging(
    log_file: Optional[str] = None,
    level: str = "info",
    verbose: bool = False,
) -> None:
    """Route events to ``log_file``, or to stderr when ``verbose``.

    With neither, logging is disabled so the shell's own output stays clean.
    ``level`` is one of the ``--log-level`` choices.
    """
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(path, encoding="utf-8")
    elif verbose:
        handler = logging.StreamHandler(sys.stderr)
    else:
        logging.disable(logging.CRITICAL)
        return

    handler.setFormatter(StructuredTextFormatter())
    logging.disable(logging.NOTSET)
    logging.basicConfig(level=LOG_LEVELS.get(level, logging.INFO), handlers=[handler], force=True)
