"""Plaintext block formatter for shellkit's JSON log events."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from .schema import DEFAULT_EVENT_KEY_ORDER, EVENT_KEY_ORDER


def _event_payload(message: str) -> Optional[dict[str, Any]]:
    """Decode a ``log_event`` message; None for ordinary log text."""
    if not (message.startswith("{") and message.endswith("}")):
        return None
    try:
        payload = json.loads(message)
    except ValueError:
        return None
    return payload if isinstance(payload, dict) else None


def _one_line(value: Any) -> str:
    return str(value).replace("\n", "\\n")


class StructuredTextFormatter(logging.Formatter):
    """Render each record as a ``=== event ===`` block of ``key: value`` lines.

    Records emitted through ``log_event`` carry a JSON payload whose keys are
    listed in ``EVENT_KEY_ORDER`` order, then alphabetically. Plain records
    become a block named after their logger with a ``message`` line. Empty
    (None) fields are left out.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._emitted = False

    def format(self, record: logging.LogRecord) -> str:
        fields: dict[str, Any] = {
            "ts_utc": datetime.fromtimestamp(record.created, timezone.utc)
            .isoformat(timespec="microseconds")
            .replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
        }
        message = record.getMessage()
        payload = _event_payload(message)
        if payload is None:
            fields["message"] = message
            event = record.name
        else:
            fields.update(payload)
            event = str(fields.pop("event", record.name))

        preferred = EVENT_KEY_ORDER.get(event, DEFAULT_EVENT_KEY_ORDER)
        present = {key for key, value in fields.items() if value is not None}
        keys = [key for key in preferred if key in present]
        keys += sorted(present.difference(preferred))

        lines = [f"=== {event} ==="]
        lines.extend(f"{key}: {_one_line(fields[key])}" for key in keys)
        if record.exc_info:
            lines.append("traceback:")
            lines.append(self.formatException(record.exc_info))

        block = "\n".join(lines)
        # Blank line between blocks, none before the first.
        if self._emitted:
            return "\n" + block
        self._emitted = True
        return block
