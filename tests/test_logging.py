"""Tests for structured logging helpers."""

import json
import logging

from shellkit.logging import (
    StructuredTextFormatter,
    log_event,
    setup_logging,
    summarize_command_args,
    summarize_text,
)


def _record(msg, name="root", level=logging.INFO):
    return logging.LogRecord(
        name=name,
        level=level,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )


def test_formatter_renders_event_block_in_preferred_order():
    formatter = StructuredTextFormatter()
    payload = {
        "ts": "2024-01-01T00:00:00+00:00",
        "event": "command_exec",
        "zeta": "last",
        "success": True,
        "command": "echo",
        "elapsed_ms": 0.4,
    }

    result = formatter.format(_record(json.dumps(payload)))
    lines = result.splitlines()

    assert lines[0] == "=== command_exec ==="
    keys = [line.split(":", 1)[0] for line in lines[1:]]
    assert keys.index("command") < keys.index("success") < keys.index("elapsed_ms") < keys.index("zeta")
    assert "level: INFO" in result


def test_formatter_plain_message_uses_logger_name():
    formatter = StructuredTextFormatter()

    result = formatter.format(_record("Arbitrary\nmessage", name="shellkit"))

    assert result.splitlines()[0] == "=== shellkit ==="
    assert "message: Arbitrary\\nmessage" in result


def test_formatter_separates_entries_with_blank_line():
    formatter = StructuredTextFormatter()

    first = formatter.format(_record("one"))
    second = formatter.format(_record("two"))

    assert not first.startswith("\n")
    assert second.startswith("\n=== root ===")


def test_formatter_drops_none_fields():
    formatter = StructuredTextFormatter()

    result = formatter.format(_record(json.dumps({"event": "app_start", "config_file": None})))

    assert "config_file" not in result


def test_log_event_emits_json_payload(caplog, tmp_path):
    caplog.set_level(logging.INFO)

    log_event("script_run", script_file=str(tmp_path / "job.script"), line_count=3, tags=("a", "b"))

    payload = json.loads(caplog.records[-1].getMessage())
    assert payload["event"] == "script_run"
    assert payload["script_file"] == str(tmp_path / "job.script")
    assert payload["line_count"] == 3
    assert payload["tags"] == ["a", "b"]
    assert "ts" in payload


def test_summaries_collapse_whitespace():
    assert summarize_text("  a \n b  ") == "a b"
    assert summarize_text(None) == ""
    assert summarize_command_args("echo", ["hello", "big   world"]) == "hello big world"


def test_setup_logging_writes_structured_file(tmp_path):
    log_file = tmp_path / "logs" / "shellkit.log"

    setup_logging(log_file=str(log_file), level="debug")
    log_event("app_start", mode="batch")
    for handler in logging.getLogger().handlers:
        handler.flush()

    text = log_file.read_text(encoding="utf-8")
    assert "=== app_start ===" in text
    assert "mode: batch" in text


def test_setup_logging_level_filters_events(tmp_path):
    log_file = tmp_path / "shellkit.log"

    setup_logging(log_file=str(log_file), level="error")
    log_event("command_exec", command="echo")
    log_event("command_error", level=logging.ERROR, command="boom")
    for handler in logging.getLogger().handlers:
        handler.flush()

    text = log_file.read_text(encoding="utf-8")
    assert "command_exec" not in text
    assert "=== command_error ===" in text


def test_setup_logging_without_destination_disables_logging():
    setup_logging()

    assert logging.getLogger().manager.disable == logging.CRITICAL
