"""Tests for the keystroke-level line editor."""

import io

import pytest
from prompt_toolkit.key_binding import KeyPress
from prompt_toolkit.keys import Keys

from shellkit.commands import CommandRegistry
from shellkit.completion import CompletionEngine
from shellkit.editor import LineEditor
from shellkit.history import HistoryManager

from test_helpers import (
    BACKSPACE,
    CTRL_C,
    CTRL_D,
    DOWN,
    ENTER,
    TAB,
    UP,
    ScriptedKeySource,
    make_descriptor,
    type_text,
)

PROMPT = "> "


@pytest.fixture
def history():
    return HistoryManager()


@pytest.fixture
def output():
    return io.StringIO()


def _editor(history, output, *descriptors):
    registry = CommandRegistry(descriptors)
    return LineEditor(history, CompletionEngine(registry), output=output)


def _read(editor, presses):
    return editor.read_line(ScriptedKeySource(presses), PROMPT)


def test_typing_and_submit(history, output):
    editor = _editor(history, output)

    assert _read(editor, type_text("abc") + [ENTER]) == "abc"
    assert output.getvalue() == "> abc\n"
    assert editor.buffer == ""


def test_ctrl_j_also_submits(history, output):
    editor = _editor(history, output)

    assert _read(editor, type_text("x") + [KeyPress(Keys.ControlJ)]) == "x"


def test_submit_does_not_touch_history(history, output):
    """The shell records lines; the editor only reads them."""
    editor = _editor(history, output)

    _read(editor, type_text("abc") + [ENTER])

    assert len(history) == 0


def test_backspace_erases_last_character(history, output):
    editor = _editor(history, output)

    assert _read(editor, type_text("abd") + [BACKSPACE] + type_text("c") + [ENTER]) == "abc"
    assert "\b \b" in output.getvalue()


def test_backspace_on_empty_buffer_is_noop(history, output):
    editor = _editor(history, output)

    assert _read(editor, [BACKSPACE, BACKSPACE] + type_text("a") + [ENTER]) == "a"
    assert "\b" not in output.getvalue()


def test_up_recalls_previous_line(history, output):
    history.append("L1")
    history.append("L2")
    editor = _editor(history, output)

    assert _read(editor, [UP, ENTER]) == "L2"
    assert f"\r{PROMPT}L2" in output.getvalue()


def test_up_up_down_returns_to_newer_entry(history, output):
    history.append("L1")
    history.append("L2")
    editor = _editor(history, output)

    assert _read(editor, [UP, UP, DOWN, ENTER]) == "L2"


def test_up_at_oldest_keeps_buffer(history, output):
    history.append("only")
    editor = _editor(history, output)

    assert _read(editor, [UP, UP, UP, ENTER]) == "only"


def test_recalled_line_can_be_edited(history, output):
    history.append("echo hi")
    editor = _editor(history, output)

    assert _read(editor, [UP, BACKSPACE, BACKSPACE] + type_text("yo") + [ENTER]) == "echo yo"


def test_down_without_history_keeps_typed_text(history, output):
    editor = _editor(history, output)

    assert _read(editor, type_text("draft") + [DOWN, ENTER]) == "draft"


def test_tab_single_candidate_completes_in_place(history, output):
    editor = _editor(history, output, make_descriptor("help"), make_descriptor("history"))

    assert _read(editor, type_text("hi") + [TAB, ENTER]) == "history"


def test_tab_multiple_candidates_lists_and_redraws(history, output):
    """Ambiguous completion prints the list, then the prompt and unchanged buffer."""
    editor = _editor(
        history, output, make_descriptor("help"), make_descriptor("history"), make_descriptor("halt")
    )

    assert _read(editor, type_text("h") + [TAB, ENTER]) == "h"
    assert "> h\n  halt\n  help\n  history\n> h\n" in output.getvalue()


def test_tab_listing_is_truncated(history, output):
    descriptors = [make_descriptor(f"cmd{i:02}") for i in range(13)]
    editor = _editor(history, output, *descriptors)

    _read(editor, type_text("c") + [TAB, ENTER])

    text = output.getvalue()
    assert "  cmd09\n" in text
    assert "cmd10" not in text
    assert "  +3 more\n" in text


def test_tab_without_candidates_does_nothing(history, output):
    editor = _editor(history, output, make_descriptor("help"))

    assert _read(editor, type_text("zz") + [TAB, ENTER]) == "zz"
    assert output.getvalue() == "> zz\n"


def test_tab_completes_argument_word(history, output):
    editor = _editor(history, output, make_descriptor("plugin", completions=["list"]))

    assert _read(editor, type_text("plugin l") + [TAB, ENTER]) == "plugin list"


def test_ctrl_c_discards_line(history, output):
    editor = _editor(history, output)

    assert _read(editor, type_text("abc") + [CTRL_C] + type_text("x") + [ENTER]) == "x"
    assert "^C\n> " in output.getvalue()


def test_ctrl_d_on_empty_line_ends_input(history, output):
    editor = _editor(history, output)

    with pytest.raises(EOFError):
        _read(editor, [CTRL_D])


def test_ctrl_d_with_text_is_ignored(history, output):
    editor = _editor(history, output)

    assert _read(editor, type_text("ab") + [CTRL_D, ENTER]) == "ab"


def test_unmapped_control_keys_ignored(history, output):
    editor = _editor(history, output)

    presses = type_text("a") + [KeyPress(Keys.Left), KeyPress(Keys.Escape), KeyPress(Keys.F1)] + [ENTER]
    assert _read(editor, presses) == "a"


def test_non_printable_data_dropped(history, output):
    editor = _editor(history, output)

    assert _read(editor, [KeyPress("\x07")] + type_text("ok") + [ENTER]) == "ok"


def test_bracketed_paste_inserts_text(history, output):
    editor = _editor(history, output)
    paste = KeyPress(Keys.BracketedPaste, "pasted text")

    assert _read(editor, [paste, ENTER]) == "pasted text"


def test_exhausted_source_raises_eof(history, output):
    editor = _editor(history, output)

    with pytest.raises(EOFError):
        _read(editor, type_text("unfinished"))


def test_handle_key_returns_none_while_editing(history, output):
    editor = _editor(history, output)
    editor.reset(PROMPT)

    assert editor.handle_key(KeyPress("a")) is None
    assert editor.buffer == "a"
    assert editor.cursor == 1
    assert editor.handle_key(ENTER) == "a"
