"""Tests for argument definitions and the grammar registry."""

import pytest

from shellkit.errors import GrammarError, ShellError
from shellkit.grammar import (
    ArgumentDefinition,
    ArgumentGrammar,
    ArgumentKind,
    render_help,
    render_version,
    standard_grammar,
)


def test_register_and_lookup_by_every_key():
    """Definitions are reachable by name, short form and long form."""
    grammar = ArgumentGrammar()
    definition = grammar.register(ArgumentDefinition("verbose", short="-v", long="--verbose"))

    assert grammar.get("verbose") is definition
    assert grammar.by_short("-v") is definition
    assert grammar.by_long("--verbose") is definition
    assert "verbose" in grammar
    assert len(grammar) == 1


def test_registration_order_is_preserved():
    grammar = ArgumentGrammar()
    for name in ("zeta", "alpha", "mid"):
        grammar.register(ArgumentDefinition(name, long=f"--{name}"))

    assert [d.name for d in grammar] == ["zeta", "alpha", "mid"]


def test_duplicate_name_rejected():
    """A second definition with the same name raises and leaves the grammar intact."""
    grammar = ArgumentGrammar()
    grammar.register(ArgumentDefinition("verbose", short="-v"))

    with pytest.raises(GrammarError, match="already registered"):
        grammar.register(ArgumentDefinition("verbose", short="-x"))
    assert grammar.by_short("-x") is None


def test_duplicate_short_form_rejected():
    grammar = ArgumentGrammar()
    grammar.register(ArgumentDefinition("verbose", short="-v"))

    with pytest.raises(GrammarError, match="'-v' is already used by 'verbose'"):
        grammar.register(ArgumentDefinition("version", short="-v"))
    assert "version" not in grammar


def test_duplicate_long_form_rejected():
    grammar = ArgumentGrammar()
    grammar.register(ArgumentDefinition("output", ArgumentKind.OPTION, long="--output"))

    with pytest.raises(GrammarError):
        grammar.register(ArgumentDefinition("out", ArgumentKind.OPTION, long="--output"))


@pytest.mark.parametrize(
    "definition",
    [
        ArgumentDefinition("bad", short="v"),
        ArgumentDefinition("bad", short="-vv"),
        ArgumentDefinition("bad", short="--"),
        ArgumentDefinition("bad", long="-bad"),
        ArgumentDefinition("bad", long="--"),
        ArgumentDefinition("bad", ArgumentKind.OPTION, long="--bad=x"),
        ArgumentDefinition("bad", ArgumentKind.POSITIONAL, long="--bad"),
        ArgumentDefinition(""),
    ],
)
def test_malformed_definitions_rejected(definition):
    """Malformed forms are grammar errors, which are also shell errors."""
    grammar = ArgumentGrammar()

    with pytest.raises(ShellError):
        grammar.register(definition)
    assert len(grammar) == 0


def test_display_name():
    assert ArgumentDefinition("verbose", short="-v", long="--verbose").display_name() == "-v, --verbose"
    assert (
        ArgumentDefinition("output", ArgumentKind.OPTION, short="-o", long="--output").display_name()
        == "-o, --output=VALUE"
    )
    assert ArgumentDefinition("target", ArgumentKind.POSITIONAL).display_name() == "<target>"


def test_takes_value_only_for_options():
    assert ArgumentDefinition("o", ArgumentKind.OPTION).takes_value
    assert not ArgumentDefinition("f").takes_value
    assert not ArgumentDefinition("p", ArgumentKind.POSITIONAL).takes_value


def test_standard_grammar_surface():
    """The executable's grammar carries the documented arguments and defaults."""
    grammar = standard_grammar()

    assert grammar.by_short("-h").name == "help"
    assert grammar.by_short("-v").name == "verbose"
    assert grammar.by_short("-V").name == "version"
    assert grammar.by_short("-b").name == "batch"
    assert grammar.by_long("--log-level").name == "log-level"
    assert grammar.by_long("--plugin-dir").kind == ArgumentKind.OPTION
    assert grammar.get("format").default == "json"
    assert grammar.get("format").choices == ("json", "xml", "csv", "binary")
    assert grammar.get("role").default == "user"
    assert grammar.get("role").choices == ("admin", "user", "guest")


def test_standard_grammar_builds_fresh_instances():
    assert standard_grammar() is not standard_grammar()


def test_render_help_lists_options_sorted_with_choices_and_defaults():
    text = render_help(standard_grammar(), "shellkit")
    lines = text.splitlines()

    assert lines[0] == "Usage: shellkit [OPTIONS] [SCRIPT...]"
    assert "Options:" in lines
    assert "Valid values: json, xml, csv, binary" in text
    assert "Default: json" in text
    assert "Default: user" in text
    assert text.index("--batch") < text.index("--config") < text.index("--verbose")
    assert "Examples:" in text


def test_render_help_empty_grammar():
    text = render_help(ArgumentGrammar(), "tool")

    assert text.startswith("Usage: tool")
    assert "Options:" not in text


def test_render_version():
    assert render_version() == "shellkit 0.1.0"
