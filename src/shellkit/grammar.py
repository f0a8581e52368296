"""Argument definitions and the grammar registry they live in."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

from .constants import APP_NAME, APP_VERSION
from .errors import GrammarError


class ArgumentKind(str, Enum):
    FLAG = "flag"
    OPTION = "option"
    POSITIONAL = "positional"
    COMMAND = "command"


@dataclass(frozen=True)
class ArgumentDefinition:
    """One registered argument.

    ``short`` is written with its dash (``-v``) and ``long`` with both
    dashes (``--verbose``). ``choices`` restricts option values when
    non-empty.
    """

    name: str
    kind: ArgumentKind = ArgumentKind.FLAG
    short: str | None = None
    long: str | None = None
    required: bool = False
    description: str = ""
    default: str | None = None
    choices: tuple[str, ...] = ()

    @property
    def takes_value(self) -> bool:
        return self.kind == ArgumentKind.OPTION

    def display_name(self) -> str:
        """Return the help-table label, e.g. ``-o, --output=VALUE``."""
        forms = [form for form in (self.short, self.long) if form]
        label = ", ".join(forms) if forms else f"<{self.name}>"
        if self.kind == ArgumentKind.OPTION:
            label += "=VALUE"
        return label


@dataclass
class ParsedArgument:
    """Parse outcome for one definition; reset before every parse."""

    name: str
    kind: ArgumentKind
    value: str | bool | None = None
    present: bool = False


def _validate_forms(definition: ArgumentDefinition) -> None:
    short = definition.short
    if short is not None and (len(short) != 2 or short[0] != "-" or short[1] == "-"):
        raise GrammarError(
            f"Invalid short form '{short}' for '{definition.name}'. Expected '-' plus one character."
        )
    long = definition.long
    if long is not None and (not long.startswith("--") or len(long) < 3 or "=" in long):
        raise GrammarError(
            f"Invalid long form '{long}' for '{definition.name}'. Expected '--name'."
        )
    if definition.kind in (ArgumentKind.POSITIONAL, ArgumentKind.COMMAND) and (short or long):
        raise GrammarError(
            f"{definition.kind.value.capitalize()} argument '{definition.name}' cannot have a short or long form."
        )


class ArgumentGrammar:
    """Ordered registry of argument definitions keyed by name."""

    def __init__(self) -> None:
        self._definitions: dict[str, ArgumentDefinition] = {}
        self._by_short: dict[str, ArgumentDefinition] = {}
        self._by_long: dict[str, ArgumentDefinition] = {}

    def register(self, definition: ArgumentDefinition) -> ArgumentDefinition:
        """Add a definition; raise GrammarError on any name or form clash."""
        if not definition.name:
            raise GrammarError("Argument name cannot be empty.")
        if definition.name in self._definitions:
            raise GrammarError(f"Argument '{definition.name}' is already registered.")
        _validate_forms(definition)
        if definition.short and definition.short in self._by_short:
            owner = self._by_short[definition.short].name
            raise GrammarError(f"Short form '{definition.short}' is already used by '{owner}'.")
        if definition.long and definition.long in self._by_long:
            owner = self._by_long[definition.long].name
            raise GrammarError(f"Long form '{definition.long}' is already used by '{owner}'.")

        self._definitions[definition.name] = definition
        if definition.short:
            self._by_short[definition.short] = definition
        if definition.long:
            self._by_long[definition.long] = definition
        return definition

    def get(self, name: str) -> ArgumentDefinition | None:
        return self._definitions.get(name)

    def by_short(self, form: str) -> ArgumentDefinition | None:
        return self._by_short.get(form)

    def by_long(self, form: str) -> ArgumentDefinition | None:
        return self._by_long.get(form)

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def __iter__(self) -> Iterator[ArgumentDefinition]:
        return iter(self._definitions.values())

    def __len__(self) -> int:
        return len(self._definitions)


FORMAT_CHOICES = ("json", "xml", "csv", "binary")
ROLE_CHOICES = ("admin", "user", "guest")
LOG_LEVEL_CHOICES = ("debug", "info", "warn", "error")

_STANDARD_DEFINITIONS = (
    ArgumentDefinition("help", short="-h", long="--help", description="Display help information"),
    ArgumentDefinition("verbose", short="-v", long="--verbose", description="Enable verbose output"),
    ArgumentDefinition("version", short="-V", long="--version", description="Display version information"),
    ArgumentDefinition(
        "output", ArgumentKind.OPTION, short="-o", long="--output", description="Specify output file path"
    ),
    ArgumentDefinition(
        "input", ArgumentKind.OPTION, short="-i", long="--input", description="Specify input script path"
    ),
    ArgumentDefinition(
        "format",
        ArgumentKind.OPTION,
        short="-f",
        long="--format",
        description="Specify output format",
        default="json",
        choices=FORMAT_CHOICES,
    ),
    ArgumentDefinition(
        "role",
        ArgumentKind.OPTION,
        short="-r",
        long="--role",
        description="Specify user role",
        default="user",
        choices=ROLE_CHOICES,
    ),
    ArgumentDefinition("batch", short="-b", long="--batch", description="Run in batch mode (non-interactive)"),
    ArgumentDefinition(
        "config", ArgumentKind.OPTION, short="-c", long="--config", description="Specify configuration file path"
    ),
    ArgumentDefinition(
        "log-level",
        ArgumentKind.OPTION,
        long="--log-level",
        description="Set logging level",
        default="info",
        choices=LOG_LEVEL_CHOICES,
    ),
    ArgumentDefinition("log", ArgumentKind.OPTION, long="--log", description="Write structured logs to this file"),
    ArgumentDefinition(
        "plugin-dir", ArgumentKind.OPTION, long="--plugin-dir", description="Specify plugin directory path"
    ),
)


def standard_grammar() -> ArgumentGrammar:
    """Build the grammar surface the shellkit executable exposes."""
    grammar = ArgumentGrammar()
    for definition in _STANDARD_DEFINITIONS:
        grammar.register(definition)
    return grammar


def render_help(grammar: ArgumentGrammar, program: str = APP_NAME) -> str:
    """Render an option table for every definition, sorted by name."""
    definitions = sorted(grammar, key=lambda d: d.name)
    lines = [f"Usage: {program} [OPTIONS] [SCRIPT...]", ""]
    if not definitions:
        return "\n".join(lines)

    width = max(len(d.display_name()) for d in definitions)
    lines.append("Options:")
    for definition in definitions:
        lines.append(f"  {definition.display_name().ljust(width)}  {definition.description}")
        if definition.choices:
            lines.append(f"  {' ' * width}    Valid values: {', '.join(definition.choices)}")
        if definition.default is not None:
            lines.append(f"  {' ' * width}    Default: {definition.default}")

    lines.append("")
    lines.append("Examples:")
    lines.append(f"  {program} --role=admin --verbose")
    lines.append(f"  {program} -r admin -v -o output.json")
    lines.append(f"  {program} --batch --input=setup.script --format=csv")
    return "\n".join(lines)


def render_version() -> str:
    return f"{APP_NAME} {APP_VERSION}"
