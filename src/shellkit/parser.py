"""Token scanner that binds argv-style tokens to an ArgumentGrammar."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from .grammar import ArgumentDefinition, ArgumentGrammar, ArgumentKind, ParsedArgument


class ParseErrorKind(str, Enum):
    UNKNOWN_ARGUMENT = "unknown_argument"
    MISSING_VALUE = "missing_value"
    INVALID_VALUE = "invalid_value"
    MISSING_REQUIRED = "missing_required"


@dataclass(frozen=True)
class ParseError:
    """One problem found while parsing; parsing never raises these."""

    kind: ParseErrorKind
    message: str
    token: str | None = None

    def __str__(self) -> str:
        return self.message


class ArgumentParser:
    """Parse token lists against a grammar.

    Every call to ``parse`` starts from a clean slate, so re-running it with
    the same tokens yields the same parsed arguments. Failures accumulate in
    ``errors`` instead of being raised.

    An option value that starts with ``-`` (a negative number, say) is never
    taken from the following token; that produces a missing-value error.
    Inside a short cluster an unknown character is reported and the rest of
    the cluster is still scanned.
    """

    def __init__(self, grammar: ArgumentGrammar) -> None:
        self.grammar = grammar
        self._parsed: dict[str, ParsedArgument] = {}
        self._positionals: list[str] = []
        self._errors: list[ParseError] = []
        self._reset()

    def _reset(self) -> None:
        self._parsed = {
            definition.name: ParsedArgument(
                name=definition.name,
                kind=definition.kind,
                value=definition.default,
                present=False,
            )
            for definition in self.grammar
        }
        self._positionals = []
        self._errors = []

    def parse(self, tokens: Sequence[str]) -> bool:
        """Scan ``tokens`` left to right; return True when no errors were found."""
        self._reset()

        index = 0
        while index < len(tokens):
            token = tokens[index]
            if token.startswith("--"):
                index = self._parse_long(tokens, index)
            elif token.startswith("-") and len(token) > 1:
                index = self._parse_short_cluster(tokens, index)
            else:
                self._positionals.append(token)
            index += 1

        self._bind_positionals()
        self._check_required()
        return not self._errors

    def _parse_long(self, tokens: Sequence[str], index: int) -> int:
        token = tokens[index]
        form, has_inline, inline_value = token.partition("=")
        value: str | None = inline_value if has_inline else None

        definition = self.grammar.by_long(form)
        if definition is None:
            self._error(ParseErrorKind.UNKNOWN_ARGUMENT, f"Unknown argument: {form}", form)
            return index

        if definition.kind == ArgumentKind.FLAG:
            self._mark_flag(definition)
            return index

        if value is None and self._next_is_value(tokens, index):
            index += 1
            value = tokens[index]
        if value is None:
            self._error(ParseErrorKind.MISSING_VALUE, f"Option {form} requires a value", form)
            return index

        self._bind_option(definition, form, value)
        return index

    def _parse_short_cluster(self, tokens: Sequence[str], index: int) -> int:
        cluster = tokens[index]
        position = 1
        while position < len(cluster):
            form = "-" + cluster[position]
            definition = self.grammar.by_short(form)
            if definition is None:
                self._error(ParseErrorKind.UNKNOWN_ARGUMENT, f"Unknown argument: {form}", form)
                position += 1
                continue

            if definition.kind == ArgumentKind.FLAG:
                self._mark_flag(definition)
                position += 1
                continue

            is_last = position == len(cluster) - 1
            value: str | None = None
            if is_last and self._next_is_value(tokens, index):
                index += 1
                value = tokens[index]
            elif not is_last:
                value = cluster[position + 1:]
                position = len(cluster)

            if value is None:
                self._error(ParseErrorKind.MISSING_VALUE, f"Option {form} requires a value", form)
            else:
                self._bind_option(definition, form, value)
            position += 1
        return index

    @staticmethod
    def _next_is_value(tokens: Sequence[str], index: int) -> bool:
        return index + 1 < len(tokens) and not tokens[index + 1].startswith("-")

    def _mark_flag(self, definition: ArgumentDefinition) -> None:
        parsed = self._parsed[definition.name]
        parsed.present = True
        parsed.value = True

    def _bind_option(self, definition: ArgumentDefinition, form: str, value: str) -> None:
        if definition.choices and value not in definition.choices:
            self._error(
                ParseErrorKind.INVALID_VALUE,
                f"Invalid value '{value}' for {form}. Valid values: {', '.join(definition.choices)}",
                form,
            )
            return
        parsed = self._parsed[definition.name]
        parsed.present = True
        parsed.value = value

    def _bind_positionals(self) -> None:
        """Assign positional tokens to positional/command definitions in order."""
        slots = [
            d for d in self.grammar if d.kind in (ArgumentKind.POSITIONAL, ArgumentKind.COMMAND)
        ]
        for definition, token in zip(slots, self._positionals):
            if definition.choices and token not in definition.choices:
                self._error(
                    ParseErrorKind.INVALID_VALUE,
                    f"Invalid value '{token}' for {definition.name}. Valid values: {', '.join(definition.choices)}",
                    token,
                )
                continue
            parsed = self._parsed[definition.name]
            parsed.present = True
            parsed.value = token

    def _check_required(self) -> None:
        for definition in self.grammar:
            if definition.required and not self._parsed[definition.name].present:
                self._error(
                    ParseErrorKind.MISSING_REQUIRED,
                    f"Required argument missing: {definition.name}",
                )

    def _error(self, kind: ParseErrorKind, message: str, token: str | None = None) -> None:
        self._errors.append(ParseError(kind=kind, message=message, token=token))

    @property
    def errors(self) -> list[ParseError]:
        return list(self._errors)

    @property
    def positionals(self) -> list[str]:
        return list(self._positionals)

    @property
    def parsed(self) -> dict[str, ParsedArgument]:
        """Snapshot of every definition's parse outcome, keyed by name."""
        return {
            name: ParsedArgument(name=arg.name, kind=arg.kind, value=arg.value, present=arg.present)
            for name, arg in self._parsed.items()
        }

    def is_present(self, name: str) -> bool:
        parsed = self._parsed.get(name)
        return parsed is not None and parsed.present

    def value(self, name: str) -> str | bool | None:
        parsed = self._parsed.get(name)
        return parsed.value if parsed is not None else None
