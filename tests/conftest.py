"""Pytest configuration and fixtures for shellkit tests."""

import logging

import pytest

from shellkit.commands import CommandRegistry
from shellkit.grammar import standard_grammar
from shellkit.logging import StructuredTextFormatter
from shellkit.parser import ArgumentParser
from shellkit.shell import Shell


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo global logging changes made by setup_logging."""
    root = logging.getLogger()
    level = root.level
    yield
    logging.disable(logging.NOTSET)
    for handler in list(root.handlers):
        if isinstance(handler.formatter, StructuredTextFormatter):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def standard_parser():
    """Parser over the standard executable grammar."""
    return ArgumentParser(standard_grammar())


@pytest.fixture
def registry():
    """Empty command registry."""
    return CommandRegistry()


@pytest.fixture
def shell():
    """Shell with built-ins only and no terminal attached."""
    return Shell()


@pytest.fixture
def running_shell(shell):
    """Shell marked as running, as it is inside its loop."""
    shell.session.running = True
    return shell
