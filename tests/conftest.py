"""Pytest fixtures: printers over the captured process streams."""

import pytest

from kvdbctl import FormatterConfig, SimplePrinter


@pytest.fixture
def printer():
    return SimplePrinter()


@pytest.fixture
def hex_printer():
    return SimplePrinter(FormatterConfig(hex_encode=True))


@pytest.fixture
def value_printer():
    return SimplePrinter(FormatterConfig(value_only=True))


@pytest.fixture
def lines(capsys):
    """Call to get the stdout lines written so far."""
    def read():
        return capsys.readouterr().out.splitlines()
    return read
