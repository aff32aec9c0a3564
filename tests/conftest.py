"""Pytest fixtures for rich-prompt tests."""

import contextlib
from io import StringIO

import pytest
from rich.console import Console

from rich_prompt import keys, terminal
from rich_prompt.console import set_console
from rich_prompt.themes import DEFAULT_THEME, set_theme


@pytest.fixture(autouse=True)
def output():
    """Capture everything the prompts print in a plain 80-column console."""
    buffer = StringIO()
    set_console(Console(file=buffer, width=80, color_system=None, force_terminal=False))
    set_theme(DEFAULT_THEME)
    yield buffer
    set_console(None)
    set_theme(DEFAULT_THEME)


@pytest.fixture
def noninteractive(monkeypatch):
    """Force the line-based fallbacks."""
    monkeypatch.setattr(terminal, "is_interactive", lambda: False)


@pytest.fixture
def feed_keys(monkeypatch):
    """Run prompts interactively against a scripted list of keys.

    Usage: ``feed_keys(keys.DOWN, keys.ENTER)``. Running out of keys
    decodes as end of input; Ctrl-C raises like the real reader does.
    """

    def feed(*scripted):
        pending = list(scripted)

        def read_key(fd=None):
            key = pending.pop(0) if pending else keys.EOF
            if key.kind is keys.KeyKind.CTRL_C:
                raise KeyboardInterrupt
            return key

        monkeypatch.setattr(terminal, "is_interactive", lambda: True)
        monkeypatch.setattr(terminal, "raw_mode", lambda fd=None: contextlib.nullcontext())
        monkeypatch.setattr(terminal, "read_key", read_key)
        return pending

    return feed


@pytest.fixture
def answers(monkeypatch):
    """Script the lines returned by input() in fallback mode."""

    def script(*lines):
        pending = list(lines)

        def fake_input(prompt=""):
            if not pending:
                raise EOFError
            return pending.pop(0)

        monkeypatch.setattr("builtins.input", fake_input)
        return pending

    return script
