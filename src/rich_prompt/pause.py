"""Pause helper for menu loops that show a result before redrawing."""

from __future__ import annotations

import readchar

from . import terminal
from .console import console

CONTINUE_KEYS = ("\r", "\n", readchar.key.ENTER, "q", "Q")


def wait_for_continue(prompt: str = "[dim]Press Enter to continue...[/dim]") -> None:
    """Wait for Enter or q before returning.

    Ctrl+C propagates as KeyboardInterrupt, like in every prompt.
    Returns immediately when stdin is not a terminal.
    """
    console.print(prompt)
    if not terminal.is_interactive():
        return
    while True:
        try:
            key = readchar.readkey()
        except EOFError:
            return
        if key == readchar.key.CTRL_C:
            raise KeyboardInterrupt
        if key in CONTINUE_KEYS:
            return
