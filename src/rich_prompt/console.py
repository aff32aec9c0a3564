"""Shared output console.

Prompts never hold on to a ``rich.console.Console``; they write through the
module-level ``console``, which resolves the active console on every
attribute access. ``set_console`` swaps it, e.g. for a ``StringIO``-backed
console in tests.
"""

from __future__ import annotations

from rich.console import Console

_active: Console | None = None


def get_console() -> Console:
    """Return the active console, creating the default one on first use."""
    global _active
    if _active is None:
        _active = Console(highlight=False)
    return _active


def set_console(new_console: Console | None) -> None:
    """Route all prompt output to ``new_console`` (None restores the default)."""
    global _active
    _active = new_console


class _ActiveConsole:
    def __getattr__(self, name: str):
        return getattr(get_console(), name)


console = _ActiveConsole()
