"""Value, path and yes/no prompts built on the line editor."""

from __future__ import annotations

import re

from rich.markup import escape

from .completion import complete_path
from .console import console
from .editor import read_line
from .themes import get_theme

_PLACEHOLDER_RE = re.compile(r"^\{.+\}$")
MASK = "****"


def is_placeholder(value: str) -> bool:
    """Check if value is an environment placeholder such as "{PGPASSWORD}"."""
    return bool(_PLACEHOLDER_RE.match(value))


def display_value(value: str, mask: bool = False) -> str:
    """Value as shown in a prompt; secrets are masked unless placeholders."""
    if mask and value and not is_placeholder(value):
        return MASK
    return value


def ask_value(label: str, current: str, *, mask: bool = False) -> str:
    """Ask for a new value, keeping ``current`` on empty input or cancel.

    Args:
        label: Field name shown before the current value.
        current: Value kept when nothing is entered.
        mask: Show the current value as "****" (placeholders stay visible).

    Returns:
        The stripped new value, or ``current``.
    """
    theme = get_theme()
    shown = escape(display_value(current, mask))
    prompt = f"  {escape(label.ljust(12))} [{theme.dim}]\\[{shown}]>[/{theme.dim}] "
    answer = read_line(prompt)
    if answer is None:
        return current
    return answer.strip() or current


def ask_path(question: str, default: str) -> str:
    """Ask for a path with Tab completion.

    Returns:
        The entered path (or ``default`` on empty input or cancel) without
        trailing slashes; "." if nothing but slashes remains.
    """
    theme = get_theme()
    console.print()
    console.print(f"  [{theme.title}]{escape(question)}[/{theme.title}]")
    prompt = f"  [{theme.dim}]\\[{escape(default)}]>[/{theme.dim}] "
    answer = read_line(prompt, complete_path)
    value = (answer or "").strip() or default
    return value.rstrip("/") or "."


def ask_confirm(question: str, default_yes: bool = False) -> bool:
    """Ask a yes/no question on one line.

    Returns:
        True for "y"/"yes", False for anything else, ``default_yes`` for
        empty input or end of input.
    """
    theme = get_theme()
    hint = "Y/n" if default_yes else "y/N"
    try:
        answer = console.input(f"  [{theme.title}]{escape(question)}[/{theme.title}] [{theme.dim}]\\[{hint}][/{theme.dim}] ")
    except EOFError:
        return default_yes
    answer = answer.strip().lower()
    if not answer:
        return default_yes
    return answer in ("y", "yes")
