"""Keyboard-driven terminal prompts drawn in place with Rich.

Example:
    from rich_prompt import EXIT, Option, ask, ask_path

    choice = ask("What next?", [Option("Configure"), Option("Run")], exit=True)
    if choice == EXIT:
        raise SystemExit
    target = ask_path("Output directory", ".")
"""

__version__ = "0.1.0"

from .completion import complete_path
from .components import (
    CompletionResult,
    DashboardAction,
    DashboardItem,
    DashboardResult,
    DashboardSection,
    Option,
)
from .console import set_console
from .dashboard import ask_dashboard
from .editor import read_line
from .keys import Key, KeyKind, decode
from .menu import EXIT, ask
from .multiselect import ask_multi_select
from .pause import wait_for_continue
from .prompts import ask_confirm, ask_path, ask_value
from .themes import DEFAULT_THEME, Theme, ThemeError, get_theme, load_theme_file, set_theme

__all__ = [
    # Prompts
    "EXIT",
    "ask",
    "ask_dashboard",
    "ask_multi_select",
    "read_line",
    "ask_value",
    "ask_path",
    "ask_confirm",
    "wait_for_continue",
    # Completion
    "complete_path",
    # Components
    "Option",
    "DashboardItem",
    "DashboardSection",
    "DashboardAction",
    "DashboardResult",
    "CompletionResult",
    # Keys
    "Key",
    "KeyKind",
    "decode",
    # Theming
    "Theme",
    "ThemeError",
    "DEFAULT_THEME",
    "get_theme",
    "set_theme",
    "load_theme_file",
    # Testing
    "set_console",
]
