"""Configurable themes for rich_prompt.

The Theme dataclass holds the colors and icons every primitive draws with.
The active theme can be picked by name, loaded from a YAML file, or chosen
through environment variables:

    RICH_PROMPT_THEME        name of a built-in theme ("default", "mono")
    RICH_PROMPT_THEME_FILE   path to a YAML mapping of Theme fields
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

THEME_ENV = "RICH_PROMPT_THEME"
THEME_FILE_ENV = "RICH_PROMPT_THEME_FILE"


class ThemeError(ValueError):
    """Raised when a theme name or theme file cannot be used."""


@dataclass(frozen=True)
class Theme:
    """Visual theme for prompt components.

    All colors use Rich style syntax (e.g. "cyan", "bold red", "dim").

    Attributes:
        name: Theme identifier.
        accent: Cursor marker, selected numbers and highlighted cells.
        label: Style of the highlighted row's label.
        dim: Secondary text (descriptions, hints, help).
        error: Validation messages in fallback mode.
        checked: Checked multi-select cells.
        title: Prompt questions and dashboard titles.

        cursor_icon: Marker shown before the highlighted row.
        checked_icon: Mark inside a checked box.
        unchecked_icon: Mark inside an empty box.
        ellipsis: Appended to truncated text.
        divider: Character repeated for section rules.
    """

    name: str = "default"

    # Colors
    accent: str = "cyan"
    label: str = "bold"
    dim: str = "dim"
    error: str = "red"
    checked: str = "green"
    title: str = "bold"

    # Icons
    cursor_icon: str = ">"
    checked_icon: str = "x"
    unchecked_icon: str = " "
    ellipsis: str = "…"
    divider: str = "─"


DEFAULT_THEME = Theme()

_THEMES: dict[str, Theme] = {
    "default": DEFAULT_THEME,
    "mono": Theme(
        name="mono",
        accent="bold",
        label="bold",
        dim="none",
        error="bold",
        checked="bold",
        title="bold",
        divider="-",
        ellipsis="~",
    ),
}

_current_theme: Theme = DEFAULT_THEME


def get_theme() -> Theme:
    """Return current active theme."""
    return _current_theme


def set_theme(theme: str | Theme) -> Theme:
    """Activate a theme by name or instance.

    Raises:
        ThemeError: If the name is not a built-in theme.
    """
    global _current_theme
    if isinstance(theme, Theme):
        _current_theme = theme
        return _current_theme

    key = theme.strip().lower()
    if key not in _THEMES:
        raise ThemeError(f"Unknown theme: {theme!r} (available: {', '.join(sorted(_THEMES))})")
    _current_theme = _THEMES[key]
    return _current_theme


def load_theme_file(path: str | Path) -> Theme:
    """Load a theme from a YAML file.

    The file holds a mapping of Theme fields; missing fields keep their
    default values and unknown fields are ignored with a warning.

    Raises:
        ThemeError: If the file cannot be read or is not a mapping.
    """
    path = Path(path).expanduser()
    try:
        data = yaml.safe_load(path.read_text())
    except OSError as e:
        raise ThemeError(f"Cannot read theme file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ThemeError(f"Invalid YAML in theme file {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ThemeError(f"Theme file {path} must contain a mapping")

    known = {f.name for f in fields(Theme)}
    values = {}
    for key, value in data.items():
        if key not in known:
            logger.warning("Ignoring unknown theme key %r in %s", key, path)
            continue
        values[key] = str(value)

    values.setdefault("name", path.stem)
    return replace(DEFAULT_THEME, **values)


def configure_from_env() -> Theme:
    """Apply theme settings from the environment and return the active theme.

    A theme file takes precedence over a theme name.
    """
    theme_file = (os.environ.get(THEME_FILE_ENV) or "").strip()
    if theme_file:
        return set_theme(load_theme_file(theme_file))

    theme_name = (os.environ.get(THEME_ENV) or "").strip()
    if theme_name:
        return set_theme(theme_name)

    return get_theme()
