"""Value objects passed into and out of the prompt primitives.

- Option: one entry of a menu
- DashboardItem / DashboardSection / DashboardAction: dashboard layout
- DashboardResult: what the user picked on a dashboard
- CompletionResult: what a completion provider found

Callers build these; the engine only reads them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Literal


def help_line_count(help_text: str | None) -> int:
    """Number of rows a help text occupies (0 when there is none)."""
    if not help_text:
        return 0
    return len(help_text.split("\n"))


@dataclass(frozen=True)
class Option:
    """Menu entry.

    Attributes:
        label: Name shown in the menu.
        description: One-line text shown after the label (truncated to fit).
        help: Optional multi-line text shown below the menu while highlighted.
    """

    label: str
    description: str = ""
    help: str | None = None


@dataclass(frozen=True)
class DashboardItem:
    """Selectable dashboard row.

    Attributes:
        key: Stable identity returned when the row is chosen.
        label: Name shown in the label column.
        value: Current value shown in the value column.
        help: Optional multi-line text shown while highlighted.
    """

    key: str
    label: str
    value: str = ""
    help: str | None = None


@dataclass(frozen=True)
class DashboardSection:
    """Ordered group of dashboard items under an optional title."""

    items: tuple[DashboardItem, ...] | list[DashboardItem] = field(default_factory=tuple)
    title: str | None = None


@dataclass(frozen=True)
class DashboardAction:
    """Single-key hotkey bound at the dashboard level.

    Raises:
        ValueError: If key is not exactly one character.
    """

    key: str
    label: str

    def __post_init__(self):
        if len(self.key) != 1:
            raise ValueError(f"Dashboard action key must be one character, got {self.key!r}")

    def matches(self, char: str) -> bool:
        return self.key.lower() == char.lower()


@dataclass(frozen=True)
class DashboardResult:
    """Tagged result of a dashboard prompt.

    Attributes:
        type: "item" when a row was chosen, "action" when a hotkey was pressed.
        key: The chosen item's key or the pressed action's key.
    """

    type: Literal["item", "action"]
    key: str

    @classmethod
    def item(cls, key: str) -> DashboardResult:
        return cls(type="item", key=key)

    @classmethod
    def action(cls, key: str) -> DashboardResult:
        return cls(type="action", key=key)

    @property
    def is_item(self) -> bool:
        return self.type == "item"

    @property
    def is_action(self) -> bool:
        return self.type == "action"


@dataclass(frozen=True)
class CompletionResult:
    """Candidates found by a completion provider.

    Attributes:
        matches: Candidate names in display order.
        completed: Text before the cursor after applying the longest
            common prefix of all matches.
        prefix: Lead-in shared by every candidate (e.g. the directory part
            of a path); ``prefix + match`` is the full replacement text.
    """

    matches: tuple[str, ...] | list[str]
    completed: str
    prefix: str = ""


Completer = Callable[[str], "CompletionResult | None"]
