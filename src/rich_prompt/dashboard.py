"""Multi-section dashboard prompt.

A dashboard shows grouped items with their current values, a row of
single-key actions, and optionally help for the highlighted item and a
status block (e.g. the result of the last command). Callers run it in a
loop, act on the returned choice, and call it again with fresh values:

    last = None
    while True:
        choice = ask_dashboard("Settings", sections, actions, selected=last)
        if choice is None or (choice.is_action and choice.key == "q"):
            break
        if choice.is_item:
            last = choice.key
            ...

Keyboard controls:
    - Action hotkeys (case-insensitive): Return that action
    - Up/Down: Move the highlight (stops at the ends)
    - 1-9: Pick that item immediately
    - Enter: Pick the highlighted item
    - Esc/Backspace/Delete: Go back (returns None)
"""

from __future__ import annotations

from typing import Sequence

from rich.markup import escape

from . import region, terminal
from .components import DashboardAction, DashboardItem, DashboardResult, DashboardSection
from .console import console
from .keys import Key, KeyKind
from .menu import parse_choice, print_question
from .region import Region
from .themes import get_theme

DASHBOARD_HINT = "↑↓ navigate · Enter select · Esc back"
RULE_WIDTH = 40


class Dashboard:
    """State and rendering of one dashboard session.

    Raises:
        ValueError: If there are no items, or two items share a key.
    """

    def __init__(
        self,
        sections: Sequence[DashboardSection],
        actions: Sequence[DashboardAction] = (),
        *,
        selected: str | None = None,
        status: str | None = None,
    ):
        self.sections = list(sections)
        self.items: list[DashboardItem] = [item for s in self.sections for item in s.items]
        if not self.items:
            raise ValueError("Dashboard must have at least one item")

        keys = [item.key for item in self.items]
        if len(set(keys)) != len(keys):
            raise ValueError("Dashboard item keys must be unique")

        self.actions = list(actions)
        self.status = status
        self.cursor = keys.index(selected) if selected in keys else 0
        self.result: DashboardResult | None = None
        self.help_lines = region.max_help_lines(item.help for item in self.items)

    def height(self) -> int:
        return region.dashboard_height(
            self.sections,
            bool(self.actions),
            (item.help for item in self.items),
            self.status,
        )

    def trailing_height(self) -> int:
        """Rows of help and status below the hint row."""
        return region.help_area_height(item.help for item in self.items) + region.status_area_height(
            self.status
        )

    def handle_key(self, key: Key) -> bool:
        """Apply one key. Returns True when done (see ``result``)."""
        # Actions win over everything else, including digit shortcuts
        if key.kind is KeyKind.CHAR:
            for action in self.actions:
                if action.matches(key.char):
                    self.result = DashboardResult.action(action.key)
                    return True

        if key.kind is KeyKind.UP:
            if self.cursor > 0:
                self.cursor -= 1
        elif key.kind is KeyKind.DOWN:
            if self.cursor < len(self.items) - 1:
                self.cursor += 1
        elif key.kind is KeyKind.ENTER:
            self.result = DashboardResult.item(self.items[self.cursor].key)
            return True
        elif key.kind in (KeyKind.ESCAPE, KeyKind.BACKSPACE, KeyKind.DELETE, KeyKind.EOF):
            self.result = None
            return True
        elif key.is_digit:
            n = int(key.char)
            if 1 <= n <= len(self.items):
                self.cursor = n - 1
                self.result = DashboardResult.item(self.items[n - 1].key)
                return True
        return False

    def render(self, width: int) -> list[str]:
        theme = get_theme()
        accent, dim = theme.accent, theme.dim
        max_label = max(len(item.label) for item in self.items)
        num_width = len(f"{len(self.items)}.")
        value_avail = width - 5 - num_width - max_label - 2

        lines: list[str] = []
        index = 0
        for section_index, section in enumerate(self.sections):
            if section_index > 0:
                lines.append("")
            if section.title:
                lines.append(f"  [{theme.title}]{escape(section.title)}[/{theme.title}]")
                rule = theme.divider * max(1, min(RULE_WIDTH, width - 4))
                lines.append(f"  [{dim}]{rule}[/{dim}]")
            for item in section.items:
                num = f"{index + 1}.".rjust(num_width)
                label = escape(item.label.ljust(max_label))
                value = escape(region.truncate(item.value, value_avail, theme.ellipsis))
                if index == self.cursor:
                    lines.append(
                        f"  [{accent}]{escape(theme.cursor_icon)}[/{accent}] [{accent}]{num}[/{accent}] "
                        f"[{theme.label}]{label}[/{theme.label}]  {value}"
                    )
                else:
                    lines.append(f"    [{dim}]{num}[/{dim}] {label}  [{dim}]{value}[/{dim}]")
                index += 1

        lines.append("")
        if self.actions:
            parts = [f"[{accent}]{escape(a.key)}[/{accent}] {escape(a.label)}" for a in self.actions]
            lines.append("  " + " · ".join(parts))
        lines.append(f"  [{dim}]{DASHBOARD_HINT}[/{dim}]")

        if self.help_lines > 0:
            help_text = self.items[self.cursor].help
            help_rows = help_text.split("\n") if help_text else []
            lines.append("")
            for i in range(self.help_lines):
                if i < len(help_rows):
                    row = escape(region.truncate(help_rows[i], width - 2, theme.ellipsis))
                    lines.append(f"  [{dim}]{row}[/{dim}]")
                else:
                    lines.append("")

        if self.status:
            lines.append("")
            # Status is caller-formatted Rich markup
            for row in self.status.split("\n"):
                lines.append(f"  {row}" if row else "")
        return lines


def _ask_dashboard_fallback(title: str, dashboard: Dashboard) -> DashboardResult | None:
    """Numbered items + action keys read from a line, for non-terminal stdin."""
    theme = get_theme()
    print_question(title)

    max_label = max(len(item.label) for item in dashboard.items)
    index = 0
    for section in dashboard.sections:
        if section.title:
            console.print(f"  [{theme.title}]{escape(section.title)}[/{theme.title}]")
        for item in section.items:
            label = escape(item.label.ljust(max_label))
            console.print(f"  [bold]{index + 1}.[/bold] {label}  [{theme.dim}]{escape(item.value)}[/{theme.dim}]")
            index += 1
    console.print()
    for action in dashboard.actions:
        console.print(f"  [bold]{escape(action.key)})[/bold] {escape(action.label)}")
    if dashboard.status:
        console.print()
        console.print(dashboard.status)
    console.print()

    count = len(dashboard.items)
    while True:
        try:
            answer = console.input(f"[{theme.dim}]>[/{theme.dim}] ").strip()
        except EOFError:
            return None

        if len(answer) == 1:
            for action in dashboard.actions:
                if action.matches(answer):
                    return DashboardResult.action(action.key)
        if answer.lower() in ("b", "back"):
            return None
        n = parse_choice(answer)
        if n is not None and 1 <= n <= count:
            return DashboardResult.item(dashboard.items[n - 1].key)
        console.print(
            f"[{theme.error}]  Please enter a number between 1 and {count} or an action key[/{theme.error}]"
        )


def ask_dashboard(
    title: str,
    sections: Sequence[DashboardSection],
    actions: Sequence[DashboardAction] = (),
    *,
    selected: str | None = None,
    status: str | None = None,
) -> DashboardResult | None:
    """Show a dashboard and block until an item or action is chosen.

    Args:
        title: Heading shown above the sections.
        sections: Item groups, displayed and numbered in order.
        actions: Hotkeys checked before any other key handling.
        selected: Key of the item to highlight first (e.g. the one chosen
            on the previous call); unknown keys highlight the first item.
        status: Optional multi-line Rich markup shown below the actions.

    Returns:
        DashboardResult for the chosen item or action, or None to go back.

    Raises:
        ValueError: If there are no items or item keys repeat.
    """
    dashboard = Dashboard(sections, actions, selected=selected, status=status)

    if not terminal.is_interactive():
        return _ask_dashboard_fallback(title, dashboard)

    print_question(title)
    screen = Region()
    screen.paint(dashboard.render(console.width))

    with terminal.raw_mode():
        try:
            while True:
                before = dashboard.cursor
                done = dashboard.handle_key(terminal.read_key())
                if dashboard.cursor != before:
                    screen.repaint(dashboard.render(console.width))
                if done:
                    return dashboard.result
        finally:
            trailing = dashboard.trailing_height()
            if trailing > 0:
                terminal.write(region.cursor_up(trailing) + region.CLEAR_DOWN)
