"""Filterable multi-select grid.

The caller owns the ``selected`` set: it is changed in place while the
prompt runs, and ``on_change(selected)`` is called after every change, so
the caller sees the final membership when the prompt returns.

Keyboard controls while typing the filter:
    - Printable keys: Extend the filter (case-insensitive substring)
    - a/A with an empty filter: Select all items, or none if all are selected
    - Arrows/Enter/Tab: Move into the grid (if anything matches)
    - Backspace or Esc with an empty filter: Done

Keyboard controls in the grid:
    - Arrows: Move (wrapping around rows and columns)
    - Space/Enter: Toggle the highlighted item
    - a/A: Select all shown items, or none if all are selected
    - Esc/Tab: Back to the filter
    - Anything else: Back to the filter, then handled there
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Iterable, Sequence

from rich.markup import escape

from . import region, terminal
from .console import console
from .keys import Key, KeyKind
from .menu import print_question
from .region import Region
from .themes import get_theme

ARROW_KEYS = (KeyKind.UP, KeyKind.DOWN, KeyKind.LEFT, KeyKind.RIGHT)
TYPING_HINT = "type to filter · ↑↓/Enter pick · a all · Esc done"
SELECTING_HINT = "Space toggle · a all · Esc filter"

OnChange = Callable[[set[str]], None]


class FilterMode(Enum):
    TYPING = "typing"
    SELECTING = "selecting"


class MultiSelect:
    """State and rendering of one multi-select session."""

    def __init__(
        self,
        items: Sequence[str],
        selected: set[str],
        on_change: OnChange | None = None,
        width: int = 80,
    ):
        self.items = list(items)
        self.selected = selected
        self.on_change = on_change
        self.width = width
        self.filter = ""
        self.filter_cursor = 0
        self.mode = FilterMode.TYPING
        self.select_index = 0

    @property
    def filtered(self) -> list[str]:
        needle = self.filter.lower()
        return [item for item in self.items if needle in item.lower()]

    def columns(self, shown: Sequence[str] | None = None) -> int:
        shown = self.filtered if shown is None else shown
        # "[x] " before every label
        longest = max((len(item) for item in shown), default=0) + 4
        return region.grid_columns(self.width, longest)

    # -- membership ---------------------------------------------------------

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self.selected)

    def toggle(self, item: str) -> None:
        if item in self.selected:
            self.selected.discard(item)
        else:
            self.selected.add(item)
        self._notify()

    def toggle_all(self, group: Iterable[str]) -> None:
        """Select every item of ``group``, or none if all already are."""
        group = list(group)
        if all(item in self.selected for item in group):
            self.selected.difference_update(group)
        else:
            self.selected.update(group)
        self._notify()

    # -- transitions --------------------------------------------------------

    def handle_key(self, key: Key) -> bool:
        """Apply one key. Returns True when the prompt should close."""
        if self.mode is FilterMode.SELECTING and self._selecting_key(key):
            return False
        return self._typing_key(key)

    def _set_filter(self, text: str, cursor: int) -> None:
        self.filter = text
        self.filter_cursor = cursor
        self.select_index = 0

    def _selecting_key(self, key: Key) -> bool:
        shown = self.filtered
        if not shown:
            self.mode = FilterMode.TYPING
            return False

        if key.kind in ARROW_KEYS:
            self.select_index = region.grid_move(
                min(self.select_index, len(shown) - 1), len(shown), self.columns(shown), key.kind
            )
        elif key.kind is KeyKind.ENTER or key.is_char(" "):
            self.toggle(shown[self.select_index])
        elif key.is_char("a", "A"):
            self.toggle_all(shown)
        elif key.kind in (KeyKind.ESCAPE, KeyKind.TAB, KeyKind.SHIFT_TAB):
            self.mode = FilterMode.TYPING
        else:
            self.mode = FilterMode.TYPING
            return False
        return True

    def _typing_key(self, key: Key) -> bool:
        kind = key.kind
        text, cursor = self.filter, self.filter_cursor

        if kind is KeyKind.CHAR:
            if key.is_char("a", "A") and not text:
                self.toggle_all(self.items)
            else:
                self._set_filter(text[:cursor] + key.char + text[cursor:], cursor + 1)
        elif kind is KeyKind.BACKSPACE:
            if not text:
                return True
            if cursor > 0:
                self._set_filter(text[: cursor - 1] + text[cursor:], cursor - 1)
        elif kind is KeyKind.DELETE:
            if cursor < len(text):
                self._set_filter(text[:cursor] + text[cursor + 1 :], cursor)
        elif kind is KeyKind.CTRL_U:
            self._set_filter(text[cursor:], 0)
        elif kind is KeyKind.HOME:
            self.filter_cursor = 0
        elif kind is KeyKind.END:
            self.filter_cursor = len(text)
        elif kind is KeyKind.ESCAPE:
            if not text:
                return True
            self._set_filter("", 0)
        elif kind is KeyKind.EOF:
            return True
        elif kind in ARROW_KEYS or kind in (KeyKind.ENTER, KeyKind.TAB):
            if self.filtered:
                self.mode = FilterMode.SELECTING
                self.select_index = 0
        return False

    # -- rendering ----------------------------------------------------------

    def render(self) -> list[str]:
        theme = get_theme()
        dim = theme.dim
        shown = self.filtered

        if self.mode is FilterMode.TYPING:
            typed = f"{escape(self.filter[: self.filter_cursor])}█{escape(self.filter[self.filter_cursor :])}"
        else:
            typed = escape(self.filter)
        lines = [f"  [{dim}]Filter:[/{dim}] {typed}"]

        if not shown:
            lines.append(f"  [{dim}](no matches)[/{dim}]")
        else:
            cell_width = max(len(item) for item in shown) + 4 + 2
            numbered = list(enumerate(shown))
            for row in region.chunk(numbered, self.columns(shown)):
                cells = []
                for index, item in row:
                    checked = item in self.selected
                    mark = theme.checked_icon if checked else theme.unchecked_icon
                    text = escape(f"[{mark}] {item}")
                    pad = " " * (cell_width - len(item) - 4)
                    if self.mode is FilterMode.SELECTING and index == self.select_index:
                        text = f"[reverse {theme.accent}]{text}[/reverse {theme.accent}]"
                    elif checked:
                        text = f"[{theme.checked}]{text}[/{theme.checked}]"
                    cells.append(text + pad)
                lines.append("  " + "".join(cells).rstrip())

        lines.append("")
        hint = SELECTING_HINT if self.mode is FilterMode.SELECTING else TYPING_HINT
        lines.append(f"  [{dim}]{hint}[/{dim}]")
        return lines


def ask_multi_select(
    question: str,
    items: Sequence[str],
    selected: set[str],
    on_change: OnChange | None = None,
) -> None:
    """Let the user toggle items of ``selected`` through a filterable grid.

    Args:
        question: Heading shown above the grid.
        items: All selectable items, in display order.
        selected: Caller-owned set, changed in place.
        on_change: Called with ``selected`` after every change.

    Does nothing when ``items`` is empty or stdin is not a terminal.
    """
    if not items or not terminal.is_interactive():
        return

    picker = MultiSelect(items, selected, on_change, width=console.width)
    print_question(question)
    screen = Region()
    screen.paint(picker.render())

    with terminal.raw_mode():
        while True:
            picker.width = console.width
            if picker.handle_key(terminal.read_key()):
                return
            screen.repaint(picker.render())
