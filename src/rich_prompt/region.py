"""Screen region tracking and redraw math.

A prompt draws a block of rows below the cursor and redraws it in place on
every state change. That only works if the number of rows cleared before a
redraw equals the number of rows the previous render wrote, so every layout
has exactly one height function here and both sizing and clearing go
through it.

Control sequences (reproduced verbatim):
    ESC [ n A   cursor up n rows
    ESC [ n C   cursor right n columns
    ESC [ 2 K   clear the whole line
    ESC [ J     clear from the cursor to the end of the screen
"""

from __future__ import annotations

import math
from typing import Iterable, Sequence

from . import terminal
from .components import DashboardSection, help_line_count
from .console import console
from .keys import KeyKind

CLEAR_LINE = "\x1b[2K"
CLEAR_DOWN = "\x1b[J"


def cursor_up(rows: int) -> str:
    return f"\x1b[{rows}A" if rows > 0 else ""


def cursor_right(columns: int) -> str:
    return f"\x1b[{columns}C" if columns > 0 else ""


def clear_lines(count: int) -> None:
    """Blank the ``count`` rows above the cursor and rewind to the first one."""
    if count <= 0:
        return
    terminal.write(cursor_up(count) + f"\r{CLEAR_LINE}\n" * count + cursor_up(count))


def truncate(text: str, max_len: int, ellipsis: str = "…") -> str:
    """Shorten ``text`` to at most ``max_len`` columns, ending in ``ellipsis``."""
    if max_len <= 0:
        return ""
    if len(text) <= max_len:
        return text
    return text[: max_len - 1] + ellipsis


# ---------------------------------------------------------------------------
# Height formulas
# ---------------------------------------------------------------------------


def max_help_lines(help_texts: Iterable[str | None]) -> int:
    return max((help_line_count(h) for h in help_texts), default=0)


def help_area_height(help_texts: Iterable[str | None]) -> int:
    """Rows reserved for help: a blank separator plus the tallest help text."""
    tallest = max_help_lines(help_texts)
    return 1 + tallest if tallest > 0 else 0


def status_area_height(status: str | None) -> int:
    return 1 + help_line_count(status) if status else 0


def menu_height(option_count: int, help_texts: Iterable[str | None]) -> int:
    """Option rows, blank, hint row and the help area."""
    return option_count + 2 + help_area_height(help_texts)


def section_header_height(section: DashboardSection, index: int) -> int:
    rows = 1 if index > 0 else 0
    if section.title:
        rows += 2
    return rows


def dashboard_height(
    sections: Sequence[DashboardSection],
    has_actions: bool,
    help_texts: Iterable[str | None],
    status: str | None,
) -> int:
    """Section headers and items, blank, action row, hint row, help, status."""
    rows = 0
    for index, section in enumerate(sections):
        rows += section_header_height(section, index) + len(section.items)
    rows += 1 + (1 if has_actions else 0) + 1
    return rows + help_area_height(help_texts) + status_area_height(status)


# ---------------------------------------------------------------------------
# Grid layout
# ---------------------------------------------------------------------------


def grid_columns(width: int, longest: int) -> int:
    """Columns that fit ``width`` when each cell is ``longest + 2`` wide."""
    return max(1, (width - 4) // (longest + 2))


def grid_rows(count: int, columns: int) -> int:
    return math.ceil(count / columns) if count > 0 else 0


def chunk(items: Sequence, columns: int) -> list[list]:
    """Split items into rows, left to right then top to bottom."""
    return [list(items[i : i + columns]) for i in range(0, len(items), columns)]


def grid_move(index: int, count: int, columns: int, kind: KeyKind) -> int:
    """Move a grid selection.

    Left/Right step through the whole list with wraparound; Up/Down move a
    row and wrap within the same column. Other kinds leave the index as is.
    """
    if count <= 0:
        return 0
    if kind is KeyKind.RIGHT:
        return (index + 1) % count
    if kind is KeyKind.LEFT:
        return (index - 1) % count

    column = index % columns
    if kind is KeyKind.DOWN:
        below = index + columns
        return below if below < count else column
    if kind is KeyKind.UP:
        above = index - columns
        if above >= 0:
            return above
        return column + columns * ((count - 1 - column) // columns)
    return index


# ---------------------------------------------------------------------------
# Region
# ---------------------------------------------------------------------------


class Region:
    """Block of rows owned by a running prompt.

    Remembers how many rows it last painted so ``repaint`` can clear exactly
    those before drawing again.
    """

    def __init__(self):
        self.height = 0

    def paint(self, lines: Sequence[str]) -> None:
        """Write one row per line (Rich markup); empty lines are cleared rows."""
        for line in lines:
            if line:
                console.print(line, highlight=False, no_wrap=True, overflow="crop", crop=True)
            else:
                terminal.write(f"{CLEAR_LINE}\n")
        console.file.flush()
        self.height = len(lines)

    def repaint(self, lines: Sequence[str]) -> None:
        clear_lines(self.height)
        self.paint(lines)

    def clear(self) -> None:
        """Blank the painted rows, leaving the cursor at their top."""
        clear_lines(self.height)
        self.height = 0
