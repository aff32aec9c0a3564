"""Single-line editor with two-stage tab completion.

Keyboard controls:
    - Left/Right, Home/End (Ctrl-A/Ctrl-E): Move the cursor
    - Backspace/Delete: Delete before/at the cursor
    - Ctrl-U: Delete everything before the cursor
    - Enter: Confirm; Esc: Cancel; Ctrl-D on an empty line: Cancel
    - Tab: Complete the common prefix; Tab again: pick from the candidates

Completion runs through three modes:

    TYPING      plain editing, no candidates shown
    COMPLETING  candidates shown below the input, nothing highlighted
    SELECTING   a candidate is highlighted and copied into the buffer;
                Tab/Shift-Tab and the arrows move the highlight

Keys a mode does not use take the editor back to TYPING (hiding the
candidates) and are then handled as ordinary editing keys.
"""

from __future__ import annotations

from enum import Enum

from rich.markup import escape
from rich.text import Text

from . import region, terminal
from .components import Completer
from .console import console
from .keys import Key, KeyKind
from .region import Region
from .themes import get_theme

GRID_KEYS = (KeyKind.LEFT, KeyKind.RIGHT, KeyKind.UP, KeyKind.DOWN)


class EditorMode(Enum):
    TYPING = "typing"
    COMPLETING = "completing"
    SELECTING = "selecting"


class LineEditor:
    """Editing state for one ``read_line`` call.

    Args:
        prompt: Rich markup shown before the buffer.
        completer: Optional completion provider.
        initial: Text the buffer starts with (cursor at its end).
        width: Terminal width used to lay out the candidate grid.
    """

    def __init__(
        self,
        prompt: str = "",
        completer: Completer | None = None,
        initial: str = "",
        width: int = 80,
    ):
        self.prompt = prompt
        self.prompt_width = len(Text.from_markup(prompt).plain)
        self.completer = completer
        self.width = width
        self.buffer = initial
        self.cursor = len(initial)
        self.mode = EditorMode.TYPING
        self.matches: list[str] = []
        self.prefix = ""
        self.select_index = 0
        self.saved_buffer = initial
        self.saved_cursor = self.cursor
        self.result: str | None = None

    # -- grid ---------------------------------------------------------------

    @property
    def grid_visible(self) -> bool:
        return self.mode is not EditorMode.TYPING and len(self.matches) > 1

    def columns(self) -> int:
        longest = max((len(m) for m in self.matches), default=0)
        return region.grid_columns(self.width, longest)

    def height(self) -> int:
        if not self.grid_visible:
            return 1
        return 1 + region.grid_rows(len(self.matches), self.columns())

    def _close_grid(self) -> None:
        self.mode = EditorMode.TYPING
        self.matches = []
        self.prefix = ""
        self.select_index = 0

    def _show_selection(self) -> None:
        self.buffer = self.prefix + self.matches[self.select_index]
        self.cursor = len(self.buffer)

    # -- transitions --------------------------------------------------------

    def handle_key(self, key: Key) -> bool:
        """Apply one key. Returns True when editing is over (see ``result``)."""
        if self.mode is EditorMode.SELECTING and self._selecting_key(key):
            return False
        if self.mode is EditorMode.COMPLETING and self._completing_key(key):
            return False
        return self._typing_key(key)

    def _selecting_key(self, key: Key) -> bool:
        count = len(self.matches)
        if key.kind is KeyKind.TAB:
            self.select_index = (self.select_index + 1) % count
        elif key.kind is KeyKind.SHIFT_TAB:
            self.select_index = (self.select_index - 1) % count
        elif key.kind in GRID_KEYS:
            self.select_index = region.grid_move(self.select_index, count, self.columns(), key.kind)
        elif key.kind is KeyKind.ESCAPE:
            self.buffer = self.saved_buffer
            self.cursor = self.saved_cursor
            self.mode = EditorMode.COMPLETING
            return True
        elif key.kind is KeyKind.ENTER:
            self._close_grid()
            return True
        else:
            self._close_grid()
            return False
        self._show_selection()
        return True

    def _completing_key(self, key: Key) -> bool:
        if key.kind in (KeyKind.TAB, KeyKind.SHIFT_TAB):
            self.mode = EditorMode.SELECTING
            self.select_index = 0 if key.kind is KeyKind.TAB else len(self.matches) - 1
            self._show_selection()
            return True
        self._close_grid()
        return key.kind is KeyKind.ESCAPE

    def _typing_key(self, key: Key) -> bool:
        kind = key.kind
        if kind is KeyKind.CHAR:
            self.buffer = self.buffer[: self.cursor] + key.char + self.buffer[self.cursor :]
            self.cursor += 1
        elif kind is KeyKind.LEFT:
            self.cursor = max(0, self.cursor - 1)
        elif kind is KeyKind.RIGHT:
            self.cursor = min(len(self.buffer), self.cursor + 1)
        elif kind is KeyKind.HOME:
            self.cursor = 0
        elif kind is KeyKind.END:
            self.cursor = len(self.buffer)
        elif kind is KeyKind.BACKSPACE:
            if self.cursor > 0:
                self.buffer = self.buffer[: self.cursor - 1] + self.buffer[self.cursor :]
                self.cursor -= 1
        elif kind is KeyKind.DELETE:
            self._delete_forward()
        elif kind is KeyKind.CTRL_U:
            self.buffer = self.buffer[self.cursor :]
            self.cursor = 0
        elif kind is KeyKind.CTRL_D:
            if not self.buffer:
                self.result = None
                return True
            self._delete_forward()
        elif kind is KeyKind.TAB:
            self._complete()
        elif kind is KeyKind.ENTER:
            self.result = self.buffer
            return True
        elif kind in (KeyKind.ESCAPE, KeyKind.EOF):
            self.result = None
            return True
        return False

    def _delete_forward(self) -> None:
        if self.cursor < len(self.buffer):
            self.buffer = self.buffer[: self.cursor] + self.buffer[self.cursor + 1 :]

    def _complete(self) -> None:
        """First Tab: apply the common prefix, show candidates if several."""
        if self.completer is None:
            return
        found = self.completer(self.buffer[: self.cursor])
        if found is None or not found.matches:
            return

        tail = self.buffer[self.cursor :]
        self.buffer = found.completed + tail
        self.cursor = len(found.completed)
        if len(found.matches) == 1:
            return

        self.matches = list(found.matches)
        self.prefix = found.prefix
        self.select_index = 0
        self.mode = EditorMode.COMPLETING
        self.saved_buffer = self.buffer
        self.saved_cursor = self.cursor

    # -- rendering ----------------------------------------------------------

    @property
    def cursor_column(self) -> int:
        return self.prompt_width + self.cursor

    def render(self) -> list[str]:
        lines = [f"{self.prompt}{escape(self.buffer)}"]
        if not self.grid_visible:
            return lines

        theme = get_theme()
        longest = max(len(m) for m in self.matches)
        numbered = list(enumerate(self.matches))
        for row in region.chunk(numbered, self.columns()):
            cells = []
            for index, name in row:
                pad = " " * (longest + 2 - len(name))
                if self.mode is EditorMode.SELECTING and index == self.select_index:
                    cells.append(f"[reverse {theme.accent}]{escape(name)}[/reverse {theme.accent}]{pad}")
                else:
                    cells.append(f"{escape(name)}{pad}")
            lines.append("  " + "".join(cells).rstrip())
        return lines


def _draw(screen: Region, editor: LineEditor) -> None:
    """Redraw from the input row down and put the cursor back on it."""
    terminal.write("\r" + region.CLEAR_DOWN)
    screen.paint(editor.render())
    terminal.write(region.cursor_up(screen.height) + "\r" + region.cursor_right(editor.cursor_column))


def read_line(prompt: str = "", completer: Completer | None = None, initial: str = "") -> str | None:
    """Read one line of input with editing and optional tab completion.

    Args:
        prompt: Rich markup shown before the input.
        completer: Called with the text before the cursor on Tab.
        initial: Text to start editing from.

    Returns:
        The entered text, or None if the user cancelled (Esc, Ctrl-D on an
        empty line, end of input).
    """
    if not terminal.is_interactive():
        try:
            return console.input(prompt)
        except EOFError:
            return None

    editor = LineEditor(prompt, completer, initial, width=console.width)
    screen = Region()
    _draw(screen, editor)

    with terminal.raw_mode():
        try:
            while True:
                editor.width = console.width
                if editor.handle_key(terminal.read_key()):
                    return editor.result
                _draw(screen, editor)
        finally:
            # Leave only the input row behind, with the cursor below it
            terminal.write("\r" + region.CLEAR_DOWN)
            screen.paint([f"{editor.prompt}{escape(editor.buffer)}"])
