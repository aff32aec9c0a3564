"""Single-choice menu selector.

Example:
    from rich_prompt import EXIT, Option, ask

    choice = ask("What would you like to do?", [
        Option("Install", "Download and install the tool"),
        Option("Skip", "Continue without it"),
    ])
    if choice == EXIT:
        return

Keyboard controls:
    - Up/Down: Move the highlight (stops at the ends)
    - 1-9: Pick that option immediately
    - Enter: Pick the highlighted option
    - Backspace/Delete: Back (or exit)
"""

from __future__ import annotations

from typing import Sequence

from rich.markup import escape

from . import region, terminal
from .components import Option
from .console import console
from .keys import Key, KeyKind
from .region import Region
from .themes import get_theme

EXIT = -1


class MenuSelector:
    """State and rendering of one menu session.

    Args:
        options: All options, including the synthetic Back/Exit entry.
        exit_index: Position of the Back/Exit entry.
        hint: Key hint shown under the options.
    """

    def __init__(self, options: Sequence[Option], exit_index: int, hint: str):
        self.options = list(options)
        self.exit_index = exit_index
        self.hint = hint
        self.selected = 0
        self.result: int | None = None
        self.help_lines = region.max_help_lines(o.help for o in self.options)

    def height(self) -> int:
        return region.menu_height(len(self.options), (o.help for o in self.options))

    def _finish(self, index: int) -> bool:
        self.result = EXIT if index == self.exit_index else index
        return True

    def handle_key(self, key: Key) -> bool:
        """Apply one key. Returns True when the menu is done (see ``result``)."""
        if key.kind is KeyKind.UP:
            if self.selected > 0:
                self.selected -= 1
        elif key.kind is KeyKind.DOWN:
            if self.selected < len(self.options) - 1:
                self.selected += 1
        elif key.kind is KeyKind.ENTER:
            return self._finish(self.selected)
        elif key.kind in (KeyKind.BACKSPACE, KeyKind.DELETE, KeyKind.EOF):
            self.result = EXIT
            return True
        elif key.is_digit:
            n = int(key.char)
            if 1 <= n <= len(self.options):
                self.selected = n - 1
                return self._finish(n - 1)
        return False

    def render(self, width: int) -> list[str]:
        """Render the region rows for the current state."""
        theme = get_theme()
        accent, dim = theme.accent, theme.dim
        max_label = max(len(o.label) for o in self.options)
        num_width = len(f"{len(self.options)}.")
        # "  > N. label  description"
        desc_avail = width - 5 - num_width - max_label - 2

        lines = []
        for i, option in enumerate(self.options):
            num = f"{i + 1}.".rjust(num_width)
            label = escape(option.label.ljust(max_label))
            desc = escape(region.truncate(option.description, desc_avail, theme.ellipsis))
            if i == self.selected:
                lines.append(
                    f"  [{accent}]{escape(theme.cursor_icon)}[/{accent}] [{accent}]{num}[/{accent}] "
                    f"[{theme.label}]{label}[/{theme.label}]  [{dim}]{desc}[/{dim}]"
                )
            else:
                lines.append(f"    [{dim}]{num}[/{dim}] {label}  [{dim}]{desc}[/{dim}]")

        lines.append("")
        lines.append(f"  [{dim}]{escape(self.hint)}[/{dim}]")

        if self.help_lines > 0:
            help_text = self.options[self.selected].help
            help_rows = help_text.split("\n") if help_text else []
            lines.append("")
            for i in range(self.help_lines):
                if i < len(help_rows):
                    row = escape(region.truncate(help_rows[i], width - 2, theme.ellipsis))
                    lines.append(f"  [{dim}]{row}[/{dim}]")
                else:
                    lines.append("")
        return lines


def print_question(question: str) -> None:
    theme = get_theme()
    console.print()
    console.print(f"  [{theme.title}]{escape(question)}[/{theme.title}]")
    console.print()


def parse_choice(answer: str) -> int | None:
    try:
        return int(answer.strip())
    except ValueError:
        return None


def _ask_fallback(question: str, all_options: list[Option], exit_index: int) -> int:
    """Numbered list + line input, for stdin that is not a terminal."""
    theme = get_theme()
    print_question(question)

    max_label = max(len(o.label) for o in all_options)
    for i, option in enumerate(all_options):
        label = escape(option.label.ljust(max_label))
        console.print(f"  [bold]{i + 1}.[/bold] {label}  [{theme.dim}]{escape(option.description)}[/{theme.dim}]")
    console.print()

    while True:
        try:
            answer = console.input(f"[{theme.dim}]>[/{theme.dim}] ")
        except EOFError:
            return EXIT
        n = parse_choice(answer)
        if n is not None and 1 <= n <= len(all_options):
            return EXIT if n - 1 == exit_index else n - 1
        console.print(
            f"[{theme.error}]  Please enter a number between 1 and {len(all_options)}[/{theme.error}]"
        )


def ask(question: str, options: Sequence[Option], *, exit: bool = False) -> int:
    """Show a single-choice menu and block until the user picks an option.

    A "Back" option (or "Exit" when ``exit`` is True) is appended after
    ``options``; choosing it returns ``EXIT``.

    Args:
        question: Heading shown above the options.
        options: Choices to offer.
        exit: Label the synthetic last option "Exit" instead of "Back".

    Returns:
        Index into ``options``, or ``EXIT`` (-1).

    Raises:
        ValueError: If options is empty.
    """
    if not options:
        raise ValueError("Menu must have at least one option")

    back = Option("Exit", "") if exit else Option("Back", "Return to previous menu")
    all_options = [*options, back]
    exit_index = len(options)
    back_hint = "Backspace to exit" if exit else "Backspace to go back"
    hint = f"Enter to select · {back_hint}"

    if not terminal.is_interactive():
        return _ask_fallback(question, all_options, exit_index)

    menu = MenuSelector(all_options, exit_index, hint)
    help_area = region.help_area_height(o.help for o in all_options)

    print_question(question)
    screen = Region()
    screen.paint(menu.render(console.width))

    with terminal.raw_mode():
        try:
            while True:
                before = menu.selected
                done = menu.handle_key(terminal.read_key())
                if menu.selected != before:
                    screen.repaint(menu.render(console.width))
                if done:
                    return menu.result
        finally:
            # Drop the help area so caller output follows the hint row
            if help_area > 0:
                terminal.write(region.cursor_up(help_area) + region.CLEAR_DOWN)
