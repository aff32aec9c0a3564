"""Keyboard input decoding for rich_prompt.

Every raw read from the terminal is classified exactly once into a ``Key``;
the prompt primitives dispatch on ``Key.kind`` and never look at escape
sequences themselves.

A read is classified as a whole. A lone ESC and the first byte of a longer
escape sequence can only be told apart by what arrived in the same read, so
a sequence split across two reads (slow links, some pastes) decodes as
Escape followed by unknown input.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import readchar


class KeyKind(Enum):
    """Logical key classes produced by ``decode``."""

    CHAR = "char"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"
    DELETE = "delete"
    BACKSPACE = "backspace"
    ENTER = "enter"
    ESCAPE = "escape"
    TAB = "tab"
    SHIFT_TAB = "shift_tab"
    CTRL_C = "ctrl_c"
    CTRL_D = "ctrl_d"
    CTRL_U = "ctrl_u"
    EOF = "eof"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Key:
    """One decoded key press.

    Attributes:
        kind: Logical class of the key.
        char: The typed character for ``KeyKind.CHAR``, empty otherwise.
    """

    kind: KeyKind
    char: str = ""

    def is_char(self, *chars: str) -> bool:
        """Check if this is a printable key matching one of ``chars``."""
        return self.kind is KeyKind.CHAR and self.char in chars

    @property
    def is_digit(self) -> bool:
        # ASCII only: "²" and "①" pass str.isdigit() but not int()
        return self.kind is KeyKind.CHAR and len(self.char) == 1 and self.char in "0123456789"


# Terminals send either "normal" (CSI) or "application" (SS3) cursor keys.
_SEQUENCES: dict[str, KeyKind] = {
    readchar.key.UP: KeyKind.UP,
    readchar.key.DOWN: KeyKind.DOWN,
    readchar.key.RIGHT: KeyKind.RIGHT,
    readchar.key.LEFT: KeyKind.LEFT,
    readchar.key.HOME: KeyKind.HOME,
    readchar.key.END: KeyKind.END,
    "\x1b[A": KeyKind.UP,
    "\x1bOA": KeyKind.UP,
    "\x1b[B": KeyKind.DOWN,
    "\x1bOB": KeyKind.DOWN,
    "\x1b[C": KeyKind.RIGHT,
    "\x1bOC": KeyKind.RIGHT,
    "\x1b[D": KeyKind.LEFT,
    "\x1bOD": KeyKind.LEFT,
    "\x1b[H": KeyKind.HOME,
    "\x1b[1~": KeyKind.HOME,
    "\x1bOH": KeyKind.HOME,
    "\x1b[F": KeyKind.END,
    "\x1b[4~": KeyKind.END,
    "\x1bOF": KeyKind.END,
    "\x1b[3~": KeyKind.DELETE,
    "\x1b[Z": KeyKind.SHIFT_TAB,
    readchar.key.ESC: KeyKind.ESCAPE,
    readchar.key.BACKSPACE: KeyKind.BACKSPACE,
    "\x7f": KeyKind.BACKSPACE,
    "\x08": KeyKind.BACKSPACE,
    "\r": KeyKind.ENTER,
    "\n": KeyKind.ENTER,
    "\t": KeyKind.TAB,
    readchar.key.CTRL_A: KeyKind.HOME,
    readchar.key.CTRL_E: KeyKind.END,
    readchar.key.CTRL_C: KeyKind.CTRL_C,
    readchar.key.CTRL_D: KeyKind.CTRL_D,
    readchar.key.CTRL_U: KeyKind.CTRL_U,
}


def decode(data: bytes) -> Key:
    """Classify the bytes of a single terminal read.

    Args:
        data: Everything one read returned (at most 32 bytes).

    Returns:
        The decoded Key. An empty read means the input is exhausted
        and decodes to ``KeyKind.EOF``. Bytes that are not valid UTF-8 decode
        to ``KeyKind.UNKNOWN``.
    """
    if not data:
        return Key(KeyKind.EOF)

    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        return Key(KeyKind.UNKNOWN)

    kind = _SEQUENCES.get(text)
    if kind is not None:
        return Key(kind)

    if len(text) == 1 and ord(text) >= 32 and text != "\x7f":
        return Key(KeyKind.CHAR, text)

    return Key(KeyKind.UNKNOWN)


def char(c: str) -> Key:
    """Build a printable key (used by callers replaying input)."""
    return Key(KeyKind.CHAR, c)


# Shorthands for the non-printable keys
UP = Key(KeyKind.UP)
DOWN = Key(KeyKind.DOWN)
LEFT = Key(KeyKind.LEFT)
RIGHT = Key(KeyKind.RIGHT)
HOME = Key(KeyKind.HOME)
END = Key(KeyKind.END)
DELETE = Key(KeyKind.DELETE)
BACKSPACE = Key(KeyKind.BACKSPACE)
ENTER = Key(KeyKind.ENTER)
ESCAPE = Key(KeyKind.ESCAPE)
TAB = Key(KeyKind.TAB)
SHIFT_TAB = Key(KeyKind.SHIFT_TAB)
CTRL_C = Key(KeyKind.CTRL_C)
CTRL_D = Key(KeyKind.CTRL_D)
CTRL_U = Key(KeyKind.CTRL_U)
EOF = Key(KeyKind.EOF)
