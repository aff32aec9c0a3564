"""Terminal mode and raw key reads.

Raw mode is process-wide state: it is only ever entered through the
``raw_mode`` context manager, which restores the saved attributes on every
way out of the block (return, exception, Ctrl-C).
"""

from __future__ import annotations

import logging
import os
import sys
from contextlib import contextmanager
from typing import Iterator

from .console import console
from .keys import Key, KeyKind, decode

try:
    import termios
except ImportError:  # Windows: prompts run in fallback mode
    termios = None

logger = logging.getLogger(__name__)

NONINTERACTIVE_ENV = "RICH_PROMPT_NONINTERACTIVE"
READ_SIZE = 32


def _env_flag(name: str) -> bool:
    return (os.environ.get(name) or "").strip().lower() in ("1", "true", "yes", "on")


def is_interactive() -> bool:
    """Return True when prompts may take over the terminal in raw mode."""
    if termios is None or _env_flag(NONINTERACTIVE_ENV):
        return False
    try:
        return sys.stdin.isatty()
    except (AttributeError, ValueError):
        return False


@contextmanager
def raw_mode(fd: int | None = None) -> Iterator[None]:
    """Put the terminal in raw, unbuffered, no-echo input mode.

    Signals are disabled so Ctrl-C arrives as a key; output post-processing
    stays on so "\\n" still returns the carriage.
    """
    if fd is None:
        fd = sys.stdin.fileno()
    saved = termios.tcgetattr(fd)
    mode = termios.tcgetattr(fd)
    mode[0] &= ~(termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP | termios.IXON)
    mode[3] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
    mode[6][termios.VMIN] = 1
    mode[6][termios.VTIME] = 0
    termios.tcsetattr(fd, termios.TCSANOW, mode)
    logger.debug("raw mode on (fd=%d)", fd)
    try:
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSANOW, saved)
        logger.debug("raw mode off (fd=%d)", fd)


def read_key(fd: int | None = None) -> Key:
    """Block for the next key press. Must be called inside ``raw_mode``.

    Raises:
        KeyboardInterrupt: On Ctrl-C, from inside the raw-mode block so the
            terminal is restored before the interrupt propagates.
    """
    if fd is None:
        fd = sys.stdin.fileno()
    console.file.flush()
    key = decode(os.read(fd, READ_SIZE))
    if key.kind is KeyKind.CTRL_C:
        raise KeyboardInterrupt
    return key


def write(sequence: str) -> None:
    """Write raw control sequences to the console's file."""
    if not sequence:
        return
    out = console.file
    out.write(sequence)
    out.flush()
