"""Completion providers for the line editor.

A provider is any callable ``(text_before_cursor) -> CompletionResult | None``.
``complete_path`` is the filesystem provider used by ``ask_path``.
"""

from __future__ import annotations

import logging
import os
from typing import Iterable

from .components import CompletionResult

logger = logging.getLogger(__name__)


def longest_common_prefix(names: Iterable[str]) -> str:
    """Return the longest string every name starts with."""
    names = list(names)
    if not names:
        return ""
    return os.path.commonprefix(names)


def split_path(text: str) -> tuple[str, str]:
    """Split input into (directory part including the slash, name prefix)."""
    cut = text.rfind("/") + 1
    return text[:cut], text[cut:]


def list_matches(directory: str, name_prefix: str) -> list[str]:
    """List entries of ``directory`` starting with ``name_prefix``.

    Directories come first and carry a trailing "/"; each group is sorted.
    Hidden entries are only offered when the prefix itself starts with ".".

    Raises:
        OSError: If the directory cannot be listed.
    """
    show_hidden = name_prefix.startswith(".")
    dirs: list[str] = []
    files: list[str] = []
    with os.scandir(directory) as entries:
        for entry in entries:
            if not entry.name.startswith(name_prefix):
                continue
            if entry.name.startswith(".") and not show_hidden:
                continue
            try:
                is_dir = entry.is_dir()
            except OSError:
                is_dir = False
            (dirs if is_dir else files).append(entry.name)
    return [f"{d}/" for d in sorted(dirs)] + sorted(files)


def complete_path(text: str) -> CompletionResult | None:
    """Complete a file or directory path.

    Args:
        text: Text before the cursor, e.g. "src/ma".

    Returns:
        CompletionResult whose ``prefix`` is the directory part of ``text``
        and whose ``completed`` is that prefix plus the longest common
        prefix of the matches; None if the directory cannot be read.
    """
    dir_part, name_prefix = split_path(text)
    directory = os.path.expanduser(dir_part) if dir_part else "."

    try:
        matches = list_matches(directory, name_prefix)
    except OSError as e:
        logger.debug("No completion for %r: %s", text, e)
        return None

    if not matches:
        return CompletionResult(matches=[], completed=text, prefix=dir_part)

    return CompletionResult(
        matches=matches,
        completed=dir_part + longest_common_prefix(matches),
        prefix=dir_part,
    )
