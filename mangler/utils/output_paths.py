"""Helpers for the wordlist output file.

The output file is line-oriented UTF-8 text opened in append mode, so
repeated runs against the same path extend the list instead of replacing it.
"""

from __future__ import annotations

from pathlib import Path
from typing import TextIO


def ensure_parent_dir(path: Path) -> None:
    """Ensure the parent directory exists for a file path."""
    path.parent.mkdir(parents=True, exist_ok=True)


def open_append_sink(path: Path) -> TextIO:
    """Open ``path`` for appending words, creating parent directories.

    Newlines are written as ``\\n`` on every platform.
    """
    path = Path(path)
    ensure_parent_dir(path)
    return open(path, "a", encoding="utf-8", newline="\n")
