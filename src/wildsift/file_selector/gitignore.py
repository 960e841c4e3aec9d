"""Reading filter files and `.gitignore` files."""

from __future__ import annotations

from pathlib import Path

import pathspec


def _clean_lines(text: str) -> list[str]:
    """Drop blank and `#` comment lines, stripping trailing whitespace."""
    lines = [line.rstrip() for line in text.splitlines()]
    return [line for line in lines if line.strip() and not line.lstrip().startswith("#")]


def _read_ignore_file(path: Path) -> list[str] | None:
    """
    Read non-blank, non-comment lines from an ignore file. Returns `None` if the
    file is missing, unreadable, or not valid UTF-8.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    return _clean_lines(text)


def read_filter_file(path: Path) -> list[str]:
    """
    Read wildcard filters from `path`, one per line. Unlike ignore files, a
    missing filter file is an error and raises `FileNotFoundError`.
    """
    return _clean_lines(path.read_text(encoding="utf-8"))


def load_gitignore(directory: Path) -> pathspec.PathSpec | None:
    """
    Read `.gitignore` in the given directory and return a compiled `PathSpec`,
    or `None` if the file doesn't exist, can't be read, or is empty.
    """
    lines = _read_ignore_file(directory / ".gitignore")
    if not lines:
        return None
    return pathspec.PathSpec.from_lines("gitignore", lines)
