"""
Filter decomposition and wildcard-to-regex compilation.

A raw filter such as `!src/**/*.py` is split into its non-empty path segments
and an exclusion flag. Each segment is later compiled to a regex that matches
exactly one path component.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

# Segment that matches the current directory and any depth below it.
RECURSIVE_SEGMENT = "**"

_WILDCARD_CHARS = frozenset("*?")


@dataclass(frozen=True)
class DecomposedFilter:
    """A filter split into `/`-separated segments, plus its `!` flag."""

    segments: tuple[str, ...]
    excludes: bool = False

    @property
    def is_file_filter(self) -> bool:
        return len(self.segments) == 1

    @property
    def is_folder_filter(self) -> bool:
        return len(self.segments) > 1


def has_wildcards(text: str) -> bool:
    """True if `text` contains `*` or `?`."""
    return any(c in _WILDCARD_CHARS for c in text)


def split_filter(raw_filter: str) -> list[DecomposedFilter]:
    """
    Decompose one raw filter. A leading `**` segment yields two filters: the
    original, and a copy without the `**` so that `**/x` also matches `x`
    directly in the current directory.

    Filters with no segments (e.g. `""`, `"!"`, `"/"`) yield nothing.
    """
    excludes = raw_filter.startswith("!")
    if excludes:
        raw_filter = raw_filter[1:]

    segments = tuple(s for s in raw_filter.split("/") if s)
    if not segments:
        return []

    result = [DecomposedFilter(segments, excludes)]
    if segments[0] == RECURSIVE_SEGMENT and len(segments) > 1:
        result.append(DecomposedFilter(segments[1:], excludes))
    return result


def split_filters(raw_filters: Iterable[str]) -> list[DecomposedFilter]:
    """Decompose every raw filter, preserving input order."""
    decomposed: list[DecomposedFilter] = []
    for raw_filter in raw_filters:
        decomposed.extend(split_filter(raw_filter))
    return decomposed


def compile_segment(segment: str) -> re.Pattern[str]:
    """
    Compile a wildcard segment into a regex matching a whole path component.

    A leading `!` and then a leading `/` are stripped first. `?` matches zero or
    one non-separator character and `*` matches any run of non-separator
    characters. The compiled pattern accepts the name with or without a
    leading `/`, so it matches both `name` and `/name`.
    """
    if segment.startswith("!"):
        segment = segment[1:]
    if segment.startswith("/"):
        segment = segment[1:]

    body = re.escape(segment).replace(r"\?", "[^/]?").replace(r"\*", "[^/]*")
    return re.compile(rf"\A/?{body}\Z")
