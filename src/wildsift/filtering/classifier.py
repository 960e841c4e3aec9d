"""
Partition decomposed filters into file-level and folder-level groups.

File filters (one segment) are matched against files in the current directory.
Folder filters (several segments) pick subdirectories with their first segment
and are rewritten into new filters for use inside each picked subdirectory.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from wildsift.filtering.patterns import RECURSIVE_SEGMENT, DecomposedFilter, compile_segment


@dataclass(frozen=True)
class FolderRewrite:
    """
    A folder selector regex paired with the filter to apply inside any
    subdirectory whose name it matches.
    """

    regex: re.Pattern[str]
    filter: str


@dataclass
class FilterGroups:
    """The four views of a filter list needed to resolve one directory."""

    inclusive_files: list[str] = field(default_factory=list)
    exclusive_file_regexes: list[re.Pattern[str]] = field(default_factory=list)
    inclusive_folders: list[str] = field(default_factory=list)
    folder_rewrites: list[FolderRewrite] = field(default_factory=list)


def rewrite_folder_filter(decomposed: DecomposedFilter) -> str:
    """
    Build the filter to apply one level down. The consumed selector is dropped,
    except `**`, which is kept so matching can continue at any depth.
    """
    segments = decomposed.segments
    join_start = 0 if segments[0] == RECURSIVE_SEGMENT else 1
    negation = "!" if decomposed.excludes else ""
    return negation + "/" + "/".join(segments[join_start:])


def classify(decomposed: Iterable[DecomposedFilter]) -> FilterGroups:
    """Split decomposed filters into file and folder groups, deduplicating selectors."""
    groups = FilterGroups()

    file_filters: dict[str, None] = {}
    inclusive_folders: dict[str, None] = {}

    for d in decomposed:
        if d.is_file_filter:
            negation = "!" if d.excludes else ""
            file_filters[negation + d.segments[0]] = None
        elif d.is_folder_filter:
            groups.folder_rewrites.append(
                FolderRewrite(compile_segment(d.segments[0]), rewrite_folder_filter(d))
            )
            if not d.excludes:
                inclusive_folders[d.segments[0]] = None

    for file_filter in file_filters:
        if file_filter.startswith("!"):
            groups.exclusive_file_regexes.append(compile_segment(file_filter))
        else:
            groups.inclusive_files.append(file_filter)

    groups.inclusive_folders = list(inclusive_folders)
    return groups
