"""
Gitignore-style wildcard filtering of a directory tree.

Usage::

    from wildsift.filtering import resolve

    files = resolve(["**/*.py", "!**/conftest.py", "docs/*.md"], "project/")
"""

from wildsift.filtering.classifier import FilterGroups, FolderRewrite, classify
from wildsift.filtering.patterns import (
    DecomposedFilter,
    compile_segment,
    has_wildcards,
    split_filter,
    split_filters,
)
from wildsift.filtering.resolver import (
    files_by_file_filter,
    files_by_folder_filter,
    resolve,
    rewritten_filters_for,
)

__all__ = [
    "DecomposedFilter",
    "FilterGroups",
    "FolderRewrite",
    "classify",
    "compile_segment",
    "files_by_file_filter",
    "files_by_folder_filter",
    "has_wildcards",
    "resolve",
    "rewritten_filters_for",
    "split_filter",
    "split_filters",
]
