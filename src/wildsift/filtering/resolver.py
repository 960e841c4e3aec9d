"""
Resolve wildcard filters against a directory tree.

Each call handles a single directory: file filters are matched against the
files directly inside it, and folder filters select subdirectories that are
resolved recursively with rewritten filters. The combined result is a set of
absolute file paths.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path

from wildsift.errors import DirectoryNotFoundError, InvalidArgumentError
from wildsift.filtering.classifier import FolderRewrite, classify
from wildsift.filtering.patterns import compile_segment, has_wildcards, split_filters

logger = logging.getLogger(__name__)


def resolve(filters: Sequence[str] | None, root: str | os.PathLike[str] | None) -> set[Path]:
    """
    Return the files under `root` selected by `filters`.

    Filters use `/`-separated segments with `*` and `?` wildcards, a leading
    `**` segment for any depth, and a leading `!` for exclusion. Exclusions
    only suppress file matches made within the same directory scope.

    Raises:
        InvalidArgumentError: If `filters` is None or `root` is None or blank.
        DirectoryNotFoundError: If `root` is not an existing directory.
    """
    if filters is None:
        raise InvalidArgumentError("filters must not be None")
    if root is None or not os.fspath(root).strip():
        raise InvalidArgumentError("root must not be empty")

    directory = Path(os.path.abspath(root))
    if not directory.is_dir():
        raise DirectoryNotFoundError(f"The specified root is not a directory: {root}")

    if not filters:
        return set()

    return _resolve_directory(filters, directory)


def _resolve_directory(filters: Iterable[str], root: Path) -> set[Path]:
    """Resolve already-validated filters in one directory, recursing into subdirectories."""
    groups = classify(split_filters(filters))
    logger.debug(
        "Resolving %s: file filters %s, folder selectors %s",
        root,
        groups.inclusive_files,
        groups.inclusive_folders,
    )

    result: set[Path] = set()
    for file_filter in groups.inclusive_files:
        result.update(files_by_file_filter(root, file_filter, groups.exclusive_file_regexes))

    visited: set[str] = set()
    for selector in groups.inclusive_folders:
        result.update(files_by_folder_filter(root, selector, groups.folder_rewrites, visited))

    return result


def rewritten_filters_for(dir_name: str, folder_rewrites: Iterable[FolderRewrite]) -> list[str]:
    """Filters to apply inside a subdirectory named `dir_name`, in order."""
    return [r.filter for r in folder_rewrites if r.regex.match(dir_name)]


def files_by_folder_filter(
    root: Path,
    selector: str,
    folder_rewrites: Sequence[FolderRewrite],
    visited: set[str] | None = None,
) -> Iterator[Path]:
    """
    Yield files found inside the subdirectories of `root` picked by `selector`.

    A selector without wildcards names one subdirectory. Otherwise every
    immediate subdirectory whose name matches is used. Each picked subdirectory
    is resolved with the rewritten filters whose selector regex matches its
    name. Names already in `visited` are skipped and new ones are added to it.
    """
    if visited is None:
        visited = set()

    if has_wildcards(selector):
        regex = compile_segment(selector)
        with os.scandir(root) as entries:
            dir_names = [e.name for e in entries if e.is_dir() and regex.match(e.name)]
    else:
        dir_names = [selector] if (root / selector).is_dir() else []

    for dir_name in dir_names:
        if dir_name in visited:
            continue
        visited.add(dir_name)
        sub_filters = rewritten_filters_for(dir_name, folder_rewrites)
        if not sub_filters:
            continue
        logger.debug("Descending into %s with %s", root / dir_name, sub_filters)
        yield from _resolve_directory(sub_filters, root / dir_name)


def files_by_file_filter(
    root: Path,
    file_filter: str,
    exclusive_regexes: Sequence[re.Pattern[str]],
) -> Iterator[Path]:
    """Yield files directly in `root` matching `file_filter` and none of `exclusive_regexes`."""
    if has_wildcards(file_filter):
        regex = compile_segment(file_filter)
        with os.scandir(root) as entries:
            names = [e.name for e in entries if e.is_file() and regex.match(e.name)]
    else:
        names = [file_filter] if (root / file_filter).is_file() else []

    for name in names:
        if not _any_match(exclusive_regexes, name):
            yield root / name


def _any_match(regexes: Iterable[re.Pattern[str]], name: str) -> bool:
    return any(regex.match(name) for regex in regexes)
