"""
FileSelector: wildcard filter resolution with gitignore and size filtering.

Resolves configured filters against a root directory and returns a sorted,
deduplicated list of file paths.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import pathspec

from wildsift.file_selector.gitignore import load_gitignore, read_filter_file
from wildsift.file_selector.types import FileSelectorConfig
from wildsift.filtering import resolve

logger = logging.getLogger(__name__)


class FileSelector:
    """
    Selects files under a root directory using wildcard filters, then drops
    files ignored by `.gitignore` (if enabled) or larger than the size limit.
    """

    def __init__(self, config: FileSelectorConfig) -> None:
        self._config: FileSelectorConfig = config
        # Cache gitignore specs per directory to avoid re-reading from disk.
        self._gitignore_cache: dict[Path, pathspec.PathSpec | None] = {}

    @property
    def filters(self) -> list[str]:
        """All filters: inline filters followed by those read from filter files."""
        filters = list(self._config.effective_filters)
        for filter_file in self._config.filter_files:
            filters.extend(read_filter_file(Path(filter_file)))
        return filters

    def select(self, root: str | Path, relative: bool = False) -> list[Path]:
        """
        Resolve the filters under `root` and return matching files, sorted.

        With `relative=True`, paths are returned relative to `root`.
        """
        root_path = Path(os.path.abspath(root))
        matched = resolve(self.filters, root)

        result: list[Path] = []
        for path in sorted(matched):
            if self._exceeds_max_size(path):
                logger.debug("Skipping %s: larger than %d bytes", path, self._config.files_max_size)
                continue
            if self._config.respect_gitignore and self._is_gitignored(path, root_path):
                logger.debug("Skipping %s: ignored by .gitignore", path)
                continue
            result.append(path.relative_to(root_path) if relative else path)

        logger.info("Selected %d of %d matched files under %s", len(result), len(matched), root)
        return result

    def _exceeds_max_size(self, path: Path) -> bool:
        """Check if a file exceeds the configured max size. 0 = no limit."""
        if self._config.files_max_size == 0:
            return False
        try:
            return path.stat().st_size > self._config.files_max_size
        except OSError:
            return False

    def _is_gitignored(self, path: Path, root: Path) -> bool:
        """
        Check `path` against every `.gitignore` from `root` down to the file's
        directory. Each spec sees the path relative to its own directory, and
        every ancestor directory is also tested so `build/` excludes its contents.
        """
        rel = path.relative_to(root)
        current = root
        parts = rel.parts
        for depth in range(len(parts)):
            spec = self._get_gitignore(current)
            if spec is not None:
                local = parts[depth:]
                for i in range(1, len(local)):
                    if spec.match_file("/".join(local[:i]) + "/"):
                        return True
                if spec.match_file("/".join(local)):
                    return True
            current = current / parts[depth]
        return False

    def _get_gitignore(self, directory: Path) -> pathspec.PathSpec | None:
        """Load and cache gitignore for a directory."""
        if directory not in self._gitignore_cache:
            self._gitignore_cache[directory] = load_gitignore(directory)
        return self._gitignore_cache[directory]
