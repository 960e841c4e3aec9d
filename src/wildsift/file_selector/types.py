"""Configuration types for file selection."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class FileSelectorConfig:
    """
    Configuration for selecting files with wildcard filters.

    `filter_files` name pattern files read one filter per line.
    `files_max_size=0` disables the size limit.
    """

    filters: list[str] = field(default_factory=list)
    extend_filters: list[str] = field(default_factory=list)
    filter_files: list[str] = field(default_factory=list)
    respect_gitignore: bool = False
    files_max_size: int = 0

    @property
    def effective_filters(self) -> list[str]:
        """Inline filters: `filters + extend_filters`."""
        return self.filters + self.extend_filters
