"""
File selection on top of wildcard filter resolution.

Usage::

    from wildsift.file_selector import FileSelector, FileSelectorConfig

    config = FileSelectorConfig(
        filters=["**/*.py", "!**/test_*.py"],
        respect_gitignore=True,
    )
    files = FileSelector(config).select("src")
"""

from wildsift.file_selector.selector import FileSelector
from wildsift.file_selector.types import FileSelectorConfig

__all__ = [
    "FileSelector",
    "FileSelectorConfig",
]
