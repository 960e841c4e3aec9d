from wildsift.errors import DirectoryNotFoundError, InvalidArgumentError
from wildsift.file_selector import FileSelector, FileSelectorConfig
from wildsift.filtering import resolve

__all__ = [
    "DirectoryNotFoundError",
    "FileSelector",
    "FileSelectorConfig",
    "InvalidArgumentError",
    "resolve",
]
