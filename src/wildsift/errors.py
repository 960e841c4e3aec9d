"""Exceptions raised by wildsift."""

from __future__ import annotations


class InvalidArgumentError(ValueError):
    """A required argument was missing or blank."""


class DirectoryNotFoundError(FileNotFoundError):
    """The root passed to `resolve()` is not an existing directory."""


class ConfigError(ValueError):
    """A config file could not be parsed."""
