"""
TOML-based config file loading for wildsift.

Searches for `.wildsift.toml`, `wildsift.toml`, or `pyproject.toml [tool.wildsift]`
walking up from the current directory. Config values are merged with CLI flags
using three-way precedence: explicit CLI flags > config file > built-in defaults.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, TypeVar, cast

from wildsift.errors import ConfigError

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]


@dataclass
class WildsiftConfig:
    """
    Parsed config from a TOML file. Fields are `None` when not set in the config,
    allowing the merge logic to distinguish "not configured" from "explicitly set
    to default value".
    """

    filters: list[str] | None = None
    extend_filters: list[str] | None = None
    filter_files: list[str] | None = None
    respect_gitignore: bool | None = None
    files_max_size: int | None = None
    relative: bool | None = None


# Config file search order (first match wins within each directory level)
_CONFIG_FILENAMES = [".wildsift.toml", "wildsift.toml", "pyproject.toml"]

# Expected TOML value type per field; list fields hold strings.
_FIELD_TYPES: dict[str, type] = {
    "filters": list,
    "extend_filters": list,
    "filter_files": list,
    "respect_gitignore": bool,
    "files_max_size": int,
    "relative": bool,
}


def find_config_file(start_dir: Path) -> Path | None:
    """
    Walk up from `start_dir` looking for a config file. Returns the first
    found, or `None`. Search order per directory: `.wildsift.toml` >
    `wildsift.toml` > `pyproject.toml` (only if it has `[tool.wildsift]`).
    """
    current = start_dir.resolve()
    while True:
        for filename in _CONFIG_FILENAMES:
            candidate = current / filename
            if candidate.is_file():
                if filename == "pyproject.toml":
                    if _pyproject_has_wildsift_section(candidate):
                        return candidate
                else:
                    return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def _pyproject_has_wildsift_section(path: Path) -> bool:
    """Check if a pyproject.toml has a [tool.wildsift] section."""
    try:
        data = tomllib.loads(path.read_text())
        return "wildsift" in data.get("tool", {})
    except (tomllib.TOMLDecodeError, OSError):
        return False


def load_config(config_path: Path) -> WildsiftConfig:
    """
    Load a `WildsiftConfig` from a TOML file. Supports both standalone
    `wildsift.toml` / `.wildsift.toml` and `pyproject.toml` (extracts
    `[tool.wildsift]`). TOML kebab-case keys are mapped to Python snake_case.

    Relative `filter-files` entries are taken relative to the config file's
    directory, so a config found in a parent directory still points at its own
    filter files.

    Raises:
        ConfigError: If the file is not valid TOML or a value has the wrong type.
    """
    try:
        data = tomllib.loads(config_path.read_text())
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid config file {config_path}: {e}") from e

    if config_path.name == "pyproject.toml":
        data = data.get("tool", {}).get("wildsift", {})

    config = _parse_config_data(data)
    if config.filter_files is not None:
        config.filter_files = [str(config_path.parent / f) for f in config.filter_files]
    return config


def _parse_config_data(data: dict[str, Any]) -> WildsiftConfig:
    """Parse a flat or sectioned TOML dict into WildsiftConfig."""
    # Flatten sections, e.g. [selection] merges into top level
    flat: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            for sub_key, sub_value in cast(dict[str, Any], value).items():
                flat[sub_key] = sub_value
        else:
            flat[key] = value

    mapped: dict[str, Any] = {}
    for key, value in flat.items():
        snake_key = key.replace("-", "_")
        if snake_key in _FIELD_TYPES:
            mapped[snake_key] = _check_value(key, value, _FIELD_TYPES[snake_key])

    return WildsiftConfig(**mapped)


def _check_value(key: str, value: Any, expected: type) -> Any:
    """Reject values of the wrong TOML type, e.g. `filters = "*.py"` instead of a list."""
    if expected is list:
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigError(f"Config key `{key}` must be a list of strings")
    elif expected is int:
        # bool is a subclass of int
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ConfigError(f"Config key `{key}` must be a non-negative integer")
    elif not isinstance(value, expected):
        raise ConfigError(f"Config key `{key}` must be a {expected.__name__}")
    return value


_T = TypeVar("_T")


def merge_cli_with_config(
    cli_opts: _T,
    config: WildsiftConfig | None,
    explicit_flags: set[str],
) -> _T:
    """
    Merge CLI options with config file settings.

    Precedence: explicit CLI flags > config file > built-in defaults.
    """
    if config is None:
        return cli_opts

    for cfg_field in fields(WildsiftConfig):
        cfg_value = getattr(config, cfg_field.name)
        if cfg_value is None:
            continue  # Not set in config

        if cfg_field.name in explicit_flags:
            continue

        if hasattr(cli_opts, cfg_field.name):
            setattr(cli_opts, cfg_field.name, cfg_value)

    return cli_opts
