#!/usr/bin/env python3
"""
wildsift: Select files in a directory tree with gitignore-style wildcard filters

Common usage:
  wildsift -f '**/*.py' src/
  wildsift -f '*.txt' -f '!test_0.txt' .
  wildsift -f 'docs/**/*.md' --relative -o manifest.txt .
  wildsift --filter-file package.filters .

Filter syntax:
  `*` and `?` match within one path segment, a leading `**/` matches at any
  depth, and a leading `!` excludes files matched in the same directory scope.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from strif import atomic_output_file

from wildsift.config import find_config_file, load_config, merge_cli_with_config
from wildsift.errors import ConfigError, DirectoryNotFoundError, InvalidArgumentError


@dataclass
class Options:
    """Command-line options for the wildsift tool."""

    root: str
    filters: list[str]
    extend_filters: list[str]
    filter_files: list[str]
    respect_gitignore: bool
    files_max_size: int
    relative: bool
    output: str
    verbose: bool
    version: bool


def _build_parser() -> argparse.ArgumentParser:
    # Use the module's docstring as the description
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")
    description = doc_parts[0]
    epilog = "\n\n".join(doc_parts[1:])

    parser = argparse.ArgumentParser(
        prog="wildsift",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "root",
        nargs="?",
        type=str,
        default=".",
        help="Root directory to resolve filters against (default: %(default)s)",
    )
    parser.add_argument(
        "-f",
        "--filter",
        action="append",
        default=[],
        dest="filters",
        metavar="PATTERN",
        help="Wildcard filter, e.g. '**/*.py' or '!secret.txt'. Replaces configured filters. "
        "Can be repeated",
    )
    parser.add_argument(
        "--extend-filter",
        action="append",
        default=[],
        dest="extend_filters",
        metavar="PATTERN",
        help="Add a filter to those from the config file. Can be repeated",
    )
    parser.add_argument(
        "--filter-file",
        action="append",
        default=[],
        dest="filter_files",
        metavar="FILE",
        help="Read filters from FILE, one per line ('#' starts a comment). Can be repeated",
    )
    parser.add_argument(
        "--respect-gitignore",
        action="store_true",
        dest="respect_gitignore",
        help="Drop matched files that are ignored by .gitignore files under the root",
    )
    parser.add_argument(
        "--files-max-size",
        type=int,
        default=0,
        dest="files_max_size",
        metavar="BYTES",
        help="Skip files larger than this size in bytes (0 = no limit, default: %(default)s)",
    )
    parser.add_argument(
        "-r",
        "--relative",
        action="store_true",
        help="Print paths relative to the root directory",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default="-",
        help="Write the file list here instead of stdout (use '-' for stdout)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log resolution details to stderr",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information and exit",
    )
    return parser


def _explicit_flags(args: list[str] | None) -> set[str]:
    """
    Names of options the user actually passed, for config merge precedence.
    Re-parses with sentinel defaults rather than comparing against default
    values (which fails when the user passes the default).
    """
    _SENTINEL = object()
    sentinel_parser = argparse.ArgumentParser(add_help=False)
    sentinel_parser.add_argument("-f", "--filter", action="append", dest="filters", default=None)
    sentinel_parser.add_argument(
        "--extend-filter", action="append", dest="extend_filters", default=None
    )
    sentinel_parser.add_argument(
        "--filter-file", action="append", dest="filter_files", default=None
    )
    sentinel_parser.add_argument(
        "--respect-gitignore", action="store_true", dest="respect_gitignore", default=_SENTINEL
    )
    sentinel_parser.add_argument(
        "--files-max-size", type=int, dest="files_max_size", default=_SENTINEL
    )
    sentinel_parser.add_argument("-r", "--relative", action="store_true", default=_SENTINEL)
    sentinel_opts, _ = sentinel_parser.parse_known_args(args if args is not None else sys.argv[1:])

    explicit: set[str] = set()
    # For append actions, None means not supplied; a list means supplied
    for name in ("filters", "extend_filters", "filter_files"):
        if getattr(sentinel_opts, name) is not None:
            explicit.add(name)
    for name in ("respect_gitignore", "files_max_size", "relative"):
        if getattr(sentinel_opts, name) is not _SENTINEL:
            explicit.add(name)
    return explicit


def _parse_args(args: list[str] | None = None) -> tuple[Options, set[str]]:
    """
    Parse command-line arguments.

    Returns a tuple of (options, explicit_flags) where `explicit_flags` tracks
    which flags the user explicitly passed.
    """
    opts = _build_parser().parse_args(args)
    return (
        Options(
            root=opts.root,
            filters=opts.filters,
            extend_filters=opts.extend_filters,
            filter_files=opts.filter_files,
            respect_gitignore=opts.respect_gitignore,
            files_max_size=opts.files_max_size,
            relative=opts.relative,
            output=opts.output,
            verbose=opts.verbose,
            version=opts.version,
        ),
        _explicit_flags(args),
    )


def _write_listing(lines: list[str], output: str) -> None:
    text = "".join(f"{line}\n" for line in lines)
    if output == "-":
        sys.stdout.write(text)
    else:
        with atomic_output_file(output, make_parents=True) as temp_path:
            Path(temp_path).write_text(text, encoding="utf-8")


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the wildsift CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    options, explicit_flags = _parse_args(args)

    if options.version:
        try:
            version = importlib.metadata.version("wildsift")
            print(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("unknown (package not installed)")
        return 0

    logging.basicConfig(
        level=logging.DEBUG if options.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    config_path = find_config_file(Path.cwd())
    if config_path:
        logging.getLogger(__name__).debug("Using config file %s", config_path)
        try:
            config = load_config(config_path)
        except ConfigError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        merge_cli_with_config(options, config, explicit_flags)

    if not (options.filters or options.extend_filters or options.filter_files):
        print(
            "Error: No filters specified. Use -f/--filter, --filter-file, or a"
            " config file. Use --help for more options.",
            file=sys.stderr,
        )
        return 1

    from wildsift.file_selector import FileSelector, FileSelectorConfig

    selector = FileSelector(
        FileSelectorConfig(
            filters=options.filters,
            extend_filters=options.extend_filters,
            filter_files=options.filter_files,
            respect_gitignore=options.respect_gitignore,
            files_max_size=options.files_max_size,
        )
    )

    try:
        selected = selector.select(options.root, relative=options.relative)
        _write_listing([str(p) for p in selected], options.output)
    except (InvalidArgumentError, DirectoryNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        # Filesystem errors during the walk or while writing output.
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except Exception as e:
        # Undecodable filter files or file names that cannot be written out.
        print(f"Error: {e}", file=sys.stderr)
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
