"""CLI entry point for ffind — I/O boundary only."""

from __future__ import annotations

import argparse
import logging
import sys
from contextlib import closing
from itertools import islice
from pathlib import Path

from filefind import FileFindError
from filefind.options import SearchSpec
from filefind.search import build_search, iter_paths


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser.

    Returns:
        argparse.ArgumentParser: Configured parser for the ``ffind`` command.
    """
    parser = argparse.ArgumentParser(
        prog="ffind",
        description="lazy recursive file and directory search",
    )
    parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Root directory to search (default: current directory)",
    )
    parser.add_argument(
        "-p",
        "--pattern",
        action="append",
        default=[],
        dest="patterns",
        help="Only list names matching pattern (can be specified multiple times)",
    )
    parser.add_argument(
        "-e",
        "--regex",
        action="store_true",
        help="Treat patterns as regular expressions instead of wildcards",
    )
    parser.add_argument(
        "-i",
        "--ignore-case",
        action="store_true",
        dest="ignore_case",
        help="Match names case-insensitively",
    )
    parser.add_argument(
        "-f",
        "--files-only",
        action="store_true",
        dest="files_only",
        help="List files only (directories are not descended)",
    )
    parser.add_argument(
        "-d",
        "--dirs-only",
        action="store_true",
        dest="dirs_only",
        help="List directories only",
    )
    parser.add_argument(
        "--no-recurse",
        action="store_false",
        dest="recurse",
        help="List the root directory only",
    )
    parser.add_argument(
        "-n",
        "--limit",
        type=int,
        default=None,
        help="Stop after this many results",
    )
    parser.add_argument(
        "--null",
        action="store_true",
        help="Separate results with NUL instead of newline",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        dest="output_file",
        help="Write output to a file instead of stdout",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log traversal details to stderr",
    )
    return parser


def run_ffind(argv: list[str] | None = None) -> str:
    """Run ffind with provided CLI args and return formatted output.

    This function is side-effect free and is the primary test target for
    CLI behavior.

    Args:
        argv: Command-line argument list without program name.

    Returns:
        str: Result paths joined by the selected separator.

    Raises:
        FileFindError: On any user-facing validation or I/O error.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    return _run_with_args(args)


def _resolve_root(directory: str) -> Path:
    """Resolve directory and validate it is a directory.

    Raises:
        FileFindError: If directory does not exist or is not a directory.
    """
    root = Path(directory).resolve()
    if not root.is_dir():
        raise FileFindError(f"'{directory}' is not a directory")
    return root


def _validate_option_combinations(args: argparse.Namespace) -> None:
    """Validate incompatible CLI option combinations.

    Raises:
        FileFindError: If incompatible options are combined.
    """
    if args.files_only and args.dirs_only:
        raise FileFindError("--files-only (-f) is incompatible with --dirs-only (-d)")
    if args.limit is not None and args.limit < 0:
        raise FileFindError("--limit must not be negative")
    if args.regex and not args.patterns:
        raise FileFindError("--regex requires --pattern")


def _collect(search: SearchSpec, limit: int | None) -> list[str]:
    """Pull at most ``limit`` results, releasing all handles afterwards.

    Raises:
        FileFindError: If a directory cannot be read.
    """
    try:
        with closing(iter_paths(search)) as results:
            return list(islice(results, limit))
    except OSError as exc:
        path = exc.filename or search.root
        reason = exc.strerror or str(exc)
        raise FileFindError(f"cannot read '{path}': {reason}") from exc


def _run_with_args(args: argparse.Namespace) -> str:
    """Run the search pipeline for parsed arguments.

    Raises:
        FileFindError: On any user-facing validation or I/O error.
    """
    _validate_option_combinations(args)
    root = _resolve_root(args.directory)
    search = build_search(
        root,
        args.patterns,
        regex=args.regex,
        ignore_case=args.ignore_case,
        files=not args.dirs_only,
        subdirs=not args.files_only,
        recurse=args.recurse,
    )
    paths = _collect(search, args.limit)
    separator = "\0" if args.null else "\n"
    return separator.join(paths)


def main() -> None:
    """Run the CLI entry point with process arguments.

    Parses args exactly once and writes output to stdout or ``-o`` file.
    Exits with code 1 on user-facing errors.
    """
    parser = build_parser()
    args = parser.parse_args()  # single parse

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        output = _run_with_args(args)
    except FileFindError as exc:
        sys.stderr.write(f"ffind: {exc}\n")
        sys.exit(1)

    terminator = "\0" if args.null else "\n"
    text = output + terminator if output else ""
    if args.output_file:
        try:
            Path(args.output_file).write_text(text, encoding="utf-8", newline="")
        except OSError as exc:
            sys.stderr.write(f"ffind: cannot write to '{args.output_file}': {exc}\n")
            sys.exit(1)
    else:
        sys.stdout.write(text)
