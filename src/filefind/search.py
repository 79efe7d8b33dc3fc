"""Public search entry points built on the traversal engine."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator

from filefind import FileFindError
from filefind.enumerator import EntryEnumerator, FoundEntry, PathEnumerator
from filefind.matcher import compile_matcher
from filefind.native import DirectoryEnumerator, DirectoryOpener
from filefind.options import SearchSpec

logger = logging.getLogger(__name__)


def build_search(
    root: str | os.PathLike[str],
    patterns: Iterable[str] | None = None,
    *,
    regex: bool = False,
    ignore_case: bool = False,
    files: bool = True,
    subdirs: bool = True,
    recurse: bool = True,
) -> SearchSpec:
    """Validate options and build a :class:`SearchSpec`.

    Args:
        root: Directory to search.
        patterns: Optional wildcard patterns (or regexes with ``regex``).
        regex: Treat patterns as regular expressions.
        ignore_case: Match names case-insensitively.
        files: Produce files.
        subdirs: Produce and descend into directories.
        recurse: Walk below ``root``.

    Returns:
        SearchSpec: Frozen search description.

    Raises:
        FileFindError: If nothing would be produced or a pattern is invalid.
    """
    if not files and not subdirs:
        raise FileFindError("at least one of files or subdirs must be enabled")
    try:
        matcher = compile_matcher(patterns, regex=regex, ignore_case=ignore_case)
    except ValueError as exc:
        raise FileFindError(str(exc)) from exc
    return SearchSpec(
        root=os.fspath(root),
        files=files,
        subdirs=subdirs,
        recurse=recurse,
        matcher=matcher,
    )


def iter_paths(
    search: SearchSpec,
    opener: DirectoryOpener = DirectoryEnumerator,
) -> Iterator[str]:
    """Yield result paths for ``search`` lazily.

    Handles are released when the generator is exhausted, closed, or
    garbage collected, so breaking out of a loop early does not leak.

    Raises:
        OSError: If a directory cannot be opened or read.
    """
    with PathEnumerator(search, opener) as enumerator:
        yield from enumerator


def iter_entries(
    search: SearchSpec,
    opener: DirectoryOpener = DirectoryEnumerator,
) -> Iterator[FoundEntry]:
    """Yield :class:`FoundEntry` results for ``search`` lazily."""
    with EntryEnumerator(search, opener) as enumerator:
        yield from enumerator


def enumerate_paths(
    root: str | os.PathLike[str],
    patterns: Iterable[str] | None = None,
    **options: bool,
) -> Iterator[str]:
    """Search ``root`` for files and directories.

    Keyword options are those of :func:`build_search`. Only directories that
    are themselves selected (``subdirs`` enabled, name matching the patterns)
    are descended into.

    Example::

        for path in enumerate_paths("logs", ["*.log"]):
            ...
    """
    search = build_search(root, patterns, **options)
    logger.debug("Searching %s (recurse=%s)", search.root, search.recurse)
    return iter_paths(search)


def enumerate_entries(
    root: str | os.PathLike[str],
    patterns: Iterable[str] | None = None,
    **options: bool,
) -> Iterator[FoundEntry]:
    """Search ``root`` and yield entry records instead of bare paths."""
    return iter_entries(build_search(root, patterns, **options))
