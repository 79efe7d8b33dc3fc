"""Entry classification: which raw entries are results and which are descended."""

from __future__ import annotations

from filefind.native import EntryAttributes
from filefind.options import SearchSpec


def classify(
    name: str,
    attributes: EntryAttributes,
    search: SearchSpec,
) -> tuple[bool, bool]:
    """Decide what to do with one raw directory entry.

    A directory passing the pattern is both a result and a descent candidate
    when subdirectories are enabled. Reparse points are never descended,
    but can still be results. Files are never descended.

    Args:
        name: Entry name.
        attributes: Entry attribute flags.
        search: Active search options.

    Returns:
        tuple[bool, bool]: ``(yield_eligible, subdir_eligible)``.
    """
    if attributes & EntryAttributes.DIRECTORY:
        if not search.subdirs:
            return False, False
        matched = not search.has_pattern or search.is_match(name)
        reparse = bool(attributes & EntryAttributes.REPARSE_POINT)
        return matched, matched and not reparse

    if not search.files:
        return False, False
    return not search.has_pattern or search.is_match(name), False
