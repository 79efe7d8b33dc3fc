"""Entry name matching: wildcard patterns via pathspec, or regular expressions."""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Protocol

from pathspec import GitIgnoreSpec


class NameMatcher(Protocol):
    """Protocol for entry name matching."""

    def is_match(self, name: str) -> bool: ...


class WildcardMatcher:
    """Match entry names against wildcard patterns.

    Patterns use gitignore wildcard syntax, so ``*.log`` matches any name
    ending in ``.log`` and ``!keep.log`` re-excludes a name matched by an
    earlier pattern. Patterns are matched against bare entry names, so
    path patterns (``src/*.py``) and directory-only patterns (``build/``)
    are rejected rather than silently never matching.
    """

    def __init__(self, patterns: Iterable[str], ignore_case: bool = False) -> None:
        """Initialize wildcard matcher.

        Args:
            patterns: Wildcard pattern list.
            ignore_case: Whether to compare names case-insensitively.

        Raises:
            ValueError: If a pattern contains a path separator.
        """
        self._ignore_case = ignore_case
        self.patterns: list[str] = [
            pat.lower() if ignore_case else pat for pat in patterns
        ]
        for pat in self.patterns:
            if "/" in pat:
                raise ValueError(
                    f"Invalid pattern '{pat}': patterns match entry names "
                    "and cannot contain '/'"
                )
        self._spec = GitIgnoreSpec.from_lines(self.patterns)

    def is_match(self, name: str) -> bool:
        """Return whether ``name`` matches the configured patterns.

        Args:
            name: Entry name (no directory components).

        Returns:
            bool: ``True`` when the patterns select the name.
        """
        if self._ignore_case:
            name = name.lower()
        return self._spec.match_file(name)


class RegexMatcher:
    """Match entry names with a regular expression (``re.search`` semantics)."""

    def __init__(self, pattern: str, ignore_case: bool = False) -> None:
        """Compile ``pattern``.

        Raises:
            ValueError: If the expression does not compile.
        """
        flags = re.IGNORECASE if ignore_case else 0
        try:
            self._regex = re.compile(pattern, flags)
        except re.error as exc:
            raise ValueError(f"Invalid regular expression '{pattern}': {exc}") from exc

    @property
    def pattern(self) -> str:
        return self._regex.pattern

    def is_match(self, name: str) -> bool:
        return self._regex.search(name) is not None


def compile_matcher(
    patterns: Iterable[str] | None,
    *,
    regex: bool = False,
    ignore_case: bool = False,
) -> NameMatcher | None:
    """Build a matcher from user patterns.

    Several regular expressions are combined as alternatives.

    Args:
        patterns: Wildcard patterns, or regular expressions when ``regex``
            is set.
        regex: Treat patterns as regular expressions.
        ignore_case: Compare names case-insensitively.

    Returns:
        NameMatcher | None: ``None`` when no pattern was given.

    Raises:
        ValueError: If a regular expression is invalid, or a wildcard
            pattern contains a path separator.
    """
    pattern_list = [pat for pat in patterns or [] if pat]
    if not pattern_list:
        return None
    if regex:
        if len(pattern_list) == 1:
            combined = pattern_list[0]
        else:
            combined = "|".join(f"(?:{pat})" for pat in pattern_list)
        return RegexMatcher(combined, ignore_case=ignore_case)
    return WildcardMatcher(pattern_list, ignore_case=ignore_case)
