"""Search options shared by the classifier and the traversal engine."""

from __future__ import annotations

from dataclasses import dataclass

from filefind.matcher import NameMatcher


@dataclass(frozen=True, slots=True)
class SearchSpec:
    """Immutable description of one search.

    Attributes:
        root: Directory the search starts in.
        files: Whether files are produced as results.
        subdirs: Whether directories are produced as results and descended.
        recurse: Whether the search walks below ``root``.
        matcher: Optional name matcher. ``None`` means every name matches.
    """

    root: str
    files: bool = True
    subdirs: bool = True
    recurse: bool = True
    matcher: NameMatcher | None = None

    @property
    def has_pattern(self) -> bool:
        return self.matcher is not None

    def is_match(self, name: str) -> bool:
        """Return whether ``name`` passes the configured pattern, if any."""
        return self.matcher is None or self.matcher.is_match(name)
