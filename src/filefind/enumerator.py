"""Lazy depth-first traversal engine using an explicit frontier of scan states.

Each directory being listed is a :class:`ScanState`. The frontier is an
ordered list of them: the active state is read entry by entry, and every
subdirectory it discovers is queued right after it and after the children it
already queued. When the active directory runs dry it is closed and removed,
and the state that slides into its slot takes over. A directory's whole
subtree is therefore finished before its next sibling starts, without
recursion and without holding more than one pending result.

A queued directory is only opened when it becomes the active state, and a
state is closed before the next one is activated, so the search holds at most
one OS handle at a time however wide the tree is. Errors raised while opening
or reading a directory propagate from the :meth:`move_next` call that visits
it. Every handle still held by the frontier is released by :meth:`close`, which
the iterator and context-manager protocols call for you.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Generic, TypeVar

from filefind.classifier import classify
from filefind.native import (
    DirectoryEnumerator,
    DirectoryOpener,
    EntryAttributes,
    RawEnumerator,
)
from filefind.options import SearchSpec

logger = logging.getLogger(__name__)

T = TypeVar("T")

_LINKED_DIRECTORY = EntryAttributes.DIRECTORY | EntryAttributes.REPARSE_POINT


@dataclass(frozen=True, slots=True)
class FoundEntry:
    """A single search result with its raw metadata.

    Attributes:
        path: Full path of the entry.
        name: Basename of the entry.
        is_dir: Whether the entry is a directory.
        attributes: Raw attribute flags.
        depth: Depth of the containing directory below the search root.
    """

    path: Path
    name: str
    is_dir: bool
    attributes: EntryAttributes
    depth: int


class ScanState:
    """One directory listing in progress plus its queued-children counter."""

    __slots__ = ("path", "depth", "enumerator", "spawned_subdirs", "_closed")

    def __init__(self, path: str, opener: DirectoryOpener, depth: int = 0) -> None:
        self.path = path
        self.depth = depth
        self.enumerator: RawEnumerator = opener(path)
        self.spawned_subdirs = 0
        self._closed = False

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.enumerator.close()

    def __repr__(self) -> str:
        return (
            f"ScanState({self.path!r}, depth={self.depth}, "
            f"spawned={self.spawned_subdirs})"
        )


class AllDirectoriesEnumerator(Generic[T]):
    """Pull-based recursive search over a directory tree.

    Subclasses decide what a result looks like by overriding
    :meth:`_make_result`.
    """

    def __init__(
        self,
        search: SearchSpec,
        opener: DirectoryOpener = DirectoryEnumerator,
    ) -> None:
        """Queue the search root.

        Args:
            search: Search options.
            opener: Factory returning a raw enumerator for a directory path.
        """
        self.search = search
        self._opener = opener
        self._states: list[ScanState] = []
        self._index = 0
        self._current: T | None = None
        self._open_root()

    # ------------------------------------------------------------------
    # Frontier bookkeeping
    # ------------------------------------------------------------------
    def _open_root(self) -> None:
        self._states.append(ScanState(self.search.root, self._opener))
        self._index = 0

    def _add_state(self, parent: ScanState) -> None:
        """Queue the parent's current entry after the parent's earlier children."""
        path = parent.enumerator.current
        state = ScanState(path, self._opener, parent.depth + 1)
        parent.spawned_subdirs += 1
        self._states.insert(self._index + parent.spawned_subdirs, state)
        logger.debug("Queued subdirectory: %s", path)

    def _next_state(self) -> None:
        """Drop the exhausted active state and pick the state to continue with."""
        self._states[self._index].close()
        del self._states[self._index]

        # An empty slot means nothing was queued after the finished state,
        # so fall back to the last state still pending.
        if self._index == len(self._states):
            self._index = max(len(self._states) - 1, 0)

    def _make_result(self, state: ScanState) -> T:
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def move_next(self) -> bool:
        """Advance to the next matching entry.

        Returns:
            bool: ``True`` when :attr:`current` holds a new result, ``False``
            once the tree is exhausted or the enumerator was closed.

        Raises:
            OSError: If a directory cannot be opened or read.
        """
        while self._states:
            state = self._states[self._index]
            raw = state.enumerator
            if not raw.move_next():
                self._next_state()
                continue

            name = raw.current_name
            attributes = raw.current_attributes
            found, subdirectory = classify(name, attributes, self.search)
            if subdirectory and self.search.recurse:
                self._add_state(state)
            elif found and (attributes & _LINKED_DIRECTORY) == _LINKED_DIRECTORY:
                logger.debug("Not descending into reparse point: %s", raw.current)
            if found:
                self._current = self._make_result(state)
                return True

        self._current = None
        return False

    @property
    def current(self) -> T | None:
        """The result produced by the last successful :meth:`move_next`."""
        return self._current

    @property
    def is_finished(self) -> bool:
        """Whether every directory of the search has been listed."""
        return not self._states

    def reset(self) -> None:
        """Release all handles and restart the search from the root."""
        self.close()
        self._open_root()

    def close(self) -> None:
        """Release every directory handle still held. Safe to call repeatedly."""
        if len(self._states) > 1:
            logger.debug("Releasing %d pending directories", len(self._states))
        for state in self._states:
            state.close()
        self._states.clear()
        self._current = None
        self._index = 0

    def __iter__(self) -> AllDirectoriesEnumerator[T]:
        return self

    def __next__(self) -> T:
        if self.move_next():
            return self._current  # type: ignore[return-value]
        raise StopIteration

    def __enter__(self) -> AllDirectoriesEnumerator[T]:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class PathEnumerator(AllDirectoriesEnumerator[str]):
    """Recursive search producing full path strings."""

    def _make_result(self, state: ScanState) -> str:
        return state.enumerator.current


class EntryEnumerator(AllDirectoriesEnumerator[FoundEntry]):
    """Recursive search producing :class:`FoundEntry` records."""

    def _make_result(self, state: ScanState) -> FoundEntry:
        raw = state.enumerator
        attributes = raw.current_attributes
        return FoundEntry(
            path=Path(raw.current),
            name=raw.current_name,
            is_dir=bool(attributes & EntryAttributes.DIRECTORY),
            attributes=attributes,
            depth=state.depth,
        )
