"""Low-level directory enumeration over ``os.scandir``."""

from __future__ import annotations

import enum
import logging
import os
from collections.abc import Callable
from typing import Protocol

logger = logging.getLogger(__name__)


class EntryAttributes(enum.IntFlag):
    """Attribute flags reported for a raw directory entry.

    ``HIDDEN`` is informational: it is reported through ``FoundEntry`` but
    plays no part in classification.
    """

    NONE = 0
    DIRECTORY = enum.auto()
    REPARSE_POINT = enum.auto()
    HIDDEN = enum.auto()


class RawEnumerator(Protocol):
    """Protocol for a single-directory entry enumerator.

    Keeps the traversal engine decoupled from the OS primitives.
    """

    def move_next(self) -> bool: ...

    @property
    def current(self) -> str | None: ...

    @property
    def current_name(self) -> str | None: ...

    @property
    def current_attributes(self) -> EntryAttributes: ...

    def close(self) -> None: ...


DirectoryOpener = Callable[[str], RawEnumerator]


def entry_attributes(dir_entry: os.DirEntry[str]) -> EntryAttributes:
    """Derive attribute flags for a scandir entry.

    A link to a directory reports both ``DIRECTORY`` and ``REPARSE_POINT``,
    the same way a directory symlink or junction does on Windows.

    Raises:
        OSError: If the entry cannot be stat'ed.
    """
    attributes = EntryAttributes.NONE
    if dir_entry.is_dir():
        attributes |= EntryAttributes.DIRECTORY
    if dir_entry.is_symlink() or dir_entry.is_junction():
        attributes |= EntryAttributes.REPARSE_POINT
    if dir_entry.name.startswith("."):
        attributes |= EntryAttributes.HIDDEN
    return attributes


class DirectoryEnumerator:
    """Enumerate the entries of one directory, one at a time.

    The OS handle is opened by the first :meth:`move_next` and released by
    :meth:`close`, so a queued but unvisited directory holds no handle.
    Errors opening or reading the directory are raised to the caller.
    """

    def __init__(self, directory: str) -> None:
        """Bind the enumerator to ``directory`` without opening it yet.

        Args:
            directory: Directory path to list.
        """
        self.directory = directory
        self._iterator: os.ScandirIterator[str] | None = None
        self._entry: os.DirEntry[str] | None = None
        self._attributes = EntryAttributes.NONE
        self._closed = False

    def __enter__(self) -> DirectoryEnumerator:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def move_next(self) -> bool:
        """Advance to the next readable entry.

        Entries whose attributes cannot be read are skipped.

        Returns:
            bool: ``True`` when an entry is available, ``False`` when the
            directory is exhausted or the enumerator was closed.

        Raises:
            OSError: If the directory is missing, not a directory, or
                unreadable.
        """
        if self._closed:
            return False
        if self._iterator is None:
            self._iterator = os.scandir(self.directory)
            logger.debug("Opened directory: %s", self.directory)
        for dir_entry in self._iterator:
            try:
                self._attributes = entry_attributes(dir_entry)
            except OSError:
                logger.debug("Cannot stat: %s", dir_entry.path)
                continue
            self._entry = dir_entry
            return True
        self._entry = None
        self._attributes = EntryAttributes.NONE
        return False

    @property
    def current(self) -> str | None:
        """Full path of the current entry."""
        return self._entry.path if self._entry is not None else None

    @property
    def current_name(self) -> str | None:
        """Name of the current entry."""
        return self._entry.name if self._entry is not None else None

    @property
    def current_attributes(self) -> EntryAttributes:
        """Attribute flags of the current entry."""
        return self._attributes

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def is_open(self) -> bool:
        """Whether an OS handle is currently held."""
        return self._iterator is not None

    def close(self) -> None:
        """Release the directory handle, if one was opened. Safe to call repeatedly."""
        self._closed = True
        if self._iterator is None:
            return
        self._iterator.close()
        self._iterator = None
        self._entry = None
        logger.debug("Closed directory: %s", self.directory)
