"""Shared fixtures for filefind tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from filefind.native import EntryAttributes

DIR = EntryAttributes.DIRECTORY
LINK = EntryAttributes.DIRECTORY | EntryAttributes.REPARSE_POINT


class FakeFileSystem:
    """In-memory directory tree with deterministic listing order.

    ``tree`` maps a directory path to its ``(name, attributes)`` children in
    read order. Paths are joined with ``/``. Like the real enumerator, a
    directory is only opened by its first ``move_next``. Open and close calls
    are counted so tests can assert that no handle outlives the traversal.
    """

    def __init__(self, tree: dict[str, list[tuple[str, EntryAttributes]]]) -> None:
        self.tree = tree
        self.opened: list[str] = []
        self.open_handles = 0
        self.peak_handles = 0
        self.double_closes = 0
        self.unreadable: set[str] = set()

    def open(self, path: str) -> FakeEnumerator:
        return FakeEnumerator(self, path)

    def acquire(self, path: str) -> list[tuple[str, EntryAttributes]]:
        if path in self.unreadable:
            raise PermissionError(13, "Permission denied", path)
        if path not in self.tree:
            raise FileNotFoundError(2, "No such file or directory", path)
        self.opened.append(path)
        self.open_handles += 1
        self.peak_handles = max(self.peak_handles, self.open_handles)
        return list(self.tree[path])


class FakeEnumerator:
    def __init__(self, fs: FakeFileSystem, path: str) -> None:
        self._fs = fs
        self._path = path
        self._children: list[tuple[str, EntryAttributes]] | None = None
        self._pos = -1
        self.closed = False

    def move_next(self) -> bool:
        if self.closed:
            return False
        if self._children is None:
            self._children = self._fs.acquire(self._path)
        self._pos += 1
        return self._pos < len(self._children)

    @property
    def current(self) -> str | None:
        name = self.current_name
        return None if name is None else f"{self._path}/{name}"

    @property
    def current_name(self) -> str | None:
        if self._children and 0 <= self._pos < len(self._children):
            return self._children[self._pos][0]
        return None

    @property
    def current_attributes(self) -> EntryAttributes:
        if self._children and 0 <= self._pos < len(self._children):
            return self._children[self._pos][1]
        return EntryAttributes.NONE

    def close(self) -> None:
        if self.closed:
            self._fs.double_closes += 1
            return
        self.closed = True
        if self._children is not None:
            self._fs.open_handles -= 1


@pytest.fixture
def fake_tree() -> FakeFileSystem:
    """Fake tree used by the ordering and disposal tests.

    Structure (read order)::

        /r/
        ├── A/
        │   ├── a1.txt
        │   └── A1/
        │       └── deep.txt
        ├── B/
        ├── f.txt
        └── C/
            └── c1.txt
    """
    return FakeFileSystem(
        {
            "/r": [("A", DIR), ("B", DIR), ("f.txt", EntryAttributes.NONE), ("C", DIR)],
            "/r/A": [("a1.txt", EntryAttributes.NONE), ("A1", DIR)],
            "/r/A/A1": [("deep.txt", EntryAttributes.NONE)],
            "/r/B": [],
            "/r/C": [("c1.txt", EntryAttributes.NONE)],
        }
    )


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Create a standard test directory tree.

    Structure::

        root/
        ├── docs/
        │   └── guide.md
        ├── src/
        │   ├── api/
        │   │   ├── auth.py
        │   │   └── user.py
        │   └── models/
        │       └── user.py
        ├── logs/
        │   ├── a.log
        │   ├── b.txt
        │   └── c.log/
        │       └── inner.txt
        └── README.md
    """
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "guide.md").write_text("guide")
    (tmp_path / "src" / "api").mkdir(parents=True)
    (tmp_path / "src" / "api" / "auth.py").write_text("auth")
    (tmp_path / "src" / "api" / "user.py").write_text("user")
    (tmp_path / "src" / "models").mkdir()
    (tmp_path / "src" / "models" / "user.py").write_text("user")
    (tmp_path / "logs" / "c.log").mkdir(parents=True)
    (tmp_path / "logs" / "a.log").write_text("a")
    (tmp_path / "logs" / "b.txt").write_text("b")
    (tmp_path / "logs" / "c.log" / "inner.txt").write_text("inner")
    (tmp_path / "README.md").write_text("readme")
    return tmp_path


def relative_paths(root: Path, paths: list[str]) -> list[str]:
    """Return ``paths`` relative to ``root`` with ``/`` separators."""
    return [Path(os.path.relpath(p, root)).as_posix() for p in paths]
