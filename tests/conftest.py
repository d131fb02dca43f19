"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
from dirlist.filesystem.backends import EnumerationBackend, RawEntry
from dirlist.filesystem.backends.base import strip_wildcard

# Nested mapping: name -> int (file size) or dict (subdirectory)
Tree = dict[str, Any]


class FakeBackend(EnumerationBackend):
    """In-memory enumeration backend for deterministic tests.

    Directories are looked up by their normalized path. Paths listed in
    ``fail_open`` raise PermissionError from find_first; paths listed in
    ``fail_next`` raise OSError after yielding their entries.
    """

    def __init__(
        self,
        tree: Tree,
        root: str = "root/",
        *,
        fail_open: set[str] | None = None,
        fail_next: set[str] | None = None,
        emit_dot_entries: bool = False,
    ) -> None:
        self._dirs: dict[str, list[RawEntry]] = {}
        self._files: set[str] = set()
        self._index(root, tree)
        self.fail_open = fail_open or set()
        self.fail_next = fail_next or set()
        self.emit_dot_entries = emit_dot_entries
        self.open_cursors: set[int] = set()
        self.opened: list[str] = []
        self.closed: list[str] = []

    @property
    def name(self) -> str:
        return "fake"

    def _index(self, directory: str, tree: Tree) -> None:
        entries: list[RawEntry] = []
        for name, value in tree.items():
            is_dir = isinstance(value, dict)
            entries.append(
                RawEntry(
                    name=name,
                    created_ns=1_000,
                    accessed_ns=2_000,
                    modified_ns=3_000,
                    size=0 if is_dir else value,
                    is_directory=is_dir,
                )
            )
            if is_dir:
                self._index(f"{directory}{name}/", value)
            else:
                self._files.add(f"{directory}{name}/")
        self._dirs[directory] = entries

    def find_first(self, pattern: str) -> tuple[Any, RawEntry]:
        directory = strip_wildcard(pattern)
        if directory in self.fail_open:
            raise PermissionError(13, "Permission denied", directory)
        if directory in self._files:
            raise NotADirectoryError(20, "Not a directory", directory)
        if directory not in self._dirs:
            raise FileNotFoundError(2, "No such file or directory", directory)

        entries = list(self._dirs[directory])
        if self.emit_dot_entries:
            # "." is reported by find_first, ".." comes first from find_next
            entries = [RawEntry("..", 1, 2, 3, 0, True), *entries]
        cursor = _FakeCursor(directory, iter(entries))
        self.open_cursors.add(id(cursor))
        self.opened.append(directory)
        return cursor, RawEntry(".", 10, 20, 30, 0, True)

    def find_next(self, cursor: Any) -> RawEntry | None:
        entry = next(cursor.entries, None)
        if entry is None and cursor.directory in self.fail_next:
            raise OSError(5, "Input/output error", cursor.directory)
        return entry

    def find_close(self, cursor: Any) -> None:
        self.open_cursors.discard(id(cursor))
        self.closed.append(cursor.directory)


class _FakeCursor:
    def __init__(self, directory: str, entries: Iterator[RawEntry]) -> None:
        self.directory = directory
        self.entries = entries


@pytest.fixture
def fake_backend_factory() -> type[FakeBackend]:
    """The FakeBackend class, for tests that build their own trees."""
    return FakeBackend


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Directory tree with a.txt, b.md, sub/c.log and sub/.hidden."""
    root = tmp_path / "tree"
    sub = root / "sub"
    sub.mkdir(parents=True)
    (root / "a.txt").write_text("alpha")
    (root / "b.md").write_text("# bravo")
    (sub / "c.log").write_text("charlie log")
    (sub / ".hidden").write_text("secret")
    return root
