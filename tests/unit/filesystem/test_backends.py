"""Tests for enumeration backends."""

import sys
from pathlib import Path

import pytest
from dirlist.filesystem.backends import ScandirBackend, Win32FindBackend, get_backend
from dirlist.filesystem.backends.base import strip_wildcard
from dirlist.filesystem.backends.win32 import (
    FILE_ATTRIBUTE_DIRECTORY,
    WIN32_FIND_DATAW,
    raw_entry_from_find_data,
)
from dirlist.filesystem.timestamps import FILETIME_EPOCH_OFFSET


class TestGetBackend:
    """Tests for get_backend factory."""

    def test_auto_is_scandir(self) -> None:
        """auto picks the scandir backend."""
        assert isinstance(get_backend("auto"), ScandirBackend)

    def test_scandir(self) -> None:
        """scandir is available by name."""
        assert get_backend("scandir").name == "scandir"

    def test_unknown_name(self) -> None:
        """Unknown names raise ValueError."""
        with pytest.raises(ValueError, match="Unknown enumeration backend"):
            get_backend("ftp")  # type: ignore[arg-type]

    @pytest.mark.skipif(sys.platform == "win32", reason="checks non-Windows behaviour")
    def test_win32_outside_windows(self) -> None:
        """The Windows backend refuses to load elsewhere."""
        with pytest.raises(RuntimeError, match="requires Windows"):
            get_backend("win32")


class TestScandirBackend:
    """Tests for ScandirBackend."""

    def test_strip_wildcard(self) -> None:
        """The trailing wildcard is removed from a pattern."""
        assert strip_wildcard("data/*") == "data/"
        assert strip_wildcard("data/") == "data/"

    def test_lists_entries(self, sample_tree: Path) -> None:
        """All children are reported, without dot entries."""
        backend = ScandirBackend()
        cursor, own = backend.find_first(str(sample_tree) + "/*")
        names = []
        while (entry := backend.find_next(cursor)) is not None:
            names.append(entry.name)
        backend.find_close(cursor)

        assert own.is_directory
        assert sorted(names) == ["a.txt", "b.md", "sub"]

    def test_missing_directory(self, tmp_path: Path) -> None:
        """A missing directory raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            ScandirBackend().find_first(str(tmp_path / "missing") + "/*")

    def test_regular_file(self, sample_tree: Path) -> None:
        """A regular file raises NotADirectoryError."""
        with pytest.raises(NotADirectoryError):
            ScandirBackend().find_first(str(sample_tree / "a.txt") + "/*")

    @pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")
    def test_dangling_symlink(self, tmp_path: Path) -> None:
        """A dangling symlink is reported as a non-directory entry."""
        (tmp_path / "broken").symlink_to(tmp_path / "nowhere")
        backend = ScandirBackend()
        cursor, _ = backend.find_first(str(tmp_path) + "/*")
        entry = backend.find_next(cursor)
        backend.find_close(cursor)

        assert entry is not None
        assert entry.name == "broken"
        assert entry.is_directory is False


class TestWin32FindData:
    """Tests for WIN32_FIND_DATAW conversion."""

    def test_file_record(self) -> None:
        """Sizes and timestamps are joined from their 32-bit halves."""
        data = WIN32_FIND_DATAW()
        data.cFileName = "report.txt"
        data.nFileSizeHigh = 1
        data.nFileSizeLow = 5
        data.ftLastWriteTime.dwLowDateTime = FILETIME_EPOCH_OFFSET & 0xFFFFFFFF
        data.ftLastWriteTime.dwHighDateTime = FILETIME_EPOCH_OFFSET >> 32

        entry = raw_entry_from_find_data(data)

        assert entry.name == "report.txt"
        assert entry.size == (1 << 32) + 5
        assert entry.modified_ns == 0
        assert entry.is_directory is False

    def test_directory_attribute(self) -> None:
        """The directory attribute sets is_directory."""
        data = WIN32_FIND_DATAW()
        data.cFileName = "sub"
        data.dwFileAttributes = FILE_ATTRIBUTE_DIRECTORY

        assert raw_entry_from_find_data(data).is_directory is True


@pytest.mark.skipif(sys.platform != "win32", reason="requires Windows")
class TestWin32FindBackend:
    """Tests for Win32FindBackend on Windows."""

    def test_lists_entries_with_dot_dot(self, sample_tree: Path) -> None:
        """The native API reports ".." alongside the children."""
        backend = Win32FindBackend()
        cursor, own = backend.find_first(str(sample_tree).replace("\\", "/") + "/*")
        names = []
        while (entry := backend.find_next(cursor)) is not None:
            names.append(entry.name)
        backend.find_close(cursor)

        assert own.is_directory
        assert sorted(names) == ["..", "a.txt", "b.md", "sub"]

    def test_missing_directory(self, tmp_path: Path) -> None:
        """A missing directory raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            Win32FindBackend().find_first(str(tmp_path / "missing") + "/*")
