"""Enumeration backend using the native Windows Find* API through ctypes.

Only usable on Windows. Like the native API it reports "." and ".."
entries, which the collector skips.
"""

import ctypes
import os
import sys
from typing import Any

from dirlist.filesystem.backends.base import EnumerationBackend, RawEntry, strip_wildcard
from dirlist.filesystem.backends.scandir import raw_entry_from_stat
from dirlist.filesystem.timestamps import filetime_to_unix_ns, join_high_low

MAX_PATH = 260
FILE_ATTRIBUTE_DIRECTORY = 0x10
ERROR_NO_MORE_FILES = 18
INVALID_HANDLE_VALUE = ctypes.c_void_p(-1).value


class FILETIME(ctypes.Structure):
    _fields_ = [
        ("dwLowDateTime", ctypes.c_uint32),
        ("dwHighDateTime", ctypes.c_uint32),
    ]


class WIN32_FIND_DATAW(ctypes.Structure):
    _fields_ = [
        ("dwFileAttributes", ctypes.c_uint32),
        ("ftCreationTime", FILETIME),
        ("ftLastAccessTime", FILETIME),
        ("ftLastWriteTime", FILETIME),
        ("nFileSizeHigh", ctypes.c_uint32),
        ("nFileSizeLow", ctypes.c_uint32),
        ("dwReserved0", ctypes.c_uint32),
        ("dwReserved1", ctypes.c_uint32),
        ("cFileName", ctypes.c_wchar * MAX_PATH),
        ("cAlternateFileName", ctypes.c_wchar * 14),
    ]


def _filetime_ns(ft: FILETIME) -> int:
    return filetime_to_unix_ns(join_high_low(ft.dwHighDateTime, ft.dwLowDateTime))


def raw_entry_from_find_data(data: WIN32_FIND_DATAW) -> RawEntry:
    """Convert a WIN32_FIND_DATAW record into a RawEntry."""
    return RawEntry(
        name=data.cFileName,
        created_ns=_filetime_ns(data.ftCreationTime),
        accessed_ns=_filetime_ns(data.ftLastAccessTime),
        modified_ns=_filetime_ns(data.ftLastWriteTime),
        size=join_high_low(data.nFileSizeHigh, data.nFileSizeLow),
        is_directory=bool(data.dwFileAttributes & FILE_ATTRIBUTE_DIRECTORY),
    )


class _FindCursor:
    """Native find handle plus an entry read ahead by find_first."""

    __slots__ = ("handle", "pending")

    def __init__(self, handle: int, pending: RawEntry | None) -> None:
        self.handle = handle
        self.pending = pending


class Win32FindBackend(EnumerationBackend):
    """Enumerates directories with FindFirstFileW / FindNextFileW.

    Raises:
        RuntimeError: If instantiated on a platform other than Windows.
    """

    def __init__(self) -> None:
        if sys.platform != "win32":
            msg = "Win32FindBackend requires Windows"
            raise RuntimeError(msg)
        kernel32 = ctypes.WinDLL("kernel32", use_last_error=True)  # type: ignore[attr-defined]

        self._find_first = kernel32.FindFirstFileW
        self._find_first.argtypes = [ctypes.c_wchar_p, ctypes.POINTER(WIN32_FIND_DATAW)]
        self._find_first.restype = ctypes.c_void_p

        self._find_next = kernel32.FindNextFileW
        self._find_next.argtypes = [ctypes.c_void_p, ctypes.POINTER(WIN32_FIND_DATAW)]
        self._find_next.restype = ctypes.c_int

        self._find_close = kernel32.FindClose
        self._find_close.argtypes = [ctypes.c_void_p]
        self._find_close.restype = ctypes.c_int

    @property
    def name(self) -> str:
        return "win32"

    def find_first(self, pattern: str) -> tuple[Any, RawEntry]:
        data = WIN32_FIND_DATAW()
        handle = self._find_first(pattern, ctypes.byref(data))
        if handle is None or handle == INVALID_HANDLE_VALUE:
            raise ctypes.WinError(ctypes.get_last_error())  # type: ignore[attr-defined]

        first = raw_entry_from_find_data(data)
        if first.name == ".":
            return _FindCursor(handle, None), first

        # Drive roots have no "." entry; keep the first entry for find_next
        directory = strip_wildcard(pattern)
        try:
            own = raw_entry_from_stat(".", os.stat(directory))
        except OSError:
            self._find_close(handle)
            raise
        return _FindCursor(handle, first), own

    def find_next(self, cursor: Any) -> RawEntry | None:
        if cursor.pending is not None:
            entry, cursor.pending = cursor.pending, None
            return entry

        data = WIN32_FIND_DATAW()
        if self._find_next(cursor.handle, ctypes.byref(data)):
            return raw_entry_from_find_data(data)

        code = ctypes.get_last_error()  # type: ignore[attr-defined]
        if code == ERROR_NO_MORE_FILES:
            return None
        raise ctypes.WinError(code)  # type: ignore[attr-defined]

    def find_close(self, cursor: Any) -> None:
        self._find_close(cursor.handle)
