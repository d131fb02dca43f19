"""Enumeration backend built on os.scandir.

Works on every platform Python supports. Unlike the native Windows API
it never reports "." or "..".
"""

import os
import stat
from typing import Any

from dirlist.filesystem.backends.base import EnumerationBackend, RawEntry, strip_wildcard


def _created_ns(st: os.stat_result) -> int:
    # st_birthtime_ns is only available on some platforms
    birth = getattr(st, "st_birthtime_ns", None)
    return birth if birth is not None else st.st_ctime_ns


def raw_entry_from_stat(name: str, st: os.stat_result) -> RawEntry:
    """Build a RawEntry from a stat result.

    Directories are reported with size 0, as the native Windows API does.
    """
    is_directory = stat.S_ISDIR(st.st_mode)
    return RawEntry(
        name=name,
        created_ns=_created_ns(st),
        accessed_ns=st.st_atime_ns,
        modified_ns=st.st_mtime_ns,
        size=0 if is_directory else st.st_size,
        is_directory=is_directory,
    )


class ScandirBackend(EnumerationBackend):
    """Enumerates directories with os.scandir.

    The cursor is the ``os.scandir`` iterator itself.
    """

    @property
    def name(self) -> str:
        return "scandir"

    def find_first(self, pattern: str) -> tuple[Any, RawEntry]:
        directory = strip_wildcard(pattern) or "."
        own = raw_entry_from_stat(".", os.stat(directory))
        if not own.is_directory:
            msg = "Not a directory"
            raise NotADirectoryError(20, msg, directory)
        return os.scandir(directory), own

    def find_next(self, cursor: Any) -> RawEntry | None:
        entry = next(cursor, None)
        if entry is None:
            return None
        try:
            st = entry.stat()
        except FileNotFoundError:
            # Dangling symlink: describe the link itself
            st = entry.stat(follow_symlinks=False)
        return raw_entry_from_stat(entry.name, st)

    def find_close(self, cursor: Any) -> None:
        cursor.close()
