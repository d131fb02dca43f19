"""dirlist: directory enumeration, path parsing and line reading."""

from dirlist.core.config import Settings, load_settings, load_settings_or_default
from dirlist.core.errors import DirError, ErrorKind, HandleClosedError
from dirlist.filesystem import (
    DirectoryHandle,
    EntryInfo,
    base_name,
    collect,
    extension,
    filename,
    get_info,
    normalize,
    open_directory,
)
from dirlist.reader import read_all_lines, read_line

__version__ = "0.1.0"

__all__ = [
    "DirError",
    "DirectoryHandle",
    "EntryInfo",
    "ErrorKind",
    "HandleClosedError",
    "Settings",
    "base_name",
    "collect",
    "extension",
    "filename",
    "get_info",
    "load_settings",
    "load_settings_or_default",
    "normalize",
    "open_directory",
    "read_all_lines",
    "read_line",
]
