"""Directory enumeration and path parsing.

This module provides path normalization and parsing, directory handles
over pluggable enumeration backends, and recursive collection of
directory entries.
"""

from dirlist.filesystem.backends import EnumerationBackend, RawEntry, get_backend
from dirlist.filesystem.collector import collect
from dirlist.filesystem.handle import DirectoryHandle, get_info, open_directory
from dirlist.filesystem.models import EntryInfo, ExtensionFilter, make_extension_filter, total_size
from dirlist.filesystem.pathnames import base_name, extension, filename, normalize

__all__ = [
    "DirectoryHandle",
    "EntryInfo",
    "EnumerationBackend",
    "ExtensionFilter",
    "RawEntry",
    "base_name",
    "collect",
    "extension",
    "filename",
    "get_backend",
    "get_info",
    "make_extension_filter",
    "normalize",
    "open_directory",
    "total_size",
]
