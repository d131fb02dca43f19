"""Filesystem domain models for directory enumeration.

This module defines the data structures returned by directory handles
and the recursive collector.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from dirlist.filesystem import pathnames
from dirlist.filesystem.timestamps import ns_to_datetime

# Set of extensions without their leading dot, e.g. {"txt", "log"}
ExtensionFilter = frozenset[str]


@dataclass(frozen=True, slots=True)
class EntryInfo:
    """A single entry produced by directory enumeration.

    This is an immutable value holding no operating system resources,
    so it can be shared freely between threads once returned.

    Attributes:
        path: Full path of the entry using "/" separators.
        created_ns: Creation time in nanoseconds since the Unix epoch.
        accessed_ns: Last access time in nanoseconds since the Unix epoch.
        modified_ns: Last modification time in nanoseconds since the Unix epoch.
        size: Size in bytes (0 for directories on most platforms).
        is_directory: Whether the entry is a directory.
    """

    path: str
    created_ns: int
    accessed_ns: int
    modified_ns: int
    size: int
    is_directory: bool

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)
        if not (0 <= self.size < 2**64):
            msg = f"Size must be an unsigned 64-bit value, got {self.size}"
            raise ValueError(msg)

    @property
    def filename(self) -> str:
        return pathnames.filename(self)

    @property
    def base_name(self) -> str:
        return pathnames.base_name(self)

    @property
    def extension(self) -> str:
        return pathnames.extension(self)

    @property
    def modified_at(self) -> datetime:
        """Modification time as an aware UTC datetime."""
        return ns_to_datetime(self.modified_ns)


def make_extension_filter(extensions: Iterable[str] | None) -> ExtensionFilter:
    """Build an extension filter, dropping any leading dots.

    Args:
        extensions: Extensions such as "txt" or ".txt". None means no filter.

    Returns:
        Frozen set of extensions without dots. Empty means accept all files.
    """
    if extensions is None:
        return frozenset()
    if isinstance(extensions, str):
        extensions = (extensions,)
    return frozenset(ext.lstrip(".") for ext in extensions if ext.lstrip("."))


def total_size(entries: Iterable[EntryInfo]) -> int:
    """Sum the sizes of all file entries, skipping directories."""
    return sum(entry.size for entry in entries if not entry.is_directory)
