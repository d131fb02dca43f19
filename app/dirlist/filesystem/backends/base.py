"""Abstract base class for directory enumeration backends.

This module defines the EnumerationBackend interface wrapping a native
find-first / find-next / find-close style directory listing primitive.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class RawEntry:
    """Entry as reported by the enumeration primitive.

    Attributes:
        name: Entry name relative to the enumerated directory.
        created_ns: Creation time in nanoseconds since the Unix epoch.
        accessed_ns: Last access time in nanoseconds since the Unix epoch.
        modified_ns: Last modification time in nanoseconds since the Unix epoch.
        size: Size in bytes.
        is_directory: Whether the directory attribute is set.
    """

    name: str
    created_ns: int
    accessed_ns: int
    modified_ns: int
    size: int
    is_directory: bool


class EnumerationBackend(ABC):
    """Abstract base class for all enumeration backends.

    Backends report failures by raising OSError subclasses
    (FileNotFoundError, PermissionError, NotADirectoryError, ...).
    Callers are responsible for matching every successful find_first
    with exactly one find_close.

    Example:
        >>> backend = ScandirBackend()
        >>> cursor, own = backend.find_first("data/*")
        >>> while (entry := backend.find_next(cursor)) is not None:
        ...     print(entry.name)
        >>> backend.find_close(cursor)
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the backend identifier used in settings."""

    @abstractmethod
    def find_first(self, pattern: str) -> tuple[Any, RawEntry]:
        """Start enumerating the directory named by ``pattern``.

        Args:
            pattern: Normalized directory path followed by the "*" wildcard.

        Returns:
            Tuple of (cursor, entry describing the directory itself).

        Raises:
            OSError: If the directory cannot be enumerated.
        """

    @abstractmethod
    def find_next(self, cursor: Any) -> RawEntry | None:
        """Return the next entry, or None when enumeration is exhausted.

        Raises:
            OSError: If the enumeration primitive fails.
        """

    @abstractmethod
    def find_close(self, cursor: Any) -> None:
        """Release the cursor returned by find_first."""


def strip_wildcard(pattern: str) -> str:
    """Return the directory part of a "dir/*" pattern."""
    return pattern[:-1] if pattern.endswith("*") else pattern
