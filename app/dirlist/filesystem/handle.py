"""Directory handle wrapping a single open enumeration cursor.

A handle is either open (it owns a live backend cursor) or closed (the
cursor is None). Opening normalizes the path and starts enumeration;
advancing yields one EntryInfo per call; closing releases the cursor.

Handles are not thread-safe. Using one handle from several threads at
once is a caller error and is not guarded against.
"""

import logging
from collections.abc import Iterator
from types import TracebackType
from typing import Any, Self

from dirlist.core.config import Settings
from dirlist.core.errors import DirError, ErrorKind, HandleClosedError
from dirlist.filesystem.backends import EnumerationBackend, RawEntry, get_backend
from dirlist.filesystem.models import EntryInfo
from dirlist.filesystem.pathnames import normalize

logger = logging.getLogger(__name__)

WILDCARD = "*"


class DirectoryHandle:
    """Open enumeration cursor over one directory.

    Instances are created by ``open_directory`` or ``get_info``. Use the
    handle as a context manager to close it on every exit path, or call
    ``close`` explicitly exactly once per successful open.

    Attributes:
        normalized_path: Directory path ending in "/"; "" once released.
        created_ns: Directory creation time in Unix nanoseconds.
        accessed_ns: Directory last access time in Unix nanoseconds.
        modified_ns: Directory last modification time in Unix nanoseconds.
        error: Failure raised by the backend while advancing, if any.
    """

    def __init__(
        self,
        normalized_path: str,
        cursor: Any,
        backend: EnumerationBackend,
        own: RawEntry,
    ) -> None:
        self.normalized_path = normalized_path
        self.created_ns = own.created_ns
        self.accessed_ns = own.accessed_ns
        self.modified_ns = own.modified_ns
        self.error: DirError | None = None
        self._cursor = cursor
        self._backend = backend

    @property
    def is_open(self) -> bool:
        return self._cursor is not None

    def advance(self) -> EntryInfo | None:
        """Return the next entry, or None when enumeration is exhausted.

        A backend failure also ends enumeration; it is recorded in
        ``error`` with kind READ_ERROR so callers can tell it apart from
        normal exhaustion.

        Raises:
            HandleClosedError: If the handle is closed.
        """
        if self._cursor is None:
            msg = f"Cannot advance a closed directory handle: {self.normalized_path!r}"
            raise HandleClosedError(msg)

        try:
            raw = self._backend.find_next(self._cursor)
        except OSError as e:
            logger.warning("Enumeration failed in %s: %s", self.normalized_path, e)
            self.error = DirError(ErrorKind.READ_ERROR, self.normalized_path, str(e))
            return None

        if raw is None:
            return None

        return EntryInfo(
            path=self.normalized_path + raw.name,
            created_ns=raw.created_ns,
            accessed_ns=raw.accessed_ns,
            modified_ns=raw.modified_ns,
            size=raw.size,
            is_directory=raw.is_directory,
        )

    def close(self, release_path: bool = False) -> None:
        """Release the backend cursor. Closing a closed handle does nothing.

        Args:
            release_path: Also drop the owned path string.
        """
        if self._cursor is not None:
            cursor, self._cursor = self._cursor, None
            self._backend.find_close(cursor)
            logger.debug("Closed directory %s", self.normalized_path)
        if release_path:
            self.normalized_path = ""

    def __iter__(self) -> Iterator[EntryInfo]:
        while (entry := self.advance()) is not None:
            yield entry

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close(release_path=True)

    def __repr__(self) -> str:
        state = "open" if self.is_open else "closed"
        return f"DirectoryHandle({self.normalized_path!r}, {state})"


def _classify(exc: OSError) -> ErrorKind:
    if isinstance(exc, NotADirectoryError):
        return ErrorKind.NOT_A_DIRECTORY
    return ErrorKind.CANNOT_OPEN


def open_directory(
    path: str,
    *,
    backend: EnumerationBackend | None = None,
    settings: Settings | None = None,
) -> tuple[DirectoryHandle | None, DirError | None]:
    """Open a directory for enumeration.

    Args:
        path: Directory path; "\\" separators are accepted.
        backend: Enumeration backend. Defaults to the one named in settings.
        settings: Settings used to pick the backend when none is given.

    Returns:
        Tuple of (open handle, None) on success, or (None, error) with kind
        CANNOT_OPEN or NOT_A_DIRECTORY. No cursor is left open on failure.
    """
    if backend is None:
        backend = get_backend(settings.backend if settings is not None else "auto")
    return open_normalized(normalize(path), backend)


def open_normalized(
    normalized: str,
    backend: EnumerationBackend,
) -> tuple[DirectoryHandle | None, DirError | None]:
    """Open a directory whose path already ends in exactly one "/".

    The path is used as given. Backslashes are part of the name here,
    which matters on POSIX where they are legal in file names.
    """
    try:
        cursor, own = backend.find_first(normalized + WILDCARD)
    except OSError as e:
        kind = _classify(e)
        logger.warning("Cannot open directory %s: %s", normalized, e)
        return None, DirError(kind, normalized, e.strerror or str(e))

    if not own.is_directory:
        backend.find_close(cursor)
        logger.warning("Not a directory: %s", normalized)
        return None, DirError(ErrorKind.NOT_A_DIRECTORY, normalized, "Not a directory")

    logger.debug("Opened directory %s", normalized)
    return DirectoryHandle(normalized, cursor, backend, own), None


def get_info(
    path: str,
    *,
    backend: EnumerationBackend | None = None,
    settings: Settings | None = None,
) -> tuple[DirectoryHandle | None, DirError | None]:
    """Return a closed handle carrying the directory's own metadata.

    The handle keeps its normalized path but holds no cursor.
    """
    handle, error = open_directory(path, backend=backend, settings=settings)
    if handle is not None:
        handle.close(release_path=False)
    return handle, error
