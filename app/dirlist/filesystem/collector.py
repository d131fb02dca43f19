"""Recursive collection of directory entries.

Drives one DirectoryHandle per visited directory to build a flat list
of entries, filtered by type and extension.

Entries appear in pre-order: a directory precedes everything found
below it. Siblings appear in whatever order the enumeration backend
yields them, which depends on the OS and filesystem and is not sorted.
"""

import logging
from collections.abc import Iterable

from dirlist.core.config import Settings
from dirlist.core.errors import DirError
from dirlist.filesystem.backends import EnumerationBackend, get_backend
from dirlist.filesystem.handle import open_normalized
from dirlist.filesystem.models import EntryInfo, ExtensionFilter, make_extension_filter
from dirlist.filesystem.pathnames import SEPARATOR, is_dot_name, normalize

logger = logging.getLogger(__name__)


def _accepts(entry: EntryInfo, only_files: bool, extensions: ExtensionFilter) -> bool:
    """Inclusion test for a single non-dot entry."""
    if entry.is_directory:
        return not only_files
    if not extensions:
        return True
    return entry.extension[1:] in extensions


def _collect_into(
    out: list[EntryInfo],
    normalized: str,
    only_files: bool,
    recurse: bool,
    extensions: ExtensionFilter,
    backend: EnumerationBackend,
) -> DirError | None:
    """Append accepted entries below ``normalized`` to ``out``.

    Child paths are built from enumerated names and are not normalized
    again, so names containing "\\" survive on POSIX.

    Returns:
        The first error met at this level or any level below, else None.
    """
    handle, error = open_normalized(normalized, backend)
    if handle is None:
        return error

    with handle:
        for entry in handle:
            # Hidden directories, "." and ".." are neither listed nor entered
            if entry.is_directory and is_dot_name(entry.filename):
                continue

            if _accepts(entry, only_files, extensions):
                out.append(entry)

            if recurse and entry.is_directory:
                logger.debug("Descending into %s", entry.path)
                child = entry.path + SEPARATOR
                error = _collect_into(out, child, only_files, recurse, extensions, backend)
                if error is not None:
                    return error

        return handle.error


def collect(
    path: str,
    only_files: bool = False,
    recurse: bool = False,
    extensions: Iterable[str] | None = None,
    *,
    backend: EnumerationBackend | None = None,
    settings: Settings | None = None,
) -> tuple[list[EntryInfo] | None, DirError | None]:
    """Collect the entries of a directory, optionally recursing.

    Args:
        path: Directory to enumerate.
        only_files: Leave directories out of the result. They are still
            entered when ``recurse`` is set.
        recurse: Descend into non-hidden subdirectories.
        extensions: Extensions to accept for files, with or without the
            leading dot and matched case-sensitively. Empty accepts every
            file. None falls back to ``settings.default_extensions``.
        backend: Enumeration backend. Defaults to the one named in settings.
        settings: Library settings; defaults are used when omitted.

    Returns:
        Tuple of (entries, None) on success, or (None, error) for the first
        failure at any depth. Partial results are never returned.
    """
    settings = settings or Settings()
    if extensions is None:
        extensions = settings.default_extensions
    if backend is None:
        backend = get_backend(settings.backend)

    entries: list[EntryInfo] = []
    error = _collect_into(
        entries, normalize(path), only_files, recurse, make_extension_filter(extensions), backend
    )
    if error is not None:
        logger.warning("Collection of %s aborted: %s", path, error)
        return None, error

    logger.debug("Collected %d entries from %s", len(entries), path)
    return entries, None
