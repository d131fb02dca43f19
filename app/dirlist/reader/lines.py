"""Buffered line reading over an already-open file handle.

The reader keeps no state of its own between calls: after each line it
seeks the handle back to just past the line terminator, so the handle's
position is the only thing carried from one call to the next. The
handle is never opened or closed here.

Lines end at "\\n" or "\\r\\n". A lone "\\r" is ordinary content.
"""

import logging
import os
from typing import IO, AnyStr

from dirlist.core.config import DEFAULT_READ_BUFFER_SIZE, Settings
from dirlist.core.errors import DirError, ErrorKind

logger = logging.getLogger(__name__)


def _handle_name(handle: IO[AnyStr]) -> str:
    name = getattr(handle, "name", "")
    return name if isinstance(name, str) else ""


def _decode(data: bytes | str, encoding: str) -> str:
    if isinstance(data, bytes):
        return data.decode(encoding, errors="replace")
    return data


def read_line(
    handle: IO[AnyStr],
    buffer_size: int = DEFAULT_READ_BUFFER_SIZE,
    encoding: str = "utf-8",
) -> tuple[bool, str | None]:
    """Read the next line from ``handle``.

    Reads ``buffer_size`` units at a time until a terminator shows up or a
    read comes back empty. A "\\r" closing a chunk is only treated as part
    of a terminator once the next chunk shows whether "\\n" follows it.

    Args:
        handle: Seekable binary or text handle positioned at a line start.
        buffer_size: Bytes (characters for text handles) per read.
        encoding: Encoding used to decode binary handles.

    Returns:
        (True, line) when a terminator was consumed, (False, line) at end
        of file with the final, possibly empty, partial line, or the
        sentinel (False, None) when reading or seeking failed.

    Raises:
        ValueError: If buffer_size is smaller than 1.
    """
    if buffer_size < 1:
        msg = f"buffer_size must be at least 1, got {buffer_size}"
        raise ValueError(msg)

    chunks: list[AnyStr] = []
    consumed = 0
    try:
        start = handle.tell()
        while True:
            chunk = handle.read(buffer_size)
            if not chunk:
                line = _decode(chunk[:0].join(chunks), encoding) if chunks else ""
                return False, line

            newline = "\n" if isinstance(chunk, str) else b"\n"
            index = chunk.find(newline)
            if index < 0:
                chunks.append(chunk)
                consumed += len(chunk)
                continue

            chunks.append(chunk[:index])
            consumed += index + 1
            _rewind(handle, start, consumed, len(chunk) - index - 1, isinstance(chunk, str))

            data = chunk[:0].join(chunks)
            line = _decode(data, encoding)
            if line.endswith("\r"):
                line = line[:-1]
            return True, line
    except OSError as e:
        logger.warning("Read failed on %s: %s", _handle_name(handle) or "<handle>", e)
        return False, None


def _rewind(
    handle: IO[AnyStr], start: int, consumed: int, overshoot: int, text: bool
) -> None:
    """Position ``handle`` just past the terminator that was found."""
    if overshoot == 0:
        return
    if not text:
        handle.seek(-overshoot, os.SEEK_CUR)
        return
    # Text handles only accept opaque tell() cookies, so replay from the start
    handle.seek(start)
    handle.read(consumed)


def read_all_lines(
    handle: IO[AnyStr],
    *,
    settings: Settings | None = None,
) -> tuple[list[str] | None, DirError | None]:
    """Read every remaining line from ``handle``.

    A trailing empty partial line (file ending in a terminator) is not
    included.

    Args:
        handle: Seekable binary or text handle.
        settings: Supplies buffer size and encoding; defaults when omitted.

    Returns:
        Tuple of (lines, None), or (None, error) with kind READ_ERROR.
    """
    settings = settings or Settings()
    lines: list[str] = []
    has_more = True
    while has_more:
        has_more, line = read_line(handle, settings.read_buffer_size, settings.encoding)
        if line is None:
            return None, DirError(ErrorKind.READ_ERROR, _handle_name(handle), "read failed")
        if has_more or line:
            lines.append(line)
    return lines, None
