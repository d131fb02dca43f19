"""Directory enumeration backends.

This module exports the backend interface, the available
implementations and the factory that picks one from settings.
"""

from dirlist.core.config import BackendName
from dirlist.filesystem.backends.base import EnumerationBackend, RawEntry
from dirlist.filesystem.backends.scandir import ScandirBackend
from dirlist.filesystem.backends.win32 import Win32FindBackend


def get_backend(name: BackendName = "auto") -> EnumerationBackend:
    """Create the enumeration backend named in settings.

    Args:
        name: "scandir", "win32", or "auto" (scandir on every platform).

    Returns:
        A new backend instance.

    Raises:
        ValueError: If the name is unknown.
        RuntimeError: If "win32" is requested outside Windows.
    """
    if name in ("auto", "scandir"):
        return ScandirBackend()
    if name == "win32":
        return Win32FindBackend()
    msg = f"Unknown enumeration backend: {name!r}"
    raise ValueError(msg)


__all__ = [
    "EnumerationBackend",
    "RawEntry",
    "ScandirBackend",
    "Win32FindBackend",
    "get_backend",
]
