"""Path string normalization and parsing.

Paths are handled as plain strings using "/" as the only separator.
Nothing in this module touches the filesystem.

A path is treated as a directory when it is an ``EntryInfo`` with
``is_directory`` set, or a string ending in "/". Directories never have
an extension.

A leading dot does not start an extension: ".gitignore" has base name
".gitignore" and no extension, while ".config.toml" has base name
".config" and extension ".toml".
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dirlist.filesystem.models import EntryInfo

SEPARATOR = "/"


def normalize(path: str) -> str:
    """Return ``path`` with forward slashes and exactly one trailing slash.

    An empty path becomes "/", the filesystem root.
    """
    path = path.replace("\\", SEPARATOR)
    return path.rstrip(SEPARATOR) + SEPARATOR


def _split(path: str | EntryInfo) -> tuple[str, bool]:
    if isinstance(path, str):
        return path, path.endswith(SEPARATOR)
    return path.path, path.is_directory


def filename(path: str | EntryInfo) -> str:
    """Return the last path component, ignoring one trailing slash."""
    text, _ = _split(path)
    if text.endswith(SEPARATOR):
        text = text[:-1]
    return text.rsplit(SEPARATOR, 1)[-1]


def _extension_index(name: str) -> int:
    """Index of the extension separator in ``name``, or -1 if there is none."""
    index = name.rfind(".")
    # A dot at position 0 marks a hidden file, not an extension
    return index if index > 0 else -1


def base_name(path: str | EntryInfo) -> str:
    """Return the file name without its extension.

    Directories are returned unchanged, dots included.
    """
    _, is_directory = _split(path)
    name = filename(path)
    if is_directory:
        return name
    index = _extension_index(name)
    return name if index < 0 else name[:index]


def extension(path: str | EntryInfo) -> str:
    """Return the extension including its leading dot, or "" if there is none."""
    _, is_directory = _split(path)
    if is_directory:
        return ""
    name = filename(path)
    index = _extension_index(name)
    return "" if index < 0 else name[index:]


def is_dot_name(name: str) -> bool:
    """True for ".", ".." and hidden-style names."""
    return name.startswith(".")
