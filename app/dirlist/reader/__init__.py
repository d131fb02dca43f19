"""Line reading over open file handles."""

from dirlist.reader.lines import read_all_lines, read_line

__all__ = [
    "read_all_lines",
    "read_line",
]
