"""Error values and exceptions used across dirlist.

Operating-system failures during enumeration and reading are reported as
``DirError`` values returned next to the result, never raised. Misuse of
the API (advancing a closed handle) raises ``HandleClosedError``.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    """Kind of failure reported by an enumeration or read operation.

    Attributes:
        CANNOT_OPEN: Path does not exist, access was denied, or the
            enumeration primitive failed for another reason.
        NOT_A_DIRECTORY: The opened path resolves to a regular file.
        READ_ERROR: A read failed for a reason other than end of file.
    """

    CANNOT_OPEN = "cannot_open"
    NOT_A_DIRECTORY = "not_a_directory"
    READ_ERROR = "read_error"


@dataclass(frozen=True, slots=True)
class DirError:
    """Failure returned by a fallible dirlist operation.

    Attributes:
        kind: Classification of the failure.
        path: Path the operation was working on ("" when not applicable).
        message: Human-readable detail, usually the OS error text.
    """

    kind: ErrorKind
    path: str
    message: str = ""

    def __str__(self) -> str:
        if self.message:
            return f"{self.kind.value}: {self.path}: {self.message}"
        return f"{self.kind.value}: {self.path}"


class HandleClosedError(RuntimeError):
    """Raised when a closed DirectoryHandle is advanced.

    This signals a bug in the caller. It is not part of the error
    contract and must not be used for control flow.
    """
