"""Error types raised while reading and parsing ACF text.

Every grammar violation maps to exactly one ``ErrorKind`` and one exception
subclass of ``AcfParseError``. Failures to read a file are reported through
``AcfReadError`` instead, so callers can tell a broken file apart from a
missing or unreadable one.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

__all__ = [
    "AcfError",
    "AcfParseError",
    "AcfReadError",
    "ErrorKind",
    "Position",
    "UnexpectedEndOfInputError",
    "UnexpectedTokenError",
    "UnmatchedCloseBraceError",
    "UnmatchedOpenBraceError",
    "UnterminatedStringError",
]


@dataclass(frozen=True)
class Position:
    """A location in the source text.

    Attributes:
        line: 1-based line number.
        column: 1-based column number.
        offset: 0-based character index into the text.
    """

    line: int = 1
    column: int = 1
    offset: int = 0

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}"


class ErrorKind(Enum):
    """Categories of grammar errors."""

    UNTERMINATED_STRING = "unterminated string"
    UNEXPECTED_TOKEN = "unexpected token"
    UNMATCHED_OPEN_BRACE = "unmatched open brace"
    UNMATCHED_CLOSE_BRACE = "unmatched close brace"
    UNEXPECTED_END_OF_INPUT = "unexpected end of input"


class AcfError(Exception):
    """Base class for every error raised by acf_parser."""


class AcfReadError(AcfError):
    """Raised when an ACF file cannot be read or decoded.

    Attributes:
        path: The path that failed to load.
        reason: Short description of the underlying failure.
    """

    def __init__(self, path: str | Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"failed to read '{self.path}': {reason}")


class AcfParseError(AcfError, ValueError):
    """Base class for grammar errors.

    Attributes:
        kind: The error category.
        position: Where in the source the error was detected.
        message: Human-readable description without the position.
    """

    kind: ErrorKind

    def __init__(self, message: str, position: Position):
        self.message = message
        self.position = position
        super().__init__(f"{message} at {position}")


class UnterminatedStringError(AcfParseError):
    """A quoted string was still open when the input ended."""

    kind = ErrorKind.UNTERMINATED_STRING

    def __init__(self, position: Position):
        super().__init__("unterminated quoted string", position)


class UnexpectedTokenError(AcfParseError):
    """A token appeared where the grammar does not allow it.

    Attributes:
        expected: Description of what the parser was looking for.
        found: Description of the token actually found.
    """

    kind = ErrorKind.UNEXPECTED_TOKEN

    def __init__(self, expected: str, found: str, position: Position):
        self.expected = expected
        self.found = found
        super().__init__(f"expected {expected}, found {found}", position)


class UnmatchedOpenBraceError(AcfParseError):
    """An entry was opened with ``{`` but never closed."""

    kind = ErrorKind.UNMATCHED_OPEN_BRACE

    def __init__(self, entry_name: str, position: Position):
        self.entry_name = entry_name
        super().__init__(f"'{{' of entry '{entry_name}' is never closed", position)


class UnmatchedCloseBraceError(AcfParseError):
    """A ``}`` appeared with no open entry to close."""

    kind = ErrorKind.UNMATCHED_CLOSE_BRACE

    def __init__(self, position: Position):
        super().__init__("'}' does not close any entry", position)


class UnexpectedEndOfInputError(AcfParseError):
    """The input ended in the middle of a construct.

    Attributes:
        expected: Description of what the parser was looking for.
    """

    kind = ErrorKind.UNEXPECTED_END_OF_INPUT

    def __init__(self, expected: str, position: Position):
        self.expected = expected
        super().__init__(f"expected {expected}, found end of input", position)
