"""Parser for Valve's ACF key-value text format."""

from __future__ import annotations

from acf_parser.core.errors import (
    AcfError,
    AcfParseError,
    AcfReadError,
    ErrorKind,
    Position,
    UnexpectedEndOfInputError,
    UnexpectedTokenError,
    UnmatchedCloseBraceError,
    UnmatchedOpenBraceError,
    UnterminatedStringError,
)
from acf_parser.core.model import Document, DuplicateKeyPolicy, Entry, Nested, Scalar, Value
from acf_parser.utils.acf import dump, dumps, load, loads, parse_file, parse_text
from acf_parser.version import __version__

__all__: list[str] = [
    "AcfError",
    "AcfParseError",
    "AcfReadError",
    "Document",
    "DuplicateKeyPolicy",
    "Entry",
    "ErrorKind",
    "Nested",
    "Position",
    "Scalar",
    "UnexpectedEndOfInputError",
    "UnexpectedTokenError",
    "UnmatchedCloseBraceError",
    "UnmatchedOpenBraceError",
    "UnterminatedStringError",
    "Value",
    "__version__",
    "dump",
    "dumps",
    "load",
    "loads",
    "parse_file",
    "parse_text",
]
