# acf_parser/utils/acf.py

"""
Public entry points for reading and writing Steam's ACF text format.

``parse_text`` and ``parse_file`` turn ACF content into an immutable
``Document``; ``dumps`` and ``dump`` write a document back out as canonical
ACF text that parses to an equal document. ``loads`` and ``load`` mirror the
``json``/``vdf`` module naming.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import IO

from acf_parser.core.errors import AcfReadError
from acf_parser.core.model import Document, DuplicateKeyPolicy, Entry, Nested
from acf_parser.core.parser import Parser

logger = logging.getLogger("acfparser.acf")

__all__ = ("dump", "dumps", "load", "loads", "parse_file", "parse_text")

SECTION_START = "{"
SECTION_END = "}"
INDENT = "\t"
SEPARATOR = "\t\t"

_ESCAPES = (
    ("\\", "\\\\"),
    ('"', '\\"'),
    ("\n", "\\n"),
    ("\t", "\\t"),
)


def parse_text(content: str, *, duplicate_keys: DuplicateKeyPolicy = DuplicateKeyPolicy.LAST_WINS) -> Document:
    """
    Parses ACF content into a Document. No I/O is performed.

    Args:
        content (str): The ACF-formatted text.
        duplicate_keys (DuplicateKeyPolicy): How a key repeated inside one
            entry is resolved. Defaults to last-value-wins.

    Returns:
        Document: The parsed document. Empty if the text contains only
        whitespace and comments.

    Raises:
        TypeError: If content is not a string.
        AcfParseError: On the first grammar error, with its position.
    """
    if not isinstance(content, str):
        raise TypeError(f"Can only parse str, got {type(content).__name__}")

    return Parser(content, duplicate_keys=duplicate_keys).parse_document()


def parse_file(
    path: str | os.PathLike[str],
    *,
    encoding: str = "utf-8",
    duplicate_keys: DuplicateKeyPolicy = DuplicateKeyPolicy.LAST_WINS,
) -> Document:
    """
    Reads an ACF file and parses its content.

    The file is read in one scoped operation and closed before parsing
    starts.

    Args:
        path: Location of the file, e.g. ``steamapps/appmanifest_440.acf``.
        encoding (str): Text encoding of the file. Defaults to UTF-8.
        duplicate_keys (DuplicateKeyPolicy): See ``parse_text``.

    Returns:
        Document: The parsed document.

    Raises:
        AcfReadError: If the file is missing, unreadable or not valid text
            in the given encoding.
        AcfParseError: If the content is not valid ACF.
    """
    file_path = Path(path)

    try:
        with open(file_path, "r", encoding=encoding) as fh:
            content = fh.read()
    except FileNotFoundError as exc:
        raise AcfReadError(file_path, "file not found") from exc
    except UnicodeDecodeError as exc:
        raise AcfReadError(file_path, f"not valid {encoding} text ({exc.reason})") from exc
    except OSError as exc:
        raise AcfReadError(file_path, exc.strerror or str(exc)) from exc

    document = parse_text(content, duplicate_keys=duplicate_keys)
    logger.debug("Parsed %d root entries from %s", len(document), file_path)
    return document


def loads(data: str, *, duplicate_keys: DuplicateKeyPolicy = DuplicateKeyPolicy.LAST_WINS) -> Document:
    """Alias of ``parse_text`` in ``json.loads`` style."""
    return parse_text(data, duplicate_keys=duplicate_keys)


def load(fp: IO[str], *, duplicate_keys: DuplicateKeyPolicy = DuplicateKeyPolicy.LAST_WINS) -> Document:
    """
    Parses ACF content from a file-like object opened in text mode.

    Args:
        fp: The stream to read. It is not closed.
        duplicate_keys (DuplicateKeyPolicy): See ``parse_text``.

    Returns:
        Document: The parsed document.
    """
    return parse_text(fp.read(), duplicate_keys=duplicate_keys)


def dumps(document: Document) -> str:
    """
    Serializes a Document into canonical ACF text.

    Every name, key and value is quoted, bodies are indented with tabs and
    keys are separated from values by two tabs, as Steam writes its own
    manifests.

    Args:
        document (Document): The document to serialize.

    Returns:
        str: ACF text; empty for an empty document.
    """
    lines: list[str] = []
    for entry in document:
        _dump_entry(entry, 0, lines)
    return "".join(f"{line}\n" for line in lines)


def dump(document: Document, fp: IO[str]) -> None:
    """
    Serializes a Document into a file-like object opened in text mode.

    Args:
        document (Document): The document to serialize.
        fp: The stream to write to.
    """
    fp.write(dumps(document))


def _quote(text: str) -> str:
    for raw, escaped in _ESCAPES:
        text = text.replace(raw, escaped)
    return f'"{text}"'


def _dump_entry(entry: Entry, level: int, lines: list[str]) -> None:
    """
    Appends the lines for one entry and everything nested in it.

    Args:
        entry (Entry): The entry to write.
        level (int): Indentation depth of the entry name.
        lines (list): Output buffer, one string per line.
    """
    outer = INDENT * level
    lines.append(f"{outer}{_quote(entry.name)}")
    lines.append(f"{outer}{SECTION_START}")

    # One iterator per open body; no recursion so depth is unbounded
    stack = [iter(entry.expressions.items())]
    while stack:
        depth = level + len(stack)
        item = next(stack[-1], None)
        if item is None:
            stack.pop()
            lines.append(f"{INDENT * (depth - 1)}{SECTION_END}")
            continue

        key, value = item
        indent = INDENT * depth
        if isinstance(value, Nested):
            lines.append(f"{indent}{_quote(key)}")
            lines.append(f"{indent}{SECTION_START}")
            stack.append(iter(value.entry.expressions.items()))
        else:
            lines.append(f"{indent}{_quote(key)}{SEPARATOR}{_quote(value.text)}")
