#!/usr/bin/env python3
"""acf-parser - command line entry point.

Parses one ACF file and prints it as an indented tree, JSON, or canonical
ACF text. Errors go to stderr with a non-zero exit code.
"""

from __future__ import annotations

import argparse
import codecs
import json
import logging
import sys
from pathlib import Path
from typing import Any

from acf_parser.config import OUTPUT_FORMATS, config
from acf_parser.core.errors import AcfParseError, AcfReadError
from acf_parser.core.logging import setup_logging
from acf_parser.core.model import Document, DuplicateKeyPolicy, Nested
from acf_parser.utils.acf import dumps, parse_file
from acf_parser.version import __app_name__, __release_date__, __version__

logger = logging.getLogger("acfparser.main")

__all__ = ["build_arg_parser", "format_json", "format_tree", "main", "render"]

EXIT_OK = 0
EXIT_PARSE_ERROR = 1
EXIT_READ_ERROR = 2

TREE_INDENT = "  "
JSON_INDENT = "  "


def format_tree(document: Document) -> str:
    """Render a document as an indented debug listing.

    Names, keys and values are shown with ``repr`` so escapes stay visible.

    Args:
        document: The document to render.

    Returns:
        One line per entry or pair, newline-terminated.
    """
    if not len(document):
        return "(empty document)\n"

    lines: list[str] = []
    for entry in document:
        lines.append(f"{entry.name!r} ({len(entry)} keys)")
        stack = [iter(entry.expressions.items())]
        while stack:
            item = next(stack[-1], None)
            if item is None:
                stack.pop()
                continue
            key, value = item
            indent = TREE_INDENT * len(stack)
            if isinstance(value, Nested):
                lines.append(f"{indent}{key!r} ({len(value.entry)} keys)")
                stack.append(iter(value.entry.expressions.items()))
            else:
                lines.append(f"{indent}{key!r} = {value.text!r}")
    return "\n".join(lines) + "\n"


def format_json(document: Document) -> str:
    """Render a document as indented JSON objects of strings.

    The layout matches ``json.dumps(..., indent=2)``. Nesting is written with
    an explicit stack because the ``json`` encoder recurses once per level;
    ``json`` only encodes the individual strings.
    """
    out = ["{"]
    # Frames are [items iterator, nothing written yet]
    stack: list[list[Any]] = [[iter(document.to_dict().items()), True]]
    while stack:
        frame = stack[-1]
        item = next(frame[0], None)
        if item is None:
            stack.pop()
            if not frame[1]:
                out.append("\n" + JSON_INDENT * len(stack))
            out.append("}")
            continue
        key, value = item
        out.append("\n" if frame[1] else ",\n")
        frame[1] = False
        out.append(JSON_INDENT * len(stack) + json.dumps(key, ensure_ascii=False) + ": ")
        if isinstance(value, dict):
            out.append("{")
            stack.append([iter(value.items()), True])
        else:
            out.append(json.dumps(value, ensure_ascii=False))
    return "".join(out) + "\n"


def render(document: Document, output_format: str) -> str:
    """Render a document in one of ``OUTPUT_FORMATS``.

    Raises:
        ValueError: If the format is unknown.
    """
    if output_format == "tree":
        return format_tree(document)
    if output_format == "json":
        return format_json(document)
    if output_format == "acf":
        return dumps(document)
    raise ValueError(f"Unknown output format: {output_format}")


def _encoding(value: str) -> str:
    try:
        codecs.lookup(value)
    except LookupError as exc:
        raise argparse.ArgumentTypeError(f"unknown encoding: {value}") from exc
    return value


def build_arg_parser() -> argparse.ArgumentParser:
    """Build the argument parser; defaults come from ``config``."""
    parser = argparse.ArgumentParser(
        prog=__app_name__,
        description="Parse a Valve ACF file and print its structure.",
    )
    parser.add_argument("path", type=Path, help="ACF file to parse, e.g. appmanifest_440.acf")
    parser.add_argument(
        "-f",
        "--format",
        choices=OUTPUT_FORMATS,
        default=config.OUTPUT_FORMAT,
        help=f"output format (default: {config.OUTPUT_FORMAT})",
    )
    parser.add_argument(
        "--first-wins",
        action="store_true",
        help="keep the first value of a repeated key instead of the last",
    )
    parser.add_argument(
        "--encoding",
        type=_encoding,
        default=config.ENCODING,
        help=f"file encoding (default: {config.ENCODING})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__} ({__release_date__})"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the CLI.

    Args:
        argv: Arguments without the program name; ``sys.argv[1:]`` if None.

    Returns:
        Exit code (0 = success, 1 = parse error, 2 = read error).
    """
    args = build_arg_parser().parse_args(argv)

    setup_logging("DEBUG" if args.verbose else config.LOG_LEVEL, log_file=config.LOG_FILE)

    policy = DuplicateKeyPolicy.FIRST_WINS if args.first_wins else config.DUPLICATE_KEYS

    try:
        document = parse_file(args.path, encoding=args.encoding, duplicate_keys=policy)
    except AcfReadError as exc:
        logger.debug("Read failed for %s", exc.path, exc_info=True)
        print(f"{args.path}: {exc}", file=sys.stderr)
        return EXIT_READ_ERROR
    except AcfParseError as exc:
        logger.debug("%s error in %s at offset %d", exc.kind.value, args.path, exc.position.offset)
        print(f"{args.path}: {exc}", file=sys.stderr)
        return EXIT_PARSE_ERROR

    sys.stdout.write(render(document, args.format))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
