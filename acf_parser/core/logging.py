"""Centralized logging configuration for acf_parser.

Library modules log through children of the ``acfparser`` logger and never
attach handlers themselves. The CLI (or any embedding application) calls
``setup_logging`` once. Log output goes to stderr by default because stdout
carries the parsed document.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TextIO

__all__ = ["logger", "setup_logging"]

logger = logging.getLogger("acfparser")


def setup_logging(
    level: int | str = logging.WARNING,
    log_file: Path | None = None,
    stream: TextIO | None = None,
) -> None:
    """Configure the package logger.

    The console handler is attached on the first call; later calls change its
    level. A ``log_file`` is attached whenever the logger has no file handler
    yet, so it may also be given on a later call.

    Args:
        level: Logging level as a number or a name such as ``"DEBUG"``.
        log_file: Optional path to a log file that receives DEBUG and up.
        stream: Console stream, ``sys.stderr`` when omitted. Ignored once a
            console handler exists.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
    console_handlers = [h for h in logger.handlers if h not in file_handlers]

    if console_handlers:
        for handler in console_handlers:
            handler.setLevel(level)
    else:
        console_handler = logging.StreamHandler(stream or sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file is not None and not file_handlers:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
        file_handlers.append(file_handler)

    # The logger level gates every handler, so a file handler needs DEBUG here
    # and the console handler filters on its own level
    logger.setLevel(logging.DEBUG if file_handlers else level)
