"""
Configuration for the acf-parser command line.

Defaults can be overridden through ``ACF_PARSER_*`` environment variables,
optionally loaded from a ``.env`` file. The parsing core never reads this
module; the CLI passes the values in as explicit arguments.
"""

from __future__ import annotations

import codecs
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from acf_parser.core.model import DuplicateKeyPolicy

logger = logging.getLogger("acfparser.config")


__all__ = ["Config", "OUTPUT_FORMATS", "config"]

OUTPUT_FORMATS = ("tree", "json", "acf")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

ENV_PREFIX = "ACF_PARSER_"


@dataclass
class Config:
    """
    Settings used by the CLI when no command-line flag overrides them.
    """

    ENCODING: str = "utf-8"
    DUPLICATE_KEYS: DuplicateKeyPolicy = DuplicateKeyPolicy.LAST_WINS
    OUTPUT_FORMAT: str = "tree"
    LOG_LEVEL: str = "WARNING"
    LOG_FILE: Path | None = None

    def __post_init__(self):
        """Load .env and apply environment overrides after instantiation."""
        load_dotenv()
        self._load_environment()

    def _load_environment(self) -> None:
        """Apply ACF_PARSER_* variables, ignoring invalid values."""
        encoding = os.getenv(f"{ENV_PREFIX}ENCODING")
        if encoding:
            try:
                codecs.lookup(encoding)
                self.ENCODING = encoding
            except LookupError:
                logger.warning("Unknown encoding '%s' in environment, using %s", encoding, self.ENCODING)

        duplicate_keys = os.getenv(f"{ENV_PREFIX}DUPLICATE_KEYS")
        if duplicate_keys:
            try:
                self.DUPLICATE_KEYS = DuplicateKeyPolicy(duplicate_keys.strip().lower())
            except ValueError:
                logger.warning(
                    "Unknown duplicate key policy '%s' in environment, using %s",
                    duplicate_keys,
                    self.DUPLICATE_KEYS.value,
                )

        output_format = os.getenv(f"{ENV_PREFIX}FORMAT")
        if output_format:
            if output_format.lower() in OUTPUT_FORMATS:
                self.OUTPUT_FORMAT = output_format.lower()
            else:
                logger.warning("Unknown output format '%s' in environment, using %s", output_format, self.OUTPUT_FORMAT)

        log_level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if log_level:
            if log_level.upper() in LOG_LEVELS:
                self.LOG_LEVEL = log_level.upper()
            else:
                logger.warning("Unknown log level '%s' in environment, using %s", log_level, self.LOG_LEVEL)

        log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE")
        if log_file:
            self.LOG_FILE = Path(log_file).expanduser()


# Global instance
config = Config()
