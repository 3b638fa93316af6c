"""Allows ``python -m acf_parser``."""

from __future__ import annotations

import sys

from acf_parser.main import main

if __name__ == "__main__":
    sys.exit(main())
