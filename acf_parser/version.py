"""
Central version management for acf-parser.
"""

from __future__ import annotations

__all__ = ["__app_name__", "__version__", "__release_date__", "__author__", "__license__"]

__app_name__ = "acf-parser"
__version__ = "0.2.0"
__release_date__ = "2026-10-16"
__author__ = "acf-parser contributors"
__license__ = "MIT"
