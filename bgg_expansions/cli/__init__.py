"""
Command-line interface for the BGG Expansions package.

This module provides the CLI command for:
- Checking a collection for unowned expansions
- Printing and emailing the result
"""

from .main import main

__all__ = [
    "main",
]
