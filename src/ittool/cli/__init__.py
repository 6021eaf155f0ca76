"""Command-line interface module for ittool.

This module provides the `it` command: one sub-command per transformation,
reading files or standard input and writing to standard output.
"""

from .main import main

__all__ = ["main"]
