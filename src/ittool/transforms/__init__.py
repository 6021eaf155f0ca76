"""Transformation layer for ittool.

This module provides the closed set of text transformations together with their
processing mode and newline policy, and name resolution including aliases.
"""

from .registry import (
    Transformation,
    TransformationSpec,
    all_names,
    canonical_names,
    resolve,
    split_lines,
    WHITESPACE,
)

__all__ = [
    "Transformation",
    "TransformationSpec",
    "all_names",
    "canonical_names",
    "resolve",
    "split_lines",
    "WHITESPACE",
]
