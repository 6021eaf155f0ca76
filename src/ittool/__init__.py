"""ittool: command-line access to common line and string transformations.

Reads files or standard input, applies one transformation (trim, case
conversion, unique, sum) and writes the result to standard output.

Progressive API Disclosure:
- Level 1: Simple functions - apply_text(), run_files()
- Level 2: Registry and applicator - resolve(), StreamApplicator
"""

__version__ = "0.1.0"
__author__ = "ittool Team"

# Level 1: Simple functions
from .api import apply_text, run_files

# Configuration, errors and results
from .shared import (
    ContentError,
    ItToolError,
    ResolutionError,
    RunConfig,
    RunResult,
    SinkError,
    SourceOpenError,
)

# Level 2: Registry and applicator
from .stream import InputSource, StreamApplicator
from .transforms import Transformation, resolve

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple functions
    "apply_text",
    "run_files",

    # Level 2: Registry and applicator
    "Transformation",
    "resolve",
    "InputSource",
    "StreamApplicator",

    # Configuration, errors and results
    "RunConfig",
    "RunResult",
    "ItToolError",
    "ResolutionError",
    "SourceOpenError",
    "ContentError",
    "SinkError",
]
