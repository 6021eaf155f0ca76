"""Shared utilities for ittool.

This module provides the error hierarchy, configuration objects, result types
and logging helpers used across the registry, stream and CLI layers.
"""

from .config import RunConfig
from .errors import (
    ConfigError,
    ConfigValidationError,
    ContentError,
    ItToolError,
    ResolutionError,
    SinkError,
    SourceOpenError,
)
from .logging import (
    ContextLogger,
    configure_logging,
    get_logger,
)
from .result import RunResult

__all__ = [
    "RunConfig",
    "ConfigError",
    "ConfigValidationError",
    "ContentError",
    "ItToolError",
    "ResolutionError",
    "SinkError",
    "SourceOpenError",
    "ContextLogger",
    "configure_logging",
    "get_logger",
    "RunResult",
]
