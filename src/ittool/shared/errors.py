"""Exception hierarchy for ittool.

Every error the core can raise derives from ItToolError. Source-open failures
are absorbed by the stream applicator; all other errors are fatal and propagate
to the caller unchanged.
"""

from typing import List, Optional


class ItToolError(Exception):
    """Base exception for all ittool errors."""


class ResolutionError(ItToolError):
    """Raised when a transformation name does not match any known variant."""

    def __init__(self, attempted: str, known: Optional[List[str]] = None) -> None:
        self.attempted = attempted
        self.known = known or []
        message = f'unknown transformation "{attempted}"'
        if self.known:
            message += f" (expected one of: {', '.join(self.known)})"
        super().__init__(message)


class SourceOpenError(ItToolError):
    """Raised when an input source cannot be opened for reading."""

    def __init__(self, path: str, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"'{path}': {describe_os_error(cause)}")


class ContentError(ItToolError):
    """Raised when source content cannot be transformed."""

    def __init__(
        self,
        message: str,
        line_number: Optional[int] = None,
        source: Optional[str] = None,
    ) -> None:
        self.line_number = line_number
        self.source = source
        super().__init__(message)

    def __str__(self) -> str:
        message = super().__str__()
        if self.source is not None:
            return f"{self.source}: {message}"
        return message


class SinkError(ItToolError):
    """Raised when writing to or flushing the output sink fails."""

    def __init__(self, cause: OSError) -> None:
        self.cause = cause
        super().__init__(f"failed to write output: {describe_os_error(cause)}")


class ConfigError(ItToolError):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


def describe_os_error(error: OSError) -> str:
    """Render an OSError without the filename Python appends to it."""
    if error.strerror:
        return error.strerror
    return str(error) or type(error).__name__
