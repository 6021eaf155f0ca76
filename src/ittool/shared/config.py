"""Configuration for ittool runs.

Configuration values validate themselves on construction and can be loaded
from a JSON file, then overridden from the command line.
"""

import codecs
import json
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import ConfigError, ConfigValidationError

DEFAULT_BUFFER_SIZE = 8192

VALID_ENCODING_ERRORS = ["strict", "replace", "ignore", "surrogateescape"]
VALID_COLOR_MODES = ["auto", "always", "never"]
VALID_LOGGING_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass(frozen=True)
class RunConfig:
    """Settings shared by every source of a single invocation."""

    # Output sink
    buffer_size: int = DEFAULT_BUFFER_SIZE

    # Input decoding
    encoding: str = "utf-8"
    encoding_errors: str = "strict"

    # Terminal output and diagnostics
    color: str = "auto"
    logging_level: str = "WARNING"

    def __post_init__(self) -> None:
        """Validate run configuration."""
        if not isinstance(self.buffer_size, int) or self.buffer_size <= 0:
            raise ConfigValidationError("buffer_size must be > 0", "buffer_size")
        try:
            codecs.lookup(self.encoding)
        except (LookupError, TypeError):
            raise ConfigValidationError(
                f"unknown encoding: {self.encoding!r}", "encoding"
            ) from None
        if self.encoding_errors not in VALID_ENCODING_ERRORS:
            raise ConfigValidationError(
                f"encoding_errors must be one of {VALID_ENCODING_ERRORS}",
                "encoding_errors",
                VALID_ENCODING_ERRORS,
            )
        if self.color not in VALID_COLOR_MODES:
            raise ConfigValidationError(
                f"color must be one of {VALID_COLOR_MODES}",
                "color",
                VALID_COLOR_MODES,
            )
        if self.logging_level not in VALID_LOGGING_LEVELS:
            raise ConfigValidationError(
                f"logging_level must be one of {VALID_LOGGING_LEVELS}",
                "logging_level",
                VALID_LOGGING_LEVELS,
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RunConfig":
        """Create a configuration from a mapping of field names to values.

        Raises:
            ConfigValidationError: If a key is unknown or a value is invalid
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigValidationError(
                f"unknown configuration keys: {', '.join(unknown)}",
                unknown[0],
                sorted(known),
            )
        return cls(**data)

    @classmethod
    def from_file(cls, config_path: Path) -> "RunConfig":
        """Load configuration from a JSON file.

        A missing file yields the default configuration.

        Raises:
            ConfigError: If the file cannot be read or does not hold a JSON object
        """
        if not config_path.exists():
            return cls()
        try:
            with config_path.open(encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigError(f"could not load config file {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(
                f"config file {config_path} must contain a JSON object"
            )
        return cls.from_dict(data)

    def with_overrides(self, **changes: Optional[Any]) -> "RunConfig":
        """Return a copy with every non-None value in changes applied."""
        applied = {key: value for key, value in changes.items() if value is not None}
        if not applied:
            return self
        try:
            return replace(self, **applied)
        except TypeError as e:
            raise ConfigValidationError(str(e)) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a plain dictionary."""
        return asdict(self)
