"""Result objects for ittool runs.

A RunResult records what the stream applicator did across all sources of one
invocation, including the sources it had to skip.
"""

from dataclasses import dataclass, field
from typing import List

from .errors import SourceOpenError


@dataclass
class RunResult:
    """Summary of a completed run."""

    transformation: str
    sources_total: int = 0
    sources_processed: int = 0
    skipped: List[SourceOpenError] = field(default_factory=list)
    lines_read: int = 0
    bytes_written: int = 0
    processing_time_ms: float = 0.0

    @property
    def had_warnings(self) -> bool:
        """Whether any source was skipped."""
        return bool(self.skipped)

    @property
    def skipped_paths(self) -> List[str]:
        """Paths of the sources that could not be opened."""
        return [error.path for error in self.skipped]

    @property
    def lines_per_second(self) -> float:
        """Calculate lines read per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.lines_read * 1000.0) / self.processing_time_ms
