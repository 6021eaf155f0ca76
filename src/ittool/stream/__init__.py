"""Stream layer for ittool.

This module provides input sources, the buffered output sink and the stream
applicator that runs a transformation over sources in order.
"""

from .applicator import SkipCallback, StreamApplicator, run
from .sink import OutputSink
from .sources import STDIN_PATH, InputSource, sources_from_paths

__all__ = [
    "SkipCallback",
    "StreamApplicator",
    "run",
    "OutputSink",
    "STDIN_PATH",
    "InputSource",
    "sources_from_paths",
]
