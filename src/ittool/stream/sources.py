"""Input sources for the stream applicator.

An InputSource names either standard input ("-") or a file. It is resolved to
a readable binary stream only when the applicator is about to read it.
"""

import sys
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterator, List, Optional, Sequence, Union

from ittool.shared.errors import SourceOpenError

STDIN_PATH = "-"

PathLike = Union[str, Path]


@dataclass(frozen=True)
class InputSource:
    """Reference to one input stream, ordered by its position in the argument list.

    Attributes:
        path: File path, or "-" for standard input
        position: Zero-based position among the sources of one run
    """
    path: str
    position: int = 0

    @property
    def is_stdin(self) -> bool:
        return self.path == STDIN_PATH

    @property
    def display_name(self) -> str:
        return "<stdin>" if self.is_stdin else self.path

    @contextmanager
    def open(self, stdin: Optional[BinaryIO] = None) -> Iterator[BinaryIO]:
        """Open the source for binary reading.

        Standard input is yielded without being closed afterwards; files are
        closed when the context exits.

        Args:
            stdin: Stream used for "-" (defaults to sys.stdin.buffer)

        Raises:
            SourceOpenError: If the file cannot be opened
        """
        if self.is_stdin:
            yield stdin if stdin is not None else sys.stdin.buffer
            return

        try:
            stream = open(self.path, "rb")
        except OSError as e:
            raise SourceOpenError(self.path, e) from e
        with stream:
            yield stream


def sources_from_paths(paths: Optional[Sequence[PathLike]]) -> List[InputSource]:
    """Build ordered sources from paths, defaulting to standard input."""
    if not paths:
        return [InputSource(STDIN_PATH, 0)]
    return [InputSource(str(path), position) for position, path in enumerate(paths)]
