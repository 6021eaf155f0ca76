"""Buffered output sink shared by every source of one run."""

import sys
from types import TracebackType
from typing import BinaryIO, Optional, Type

from ittool.shared.config import DEFAULT_BUFFER_SIZE
from ittool.shared.errors import SinkError
from ittool.shared.logging import get_logger

logger = get_logger(__name__, "sink")


class OutputSink:
    """Buffered text writer over a binary stream.

    Text is encoded and collected in memory; the buffer is written through only
    when it grows past buffer_size, and flushed once when the sink is closed.
    Used as a context manager, the sink is flushed on every exit path, including
    exceptions raised inside the block.
    """

    def __init__(
        self,
        stream: Optional[BinaryIO] = None,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        encoding: str = "utf-8",
    ) -> None:
        """Initialize the sink.

        Args:
            stream: Binary stream to write to (defaults to sys.stdout.buffer)
            buffer_size: Number of bytes collected before writing through
            encoding: Encoding used for output text
        """
        if buffer_size <= 0:
            raise ValueError("buffer_size must be > 0")
        self.stream = stream if stream is not None else sys.stdout.buffer
        self.buffer_size = buffer_size
        self.encoding = encoding
        self.bytes_written = 0
        self.closed = False
        self._buffer = bytearray()

    def write(self, text: str) -> None:
        """Queue text for output.

        Raises:
            SinkError: If writing through to the stream fails
        """
        if self.closed:
            raise ValueError("write to closed sink")
        data = text.encode(self.encoding, errors="surrogateescape")
        self._buffer += data
        self.bytes_written += len(data)
        if len(self._buffer) >= self.buffer_size:
            self._write_through()

    def close(self) -> None:
        """Write out anything buffered and flush the stream.

        Closing twice is a no-op. The underlying stream is not closed.

        Raises:
            SinkError: If writing or flushing fails
        """
        if self.closed:
            return
        self.closed = True
        self._write_through()
        try:
            self.stream.flush()
        except OSError as e:
            raise SinkError(e) from e

    def _write_through(self) -> None:
        if not self._buffer:
            return
        data = bytes(self._buffer)
        self._buffer.clear()
        try:
            self.stream.write(data)
        except OSError as e:
            raise SinkError(e) from e

    def __enter__(self) -> "OutputSink":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        if exc_type is None:
            self.close()
            return
        # Keep the original error; a failing flush must not mask it.
        try:
            self.close()
        except SinkError as e:
            logger.debug("Flush failed while unwinding", extra={"error": str(e)})
