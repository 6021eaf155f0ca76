"""Stream applicator: the read-transform-write loop.

Sources are processed strictly in order. Per-line transformations stream one
line at a time through the transformation; batch transformations see the whole
content of one source at a time, so their state never crosses sources. All
output goes through one buffered sink that is flushed once when the run ends,
whether it ends normally or with a fatal error.
"""

import codecs
import time
from contextlib import ExitStack
from typing import BinaryIO, Callable, Iterable, Iterator, Optional

from ittool.shared.config import RunConfig
from ittool.shared.errors import ContentError, SourceOpenError
from ittool.shared.logging import ContextLogger, get_logger
from ittool.shared.result import RunResult
from ittool.transforms.registry import Transformation

from .sink import OutputSink
from .sources import InputSource

SkipCallback = Callable[[SourceOpenError], None]

MS_PER_SECOND = 1000


class StreamApplicator:
    """Applies one transformation to an ordered list of input sources."""

    def __init__(
        self,
        config: Optional[RunConfig] = None,
        output: Optional[BinaryIO] = None,
        stdin: Optional[BinaryIO] = None,
        on_skip: Optional[SkipCallback] = None,
    ) -> None:
        """Initialize the applicator.

        Args:
            config: Run configuration (uses defaults if None)
            output: Binary stream receiving the output (defaults to stdout)
            stdin: Binary stream read for "-" sources (defaults to stdin)
            on_skip: Called with the error for every source that cannot be opened
        """
        self.config = config or RunConfig()
        self.output = output
        self.stdin = stdin
        self.on_skip = on_skip
        self.logger = get_logger(__name__, "applicator")

    def run(
        self, sources: Iterable[InputSource], transform: Transformation
    ) -> RunResult:
        """Run the transformation over every source in order.

        Args:
            sources: Input sources, processed in the order given
            transform: Transformation to apply

        Returns:
            RunResult describing the run

        Raises:
            ContentError: If a source's content cannot be decoded or transformed
            SinkError: If writing the output fails
        """
        start_time = time.time()
        sources = list(sources)
        result = RunResult(transformation=transform.canonical_name)
        result.sources_total = len(sources)
        logger = self.logger.bind(transformation=transform.canonical_name)
        logger.debug(
            "Starting run",
            extra={
                "mode": "per_line" if transform.per_line else "batch",
                "sources": len(sources),
            },
        )

        sink = OutputSink(self.output, self.config.buffer_size)
        with sink:
            for source in sources:
                with ExitStack() as stack:
                    try:
                        stream = stack.enter_context(source.open(self.stdin))
                    except SourceOpenError as e:
                        self._skip(e, result, logger)
                        continue

                    source_logger = logger.bind(source=source.display_name)
                    source_logger.debug("Opened source")
                    try:
                        if transform.per_line:
                            self._apply_by_lines(stream, transform, sink, result)
                        else:
                            self._apply_to_entire(stream, transform, sink, result)
                    except ContentError as e:
                        e.source = source.display_name
                        source_logger.debug("Aborting run", extra={"error": str(e)})
                        raise
                    result.sources_processed += 1
                    source_logger.debug("Finished source")

        result.bytes_written = sink.bytes_written
        result.processing_time_ms = (time.time() - start_time) * MS_PER_SECOND
        logger.debug(
            "Run complete",
            extra={
                "processed": result.sources_processed,
                "skipped": len(result.skipped),
                "lines": result.lines_read,
                "bytes_written": result.bytes_written,
            },
        )
        return result

    def _read_lines(self, stream: BinaryIO) -> Iterator[str]:
        """Yield decoded lines, terminators included, as each one completes.

        Lines split on "\\n" only. A line is decoded before the next one is
        read, so a decode failure never discards lines that precede it.
        """
        decoder = codecs.getincrementaldecoder(self.config.encoding)(
            self.config.encoding_errors
        )
        pending = ""
        line_number = 0
        while True:
            chunk = stream.readline()
            try:
                pending += decoder.decode(chunk, final=not chunk)
            except UnicodeDecodeError as e:
                raise self._decode_error(e, line_number + 1) from e
            end = pending.find("\n")
            while end >= 0:
                line_number += 1
                yield pending[:end + 1]
                pending = pending[end + 1:]
                end = pending.find("\n")
            if not chunk:
                break
        if pending:
            yield pending

    def _apply_by_lines(
        self,
        stream: BinaryIO,
        transform: Transformation,
        sink: OutputSink,
        result: RunResult,
    ) -> None:
        for line in self._read_lines(stream):
            result.lines_read += 1
            sink.write(transform.apply(line))
            if transform.strips_newline:
                sink.write("\n")

    def _apply_to_entire(
        self,
        stream: BinaryIO,
        transform: Transformation,
        sink: OutputSink,
        result: RunResult,
    ) -> None:
        data = stream.read()
        try:
            content = data.decode(self.config.encoding, self.config.encoding_errors)
        except UnicodeDecodeError as e:
            raise self._decode_error(e, data.count(b"\n", 0, e.start) + 1) from e
        result.lines_read += content.count("\n") + (
            1 if content and not content.endswith("\n") else 0
        )
        sink.write(transform.apply(content))
        sink.write("\n")

    def _decode_error(self, error: UnicodeDecodeError, line_number: int) -> ContentError:
        return ContentError(
            f"line {line_number}: stream did not contain valid "
            f"{self.config.encoding}: {error.reason}",
            line_number=line_number,
        )

    def _skip(
        self, error: SourceOpenError, result: RunResult, logger: ContextLogger
    ) -> None:
        result.skipped.append(error)
        logger.debug("Skipping source", extra={"source": error.path, "error": str(error)})
        if self.on_skip is not None:
            self.on_skip(error)


def run(
    sources: Iterable[InputSource],
    transform: Transformation,
    output: Optional[BinaryIO] = None,
    config: Optional[RunConfig] = None,
    on_skip: Optional[SkipCallback] = None,
    stdin: Optional[BinaryIO] = None,
) -> RunResult:
    """Apply transform to sources, writing to output.

    Convenience wrapper around StreamApplicator.run().
    """
    applicator = StreamApplicator(config, output=output, stdin=stdin, on_skip=on_skip)
    return applicator.run(sources, transform)
