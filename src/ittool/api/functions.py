"""Library API for ittool.

Simple functions that resolve a transformation by name and run it, either over
an in-memory string or over files, exactly the way the command-line tool does.
"""

import io
from pathlib import Path
from typing import BinaryIO, Optional, Sequence, Union

from ittool.shared import RunConfig, RunResult, get_logger
from ittool.stream import SkipCallback, StreamApplicator, sources_from_paths
from ittool.transforms import resolve

PathLike = Union[str, Path]


def apply_text(name: str, text: str, config: Optional[RunConfig] = None) -> str:
    """Apply the named transformation to text treated as one source.

    Args:
        name: Canonical transformation name or alias
        text: Input text
        config: Run configuration (uses defaults if None)

    Returns:
        The output the command-line tool would print for this input

    Raises:
        ResolutionError: If the name is unknown
        ContentError: If the text cannot be transformed

    Examples:
        >>> apply_text("upper", "abc\\n")
        'ABC\\n'
        >>> apply_text("sum", "3\\n5\\n-2\\n")
        '6\\n'
    """
    transform = resolve(name)
    config = config or RunConfig()
    stdin = io.BytesIO(text.encode(config.encoding, errors="surrogateescape"))
    output = io.BytesIO()
    StreamApplicator(config, output=output, stdin=stdin).run(
        sources_from_paths(None), transform
    )
    return output.getvalue().decode("utf-8", errors="surrogateescape")


def run_files(
    name: str,
    paths: Optional[Sequence[PathLike]] = None,
    output: Optional[BinaryIO] = None,
    config: Optional[RunConfig] = None,
    on_skip: Optional[SkipCallback] = None,
    stdin: Optional[BinaryIO] = None,
) -> RunResult:
    """Apply the named transformation to files in order.

    Args:
        name: Canonical transformation name or alias
        paths: Files to read; "-" means standard input (default: ["-"])
        output: Binary stream receiving the output (defaults to stdout)
        config: Run configuration (uses defaults if None)
        on_skip: Called for every source that cannot be opened
        stdin: Binary stream read for "-" (defaults to stdin)

    Returns:
        RunResult describing the run

    Raises:
        ResolutionError: If the name is unknown
        ContentError: If a source's content cannot be transformed
        SinkError: If writing the output fails
    """
    transform = resolve(name)
    sources = sources_from_paths(paths)
    logger = get_logger(__name__, "run_files")
    logger.info(
        "Running transformation over files",
        extra={"transformation": transform.canonical_name, "sources": len(sources)},
    )
    applicator = StreamApplicator(config, output=output, stdin=stdin, on_skip=on_skip)
    return applicator.run(sources, transform)
