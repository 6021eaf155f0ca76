"""Main CLI entry point for the `it` command-line tool.

Each transformation is a sub-command (aliases included); the remaining
positional arguments name the input files, "-" meaning standard input.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from ittool import __version__
from ittool.shared.config import VALID_COLOR_MODES, RunConfig
from ittool.shared.errors import ConfigError, ItToolError
from ittool.shared.logging import configure_logging, get_logger
from ittool.stream import STDIN_PATH, StreamApplicator, sources_from_paths
from ittool.transforms import Transformation, resolve

from .console import PROGRAM_NAME, ConsoleReporter

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130  # Standard exit code for SIGINT


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog=PROGRAM_NAME,
        description=(
            "Provides command-line access to several useful line and string "
            "transformations"
        ),
    )

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    verbosity.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file path"
    )
    parser.add_argument(
        "--color",
        choices=VALID_COLOR_MODES,
        help="When to color diagnostics (default: auto)"
    )

    subparsers = parser.add_subparsers(
        dest="command", metavar="COMMAND", title="transformations"
    )
    subparsers.required = True

    for transform in Transformation:
        command_parser = subparsers.add_parser(
            transform.canonical_name,
            aliases=list(transform.aliases),
            help=transform.description,
            description=transform.description,
        )
        command_parser.add_argument(
            "files",
            nargs="*",
            default=[STDIN_PATH],
            metavar="FILE",
            help="Input file(s); '-' reads standard input (default: -)"
        )

    return parser


def load_config(args: argparse.Namespace) -> RunConfig:
    """Build the run configuration from the config file and command-line overrides."""
    config = RunConfig()
    if args.config:
        config = RunConfig.from_file(args.config)
    return config.with_overrides(color=args.color)


def log_level_for(args: argparse.Namespace, config: RunConfig) -> str:
    if args.verbose:
        return "DEBUG"
    if args.quiet:
        return "ERROR"
    return config.logging_level


def cmd_apply(args: argparse.Namespace, config: RunConfig, reporter: ConsoleReporter) -> int:
    """Handle a transformation sub-command."""
    transform = resolve(args.command)
    logger = get_logger(__name__, "cli", transformation=transform.canonical_name)
    logger.debug("Resolved command", extra={"command": args.command})

    applicator = StreamApplicator(config, on_skip=reporter.source_skipped)
    result = applicator.run(sources_from_paths(args.files), transform)

    logger.info(
        "Processed sources",
        extra={
            "processed": result.sources_processed,
            "skipped": len(result.skipped),
            "processing_time_ms": round(result.processing_time_ms, 3),
        },
    )
    return EXIT_SUCCESS


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args)
    except ConfigError as e:
        ConsoleReporter(args.color or "auto").error(e)
        return EXIT_FAILURE

    reporter = ConsoleReporter(config.color)
    configure_logging(log_level_for(args, config), reporter.console)

    try:
        return cmd_apply(args, config, reporter)
    except ItToolError as e:
        reporter.error(e)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        reporter.interrupted()
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
