"""Console output helpers for the ittool command-line tool.

All diagnostics go to standard error through a rich Console so that standard
output carries nothing but transformed text.
"""

from typing import Any, Dict, Optional

from rich.console import Console
from rich.markup import escape

from ittool.shared.errors import SourceOpenError

PROGRAM_NAME = "it"


def console_options(color: str) -> Dict[str, Any]:
    """Map a color mode (auto, always, never) to rich Console arguments."""
    if color == "always":
        return {"force_terminal": True}
    if color == "never":
        return {"no_color": True, "color_system": None}
    # auto: rich decides from the terminal and NO_COLOR
    return {}


class ConsoleReporter:
    """Prints warnings and fatal errors to standard error."""

    def __init__(self, color: str = "auto", console: Optional[Console] = None) -> None:
        self.console = console or Console(stderr=True, **console_options(color))

    def source_skipped(self, error: SourceOpenError) -> None:
        """Report a source that could not be opened."""
        self.console.print(
            f"[yellow]{PROGRAM_NAME}:[/yellow] {escape(str(error))}",
            highlight=False,
            soft_wrap=True,
        )

    def error(self, error: BaseException) -> None:
        """Report a fatal error with the fixed "error:" prefix."""
        self.console.print(
            f"[bold bright_red]error:[/bold bright_red] {escape(str(error))}",
            highlight=False,
            soft_wrap=True,
        )

    def interrupted(self) -> None:
        self.console.print("\nOperation interrupted by user", highlight=False)
