"""Tests for CLI console reporting."""

import io

from rich.console import Console

from ittool.cli.console import ConsoleReporter, console_options
from ittool.shared.errors import ContentError, SourceOpenError


def make_reporter(**console_kwargs) -> tuple:
    buffer = io.StringIO()
    console_kwargs.setdefault("force_terminal", False)
    console = Console(file=buffer, width=200, **console_kwargs)
    return ConsoleReporter(console=console), buffer


class TestConsoleOptions:
    """Tests for color mode mapping."""

    def test_auto(self):
        assert console_options("auto") == {}

    def test_always(self):
        assert console_options("always") == {"force_terminal": True}

    def test_never(self):
        assert console_options("never") == {"no_color": True, "color_system": None}


class TestConsoleReporter:
    """Tests for warning and error output."""

    def test_source_skipped(self):
        reporter, buffer = make_reporter()
        reporter.source_skipped(
            SourceOpenError("data.txt", FileNotFoundError(2, "No such file or directory"))
        )
        assert buffer.getvalue() == "it: 'data.txt': No such file or directory\n"

    def test_error_prefix(self):
        reporter, buffer = make_reporter()
        reporter.error(ContentError("line 2: invalid digit found in 'foo'"))
        assert buffer.getvalue() == "error: line 2: invalid digit found in 'foo'\n"

    def test_error_text_is_not_markup(self):
        reporter, buffer = make_reporter()
        reporter.error(ContentError("[bold]literal[/bold]"))
        assert "[bold]literal[/bold]" in buffer.getvalue()

    def test_error_prefix_is_colored_on_terminals(self):
        reporter, buffer = make_reporter(force_terminal=True, color_system="standard")
        reporter.error(ContentError("boom"))
        output = buffer.getvalue()
        assert "\x1b[" in output
        assert "error:" in output
        assert "boom" in output

    def test_default_console_writes_to_stderr(self):
        reporter = ConsoleReporter("never")
        assert reporter.console.stderr is True
        assert reporter.console.no_color is True
