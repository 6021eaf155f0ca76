"""Tests for the library API functions."""

import io
from unittest.mock import Mock

import pytest

from ittool import apply_text, run_files
from ittool.shared.config import RunConfig
from ittool.shared.errors import ContentError, ResolutionError


class TestApplyText:
    """Tests for apply_text()."""

    def test_per_line(self):
        assert apply_text("trim", "  hello  \n") == "hello\n"
        assert apply_text("upper", "abc\n") == "ABC\n"
        assert apply_text("triml", "  a\n  b") == "a\nb"

    def test_batch(self):
        assert apply_text("sum", "3\n5\n-2\n") == "6\n"
        assert apply_text("uniq", "b\na\nb\nc\na\n") == "b\na\nc\n"

    def test_unknown_name(self):
        with pytest.raises(ResolutionError):
            apply_text("reverse", "abc")

    def test_invalid_sum(self):
        with pytest.raises(ContentError):
            apply_text("sum", "1\nfoo\n3\n")

    def test_with_config(self):
        config = RunConfig(buffer_size=1)
        assert apply_text("lower", "ABC\nDEF\n", config) == "abc\ndef\n"


class TestRunFiles:
    """Tests for run_files()."""

    def test_scenario_sum(self, tmp_path):
        path = tmp_path / "numbers.txt"
        path.write_text("3\n5\n-2\n")
        output = io.BytesIO()

        result = run_files("sum", [path], output=output)

        assert output.getvalue() == b"6\n"
        assert result.sources_processed == 1

    def test_scenario_missing_then_present(self, tmp_path):
        present = tmp_path / "present.txt"
        present.write_text("  hi  \n")
        on_skip = Mock()
        output = io.BytesIO()

        result = run_files(
            "trim", [tmp_path / "missing.txt", present], output=output, on_skip=on_skip
        )

        assert output.getvalue() == b"hi\n"
        assert on_skip.call_count == 1
        assert result.had_warnings

    def test_defaults_to_stdin(self):
        output = io.BytesIO()
        run_files("lowercase", output=output, stdin=io.BytesIO(b"LOUD\n"))
        assert output.getvalue() == b"loud\n"

    def test_unknown_name_before_io(self, tmp_path):
        """Test that resolution fails before any source is touched."""
        on_skip = Mock()
        with pytest.raises(ResolutionError):
            run_files("nope", [tmp_path / "missing.txt"], output=io.BytesIO(), on_skip=on_skip)
        on_skip.assert_not_called()
