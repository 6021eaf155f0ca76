"""Tests for the transformation registry."""

import pytest

from ittool.shared.errors import ContentError, ResolutionError
from ittool.transforms.registry import (
    I64_MAX,
    I64_MIN,
    Transformation,
    all_names,
    canonical_names,
    resolve,
    split_lines,
)

PER_LINE = [
    Transformation.TRIM,
    Transformation.TRIM_START,
    Transformation.TRIM_END,
    Transformation.TO_UPPERCASE,
    Transformation.TO_LOWERCASE,
]

SAMPLE_LINES = [
    "",
    "\n",
    "  hello  \n",
    "\tTabbed\t\r\n",
    "no terminator",
    "   ",
    "MiXeD CaSe ß straße\n",
    " \u00a0unicode spaces\u2003\n",
]


class TestResolve:
    """Tests for name resolution."""

    @pytest.mark.parametrize("name,expected", [
        ("trim", Transformation.TRIM),
        ("trim_start", Transformation.TRIM_START),
        ("trim_left", Transformation.TRIM_START),
        ("triml", Transformation.TRIM_START),
        ("trim_end", Transformation.TRIM_END),
        ("trim_right", Transformation.TRIM_END),
        ("trimr", Transformation.TRIM_END),
        ("to_uppercase", Transformation.TO_UPPERCASE),
        ("upper", Transformation.TO_UPPERCASE),
        ("uppercase", Transformation.TO_UPPERCASE),
        ("to_lowercase", Transformation.TO_LOWERCASE),
        ("lower", Transformation.TO_LOWERCASE),
        ("lowercase", Transformation.TO_LOWERCASE),
        ("unique", Transformation.UNIQUE),
        ("uniq", Transformation.UNIQUE),
        ("sum", Transformation.SUM),
    ])
    def test_canonical_names_and_aliases(self, name, expected):
        """Test that every canonical name and alias resolves."""
        assert resolve(name) is expected

    def test_unknown_name(self):
        """Test that unknown names raise ResolutionError carrying the name."""
        with pytest.raises(ResolutionError) as exc_info:
            resolve("reverse")
        assert exc_info.value.attempted == "reverse"
        assert "reverse" in str(exc_info.value)

    def test_resolution_is_case_sensitive(self):
        """Test that names must match exactly."""
        with pytest.raises(ResolutionError):
            resolve("UPPER")
        with pytest.raises(ResolutionError):
            resolve(" trim")

    def test_every_member_is_resolvable(self):
        """Test that no variant exists without a name."""
        for member in Transformation:
            assert resolve(member.canonical_name) is member
            for alias in member.aliases:
                assert resolve(alias) is member

    def test_name_lists(self):
        """Test canonical and full name listings."""
        assert canonical_names() == [
            "trim", "trim_start", "trim_end", "to_uppercase",
            "to_lowercase", "unique", "sum",
        ]
        names = all_names()
        assert len(names) == len(set(names))
        assert set(canonical_names()) <= set(names)
        assert "uniq" in names


class TestModeClassification:
    """Tests for per-line/batch mode and newline policy."""

    def test_per_line_transformations(self):
        """Test the per-line set."""
        for member in PER_LINE:
            assert member.per_line is True

    def test_batch_transformations(self):
        """Test the batch set."""
        assert Transformation.UNIQUE.per_line is False
        assert Transformation.SUM.per_line is False

    def test_strips_newline(self):
        """Test that only trim and trim_end strip the terminator."""
        stripping = {m for m in Transformation if m.strips_newline}
        assert stripping == {Transformation.TRIM, Transformation.TRIM_END}

    def test_every_member_has_description(self):
        """Test help text is present for every variant."""
        for member in Transformation:
            assert member.description


class TestPerLineTransformations:
    """Tests for per-line text functions."""

    def test_trim(self):
        assert Transformation.TRIM.apply("  hello  \n") == "hello"
        assert Transformation.TRIM.apply("\t x \r\n") == "x"

    def test_trim_start(self):
        assert Transformation.TRIM_START.apply("  hello  \n") == "hello  \n"

    def test_trim_end(self):
        assert Transformation.TRIM_END.apply("  hello  \n") == "  hello"
        assert Transformation.TRIM_END.apply("x\r\n") == "x"

    def test_trim_unicode_whitespace(self):
        assert Transformation.TRIM.apply("\u3000\xa0x\u2029\x85\n") == "x"
        assert Transformation.TRIM_START.apply("\u2003\x0bx ") == "x "

    def test_trim_keeps_ascii_separators(self):
        """Test that information separators U+001C..U+001F are not whitespace."""
        assert Transformation.TRIM.apply("\x1fa\x1f\n") == "\x1fa\x1f"
        assert Transformation.TRIM_START.apply("\x1c b") == "\x1c b"
        assert Transformation.TRIM_END.apply("b \x1e \n") == "b \x1e"

    def test_uppercase_keeps_terminator(self):
        assert Transformation.TO_UPPERCASE.apply("abc\n") == "ABC\n"
        assert Transformation.TO_UPPERCASE.apply("straße\r\n") == "STRASSE\r\n"

    def test_lowercase_keeps_terminator(self):
        assert Transformation.TO_LOWERCASE.apply("ABC\n") == "abc\n"

    @pytest.mark.parametrize("transform", PER_LINE)
    def test_idempotent(self, transform):
        """Test that applying a per-line transformation twice changes nothing more."""
        for line in SAMPLE_LINES:
            once = transform.apply(line)
            assert transform.apply(once) == once


class TestSplitLines:
    """Tests for batch line splitting."""

    def test_empty(self):
        assert split_lines("") == []

    def test_trailing_newline_does_not_add_line(self):
        assert split_lines("a\nb\n") == ["a", "b"]

    def test_missing_trailing_newline(self):
        assert split_lines("a\nb") == ["a", "b"]

    def test_crlf_terminators(self):
        assert split_lines("a\r\nb\r\n") == ["a", "b"]

    def test_blank_lines_are_kept(self):
        assert split_lines("a\n\nb\n\n") == ["a", "", "b", ""]

    def test_lone_carriage_return_is_content(self):
        assert split_lines("a\rb\n") == ["a\rb"]
        assert split_lines("a\r") == ["a\r"]


class TestUnique:
    """Tests for the unique transformation."""

    def test_first_occurrence_order(self):
        assert Transformation.UNIQUE.apply("b\na\nb\nc\na\n") == "b\na\nc"

    def test_empty_input(self):
        assert Transformation.UNIQUE.apply("") == ""

    def test_lines_compared_exactly(self):
        assert Transformation.UNIQUE.apply("a\na \nA\na\n") == "a\na \nA"

    def test_crlf_and_lf_lines_are_equal(self):
        assert Transformation.UNIQUE.apply("a\r\na\n") == "a"

    @pytest.mark.parametrize("text", [
        "b\na\nb\nc\na\n",
        "x\ny\nx\n",
        "1\n2\n3\n",
        "",
    ])
    def test_no_duplicates_and_idempotent(self, text):
        """Test distinctness and idempotence."""
        once = Transformation.UNIQUE.apply(text)
        lines = split_lines(once)
        assert len(lines) == len(set(lines))
        assert Transformation.UNIQUE.apply(once) == once

    def test_state_is_per_call(self):
        """Test that calls do not share a seen-set."""
        assert Transformation.UNIQUE.apply("a\nb\n") == "a\nb"
        assert Transformation.UNIQUE.apply("b\na\n") == "b\na"


class TestSum:
    """Tests for the sum transformation."""

    def test_sum(self):
        assert Transformation.SUM.apply("3\n5\n-2\n") == "6"

    def test_sum_with_sign_and_crlf(self):
        assert Transformation.SUM.apply("+4\r\n-1\r\n") == "3"

    def test_sum_without_trailing_newline(self):
        assert Transformation.SUM.apply("1\n2") == "3"

    def test_empty_input_sums_to_zero(self):
        assert Transformation.SUM.apply("") == "0"

    def test_invalid_line(self):
        """Test that a non-integer line raises ContentError with its line number."""
        with pytest.raises(ContentError) as exc_info:
            Transformation.SUM.apply("1\nfoo\n3\n")
        assert exc_info.value.line_number == 2
        assert "foo" in str(exc_info.value)

    @pytest.mark.parametrize("text", [
        "1\n\n2\n",      # blank line
        "1\n2\n\n",      # blank trailing line
        " 1\n",          # surrounding whitespace
        "1_000\n",       # underscores
        "1.5\n",         # not an integer
        "\u0661\n",      # non-ASCII digit
        "--1\n",
        "+\n",
    ])
    def test_rejected_lines(self, text):
        with pytest.raises(ContentError):
            Transformation.SUM.apply(text)

    def test_i64_bounds(self):
        assert Transformation.SUM.apply(f"{I64_MAX}\n") == str(I64_MAX)
        assert Transformation.SUM.apply(f"{I64_MIN}\n") == str(I64_MIN)

    def test_line_out_of_range(self):
        with pytest.raises(ContentError, match="too large"):
            Transformation.SUM.apply(f"{I64_MAX + 1}\n")
        with pytest.raises(ContentError, match="too small"):
            Transformation.SUM.apply(f"{I64_MIN - 1}\n")

    def test_overflowing_total(self):
        with pytest.raises(ContentError, match="overflows"):
            Transformation.SUM.apply(f"{I64_MAX}\n1\n")
