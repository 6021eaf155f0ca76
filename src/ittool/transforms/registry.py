"""Transformation registry for ittool.

The set of transformations is closed: each member of the Transformation enum
carries its text function, whether it runs per line or on a whole source, and
whether it strips the line terminator. Name resolution is derived from the
same table, so every member is resolvable by its canonical name and aliases.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Tuple

from ittool.shared.errors import ContentError, ResolutionError

# Signed 64-bit range accepted by the sum transformation
I64_MIN = -(2 ** 63)
I64_MAX = 2 ** 63 - 1

# ASCII digits only, optional sign, no surrounding whitespace or underscores
_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+\Z", re.ASCII)

# Unicode White_Space code points; str.isspace() also accepts U+001C..U+001F
WHITESPACE = (
    "\t\n\x0b\x0c\r "
    "\x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)


class Transformation(Enum):
    """Enumeration of available transformations, valued by canonical name."""
    TRIM = "trim"
    TRIM_START = "trim_start"
    TRIM_END = "trim_end"
    TO_UPPERCASE = "to_uppercase"
    TO_LOWERCASE = "to_lowercase"
    UNIQUE = "unique"
    SUM = "sum"

    @property
    def canonical_name(self) -> str:
        return self.value

    @property
    def aliases(self) -> Tuple[str, ...]:
        return _SPECS[self].aliases

    @property
    def description(self) -> str:
        return _SPECS[self].description

    @property
    def per_line(self) -> bool:
        """Whether the applicator feeds this transformation one line at a time."""
        return _SPECS[self].per_line

    @property
    def strips_newline(self) -> bool:
        """Whether the applicator must re-append a newline after each line."""
        return _SPECS[self].strips_newline

    def apply(self, text: str) -> str:
        """Apply the transformation to text.

        Args:
            text: A single line (per-line mode) or a whole source (batch mode)

        Returns:
            Transformed text

        Raises:
            ContentError: If the text cannot be transformed
        """
        return _SPECS[self].function(text)


@dataclass(frozen=True)
class TransformationSpec:
    """Behaviour, mode and newline policy of one transformation.

    Attributes:
        function: Text function implementing the transformation
        per_line: True for streaming per-line mode, False for batch mode
        strips_newline: True if the function removes the line terminator
        aliases: Alternative names accepted by resolve()
        description: One-line help text
    """
    function: Callable[[str], str]
    per_line: bool
    strips_newline: bool = False
    aliases: Tuple[str, ...] = ()
    description: str = ""


def trim_line(line: str) -> str:
    return line.strip(WHITESPACE)


def trim_line_start(line: str) -> str:
    return line.lstrip(WHITESPACE)


def trim_line_end(line: str) -> str:
    return line.rstrip(WHITESPACE)


def split_lines(text: str) -> List[str]:
    """Split text into lines on "\\n".

    A final "\\n" does not start an extra empty line, and a "\\r" directly before
    a "\\n" belongs to the terminator.
    """
    if not text:
        return []
    pieces = text.split("\n")
    tail = pieces.pop()
    lines = [piece[:-1] if piece.endswith("\r") else piece for piece in pieces]
    if tail:
        lines.append(tail)
    return lines


def unique_lines(text: str) -> str:
    """Keep the first occurrence of each distinct line."""
    return "\n".join(dict.fromkeys(split_lines(text)))


def sum_lines(text: str) -> str:
    """Sum every line as a signed 64-bit integer."""
    total = 0
    for line_number, line in enumerate(split_lines(text), start=1):
        total += _parse_i64(line, line_number)
        if not I64_MIN <= total <= I64_MAX:
            raise ContentError(
                "sum overflows a signed 64-bit integer", line_number=line_number
            )
    return str(total)


def _parse_i64(line: str, line_number: int) -> int:
    if not line:
        raise ContentError(
            f"line {line_number}: cannot parse integer from empty string",
            line_number=line_number,
        )
    if not _INTEGER_PATTERN.match(line):
        raise ContentError(
            f"line {line_number}: invalid digit found in {line!r}",
            line_number=line_number,
        )
    value = int(line)
    if value > I64_MAX:
        raise ContentError(
            f"line {line_number}: number too large to fit in a signed 64-bit integer",
            line_number=line_number,
        )
    if value < I64_MIN:
        raise ContentError(
            f"line {line_number}: number too small to fit in a signed 64-bit integer",
            line_number=line_number,
        )
    return value


_SPECS: Dict[Transformation, TransformationSpec] = {
    Transformation.TRIM: TransformationSpec(
        function=trim_line,
        per_line=True,
        strips_newline=True,
        description="Remove leading and trailing whitespace from each line",
    ),
    Transformation.TRIM_START: TransformationSpec(
        function=trim_line_start,
        per_line=True,
        aliases=("trim_left", "triml"),
        description="Remove leading whitespace from each line",
    ),
    Transformation.TRIM_END: TransformationSpec(
        function=trim_line_end,
        per_line=True,
        strips_newline=True,
        aliases=("trim_right", "trimr"),
        description="Remove trailing whitespace from each line",
    ),
    Transformation.TO_UPPERCASE: TransformationSpec(
        function=str.upper,
        per_line=True,
        aliases=("upper", "uppercase"),
        description="Convert each line to uppercase",
    ),
    Transformation.TO_LOWERCASE: TransformationSpec(
        function=str.lower,
        per_line=True,
        aliases=("lower", "lowercase"),
        description="Convert each line to lowercase",
    ),
    Transformation.UNIQUE: TransformationSpec(
        function=unique_lines,
        per_line=False,
        aliases=("uniq",),
        description="Print each distinct line once, in order of first occurrence",
    ),
    Transformation.SUM: TransformationSpec(
        function=sum_lines,
        per_line=False,
        description="Print the sum of all lines parsed as integers",
    ),
}

_missing = [member.name for member in Transformation if member not in _SPECS]
if _missing:
    raise RuntimeError(f"transformations without a spec: {', '.join(_missing)}")


def _build_name_index() -> Dict[str, Transformation]:
    index: Dict[str, Transformation] = {}
    for member in Transformation:
        for name in (member.canonical_name,) + member.aliases:
            if name in index:
                raise RuntimeError(f"transformation name {name!r} is registered twice")
            index[name] = member
    return index


_NAME_INDEX = _build_name_index()


def resolve(name: str) -> Transformation:
    """Resolve a canonical name or alias to a transformation.

    Matching is exact and case-sensitive.

    Raises:
        ResolutionError: If no transformation has that name
    """
    try:
        return _NAME_INDEX[name]
    except KeyError:
        raise ResolutionError(name, canonical_names()) from None


def canonical_names() -> List[str]:
    """Canonical names of all transformations, in declaration order."""
    return [member.canonical_name for member in Transformation]


def all_names() -> List[str]:
    """Every name accepted by resolve(), aliases included."""
    return list(_NAME_INDEX)
