"""Character classes and the parsing patterns built from them.

The psql unicode style uses three box-drawing characters on top of the
ascii ``-``, ``+`` and ``|``::

    U+2500  ─  BOX DRAWINGS LIGHT HORIZONTAL
    U+253C  ┼  BOX DRAWINGS LIGHT VERTICAL AND HORIZONTAL
    U+2502  │  BOX DRAWINGS LIGHT VERTICAL

Membership is a fixed table. Callers who need another dialect build their
own ``BoxPatterns`` instead of changing these sets.
"""
from __future__ import annotations

import re
from enum import Enum
from typing import FrozenSet

from pydantic import BaseModel, ConfigDict


class CharClass(str, Enum):
    HORIZONTAL = "horizontal"
    CROSS = "cross"
    DELIMITER = "delimiter"


PLUS_SIGN = "\N{PLUS SIGN}"
UNICODE_CROSS = "\N{BOX DRAWINGS LIGHT VERTICAL AND HORIZONTAL}"

HORIZONTAL_CHARS: FrozenSet[str] = frozenset({
    "\N{HYPHEN-MINUS}",
    PLUS_SIGN,
    "\N{BOX DRAWINGS LIGHT HORIZONTAL}",
    UNICODE_CROSS,
})

CROSS_CHARS: FrozenSet[str] = frozenset({PLUS_SIGN, UNICODE_CROSS})

DELIMITER_CHARS: FrozenSet[str] = frozenset({
    "\N{VERTICAL LINE}",
    "\N{BOX DRAWINGS LIGHT VERTICAL}",
})

_TABLE = {
    CharClass.HORIZONTAL: HORIZONTAL_CHARS,
    CharClass.CROSS: CROSS_CHARS,
    CharClass.DELIMITER: DELIMITER_CHARS,
}


def _check_char(ch: str) -> None:
    if not isinstance(ch, str) or len(ch) != 1:
        raise ValueError(f"Expected a single character, got {ch!r}")


def classify(ch: str) -> FrozenSet[CharClass]:
    """Return every class the character belongs to (empty when none)."""
    _check_char(ch)
    return frozenset(cls for cls, members in _TABLE.items() if ch in members)


def is_horizontal(ch: str) -> bool:
    _check_char(ch)
    return ch in HORIZONTAL_CHARS


def is_cross(ch: str) -> bool:
    _check_char(ch)
    return ch in CROSS_CHARS


def is_delimiter(ch: str) -> bool:
    _check_char(ch)
    return ch in DELIMITER_CHARS


def char_set(members: FrozenSet[str]) -> str:
    """Regex character-set body for a class, e.g. ``\\-\\+─┼``."""
    return "".join(re.escape(ch) for ch in sorted(members))


_HOR = char_set(HORIZONTAL_CHARS)
_CROSS = char_set(CROSS_CHARS)
_DELIM = char_set(DELIMITER_CHARS)


class BoxPatterns(BaseModel):
    """Regular expressions that drive both parsing strategies.

    Fields accept either pattern strings or compiled patterns.

    Attributes:
        separator: Column separator inside a row (whitespace, one delimiter,
            whitespace). Used by the delimiter-split strategy.
        ruler_line: A whole line of horizontal-rule characters and
            whitespace, with at least one rule character.
        cross: One cross mark (where a ruler meets a column border).
        left_edge: Left table border, stripped from mysql rows.
        right_edge: Right table border, stripped from mysql rows.
        footer: Status lines a shell prints after the table.
    """

    model_config = ConfigDict(frozen=True)

    separator: re.Pattern = re.compile(rf"\s+[{_DELIM}]\s+")
    ruler_line: re.Pattern = re.compile(rf"^(?=.*[{_HOR}])[{_HOR}\s]+$")
    cross: re.Pattern = re.compile(rf"[{_CROSS}]")
    left_edge: re.Pattern = re.compile(rf"^\s*[{_DELIM}]")
    right_edge: re.Pattern = re.compile(rf"[{_DELIM}]\s*$")
    footer: re.Pattern = re.compile(
        r"^\s*(?:\(\d+ rows?\)|\d+ rows? in set\b.*|Empty set\b.*)\s*$"
    )

    def is_ruler(self, line: str) -> bool:
        return bool(self.ruler_line.search(line))


DEFAULT_PATTERNS = BoxPatterns()
