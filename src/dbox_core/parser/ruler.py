"""Ruler line analysis: dialect detection and column boundaries.

A ruler is the horizontal line under (psql, sqlite) or around (mysql)
the header::

    +-----+------------+---------------+-------------+     mysql
    ----+------------+-----------+--------                  psql
    ────┼────────────┼───────────┼────────                  psql unicode
    ----------  ----------  ----------                      sqlite .mode column

The cross marks on it are lined up with the column borders of every row,
so their offsets are all that is needed to cut rows into fixed-width
fields.
"""
from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

from .._types import Dialect, RulerAnalysis
from ..errors import MissingRulerError
from .charclass import DEFAULT_PATTERNS, PLUS_SIGN, UNICODE_CROSS, BoxPatterns

logger = logging.getLogger(__name__)

# Preferred over other cross matches when both are on the ruler.
_KNOWN_CROSSES = (PLUS_SIGN, UNICODE_CROSS)

# psql "border 0" and sqlite columns have no visible cross, just a gap of
# one or two spaces.
_SPACE_GAP = re.compile(r" {1,2}")


def find_cross(ruler: str, patterns: BoxPatterns = DEFAULT_PATTERNS) -> Optional[str]:
    """Return the text acting as cross mark on ``ruler``, if any.

    ``+`` and ``┼`` win when the cross pattern accepts them; otherwise the
    first match of ``patterns.cross`` is used, and a space gap only when
    the ruler has no cross at all.
    """
    for candidate in _KNOWN_CROSSES:
        if candidate in ruler and patterns.cross.fullmatch(candidate):
            return candidate
    match = patterns.cross.search(ruler)
    if match and match.group():
        return match.group()
    if _SPACE_GAP.search(ruler):
        return " "
    return None


def cross_offsets(ruler: str, cross: str) -> List[int]:
    """Every offset of ``cross`` in ``ruler``, adjacent matches included."""
    offsets = []
    pos = ruler.find(cross)
    while pos > -1:
        offsets.append(pos)
        pos = ruler.find(cross, pos + 1)
    return offsets


def collapse_boundaries(positions: List[int]) -> List[int]:
    """Merge boundaries exactly one apart, keeping the later of the two.

    Two crosses side by side do not enclose a column, so they must not
    produce an empty field.
    """
    collapsed: List[int] = []
    for pos in positions:
        if collapsed and pos - collapsed[-1] == 1:
            collapsed[-1] = pos
        else:
            collapsed.append(pos)
    return collapsed


def _strip_mysql_crosses(ruler: str, patterns: BoxPatterns) -> Tuple[str, bool]:
    head = patterns.cross.match(ruler)
    if head:
        ruler = ruler[head.end():]
    at_end = re.compile(f"(?:{patterns.cross.pattern})$", patterns.cross.flags)
    tail = at_end.search(ruler)
    if tail:
        ruler = ruler[:tail.start()]
    return ruler, bool(head and tail)


def analyze_ruler(
    ruler: str,
    line_index: int,
    patterns: BoxPatterns = DEFAULT_PATTERNS,
    is_ruler: Optional[bool] = None,
) -> RulerAnalysis:
    """Work out the dialect and column boundaries from a ruler line.

    Args:
        ruler: The ruler line text.
        line_index: 0-based line number of the ruler in the input: 2 (third
            line) means a mysql table, 1 (second line) a psql or sqlite one.
        patterns: Parsing patterns in force.
        is_ruler: Whether the line matched the ruler pattern; computed from
            ``patterns.ruler_line`` when omitted.

    Returns:
        RulerAnalysis with dialect, header and first-data line numbers, and
        boundary offsets into the (normalized) ruler text.

    Raises:
        MissingRulerError: If the line is not a ruler, or not on the second
            or third line.
    """
    if is_ruler is None:
        is_ruler = patterns.is_ruler(ruler)
    if not is_ruler:
        raise MissingRulerError(f"Not a horizontal ruler line: {ruler!r}")

    ruler = ruler.rstrip()
    warnings: List[str] = []

    if line_index == 2:
        dialect = Dialect.MYSQL
    elif line_index == 1:
        dialect = Dialect.POSTGRES if patterns.cross.search(ruler) else Dialect.SQLITE
    else:
        raise MissingRulerError(
            f"Ruler found on line {line_index + 1}; expected the second or third line"
        )

    if dialect is Dialect.MYSQL:
        ruler, ok = _strip_mysql_crosses(ruler, patterns)
        if not ok:
            message = "mysql format, but ruler line was not terminated by crosses"
            logger.warning(message)
            warnings.append(message)

    cross = find_cross(ruler, patterns)
    if cross == UNICODE_CROSS and dialect is Dialect.POSTGRES:
        dialect = Dialect.POSTGRES_UNICODE

    positions = cross_offsets(ruler, cross) if cross else []
    positions.append(len(ruler))  # end of line closes the last column
    boundaries = collapse_boundaries(positions)

    layout = dialect.layout
    logger.debug(
        "Ruler on line %d: dialect=%s cross=%r boundaries=%s",
        line_index + 1, dialect.value, cross, boundaries,
    )

    return RulerAnalysis(
        dialect=dialect,
        header_index=layout.header_index,
        first_data_index=layout.first_data_index,
        boundaries=boundaries,
        cross=cross,
        ruler=ruler,
        warnings=warnings,
    )
