"""Delimiter-split parsing: the fallback strategy.

Ignores the ruler entirely. Any line with at least one whitespace-bracketed
delimiter is taken as a row and split on those delimiters; everything else
(rulers, blank lines, footers) is skipped. Simpler than ``parse_dbox`` but a
value containing `` | `` gets split, and an empty cell runs into its
neighbour.
"""
from __future__ import annotations

import logging
from typing import List

from .._types import BoxTable
from .box import trim_borders
from .charclass import DEFAULT_PATTERNS, BoxPatterns

logger = logging.getLogger(__name__)


def parse_simple(text: str, patterns: BoxPatterns = DEFAULT_PATTERNS) -> BoxTable:
    """Parse table text by splitting rows on delimiter characters.

    Args:
        text: SELECT output text.
        patterns: Parsing patterns; ``separator`` does the splitting.

    Returns:
        BoxTable with ``strategy="simple"`` and no dialect or boundaries.

    Raises:
        ValueError: If there is no text content.
    """
    if not text.strip():
        raise ValueError("No text content to parse")

    data: List[List[str]] = []
    for number, raw in enumerate(text.split("\n"), start=1):
        line = trim_borders(raw.strip(), patterns)

        if not patterns.separator.search(line):
            logger.debug("Skipping line %d (no delimiter): %r", number, raw)
            continue

        # the split pattern eats the whitespace around each delimiter,
        # the outer strip handles the rest
        data.append(patterns.separator.split(line.strip()))

    header = list(data[0]) if data else []
    return BoxTable(strategy="simple", header=header, data=data)
