"""Fixed-width parsing of database shell SELECT output ("dbox" text).

The ruler under the header gives the column boundaries; after that the
header and data lines are cut at those offsets and every value is
stripped of surrounding whitespace. Because cutting is by position, a
value may contain the delimiter character itself::

     id |    date    |   type    | amount
    ----+------------+-----------+--------
      1 | 2010-09-01 | factory   | 146035

mysql tables get their left and right borders trimmed first, which turns
their rows into the borderless psql shape.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from .._io import load_input
from .._types import BoxTable, Dialect
from ..errors import MissingRulerError
from .charclass import DEFAULT_PATTERNS, BoxPatterns
from .ruler import analyze_ruler

logger = logging.getLogger(__name__)

# Rulers are always near the top: second line (psql) or third (mysql).
RULER_SCAN = (1, 2)


def split_lines(text: str, patterns: BoxPatterns = DEFAULT_PATTERNS) -> List[str]:
    """Split text into table lines.

    Drops carriage returns, blank lines around the table, and shell status
    lines such as ``(4 rows)`` after it. Indentation shared by every line
    (a table pasted into an indented block) is removed too.
    """
    lines = [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]

    start = 0
    while start < len(lines) and not lines[start].strip():
        start += 1
    end = len(lines)
    while end > start and (
        not lines[end - 1].strip() or patterns.footer.search(lines[end - 1])
    ):
        end -= 1
    lines = lines[start:end]

    indent = min(
        (len(line) - len(line.lstrip(" ")) for line in lines if line.strip()),
        default=0,
    )
    if indent:
        lines = [line[indent:] for line in lines]
    return lines


def slice_fields(line: str, boundaries: List[int]) -> List[str]:
    """Cut a line at the boundary offsets and strip each value.

    Field i runs from one past boundary i-1 up to boundary i; the
    boundary character itself belongs to no field. A line shorter than
    the last boundary gives empty trailing values.
    """
    values = []
    beg = 0
    for pos in boundaries:
        values.append(line[beg:pos].strip())
        beg = pos + 1
    return values


def trim_borders(line: str, patterns: BoxPatterns = DEFAULT_PATTERNS) -> str:
    """Remove one left and one right table border from a row."""
    line = patterns.left_edge.sub("", line, count=1)
    return patterns.right_edge.sub("", line, count=1)


def parse_dbox(text: str, patterns: BoxPatterns = DEFAULT_PATTERNS) -> BoxTable:
    """Parse box-format text into a header and rows.

    Args:
        text: SELECT output as printed by mysql, psql or sqlite3.
        patterns: Parsing patterns (defaults cover ascii and unicode boxes).

    Returns:
        BoxTable whose ``data`` holds the header followed by the data rows.

    Raises:
        ValueError: If there is no text content.
        MissingRulerError: If no ruler line is found near the top.
    """
    lines = split_lines(text, patterns)
    if not lines:
        raise ValueError("No text content to parse")

    analysis = None
    for i in RULER_SCAN:
        if i < len(lines) and patterns.is_ruler(lines[i]):
            analysis = analyze_ruler(lines[i], i, patterns, is_ruler=True)
            break

    if analysis is None:
        raise MissingRulerError(
            "no horizontal rule line found: is this really db output data box format?"
        )

    dialect = analysis.dialect
    layout = dialect.layout
    last_data = len(lines) - 1
    if layout.has_trailing_ruler:
        last_data -= 1

    row_indexes = [analysis.header_index]
    row_indexes.extend(range(analysis.first_data_index, last_data + 1))

    data: List[List[str]] = []
    for i in row_indexes:
        line = lines[i]
        if layout.trim_borders:
            line = trim_borders(line, patterns)
        data.append(slice_fields(line, analysis.boundaries))

    logger.debug("Parsed %s table: %d columns, %d rows",
                 dialect.value, len(analysis.boundaries), len(data) - 1)

    return BoxTable(
        strategy="dbox",
        dialect=dialect,
        header=list(data[0]),
        data=data,
        boundaries=analysis.boundaries,
        warnings=analysis.warnings,
    )


class BoxFormat:
    """Reader object for box-format tables.

    Keeps the patterns and encodings, and remembers what the last read
    found (``header``, ``dialect``, ``boundaries``). Every read starts from
    a clean slate, so reusing one reader for unrelated inputs never mixes
    their results.

    Example::

        dbx = BoxFormat()
        table = dbx.read_dbox(input_file="/tmp/select_result.dbox")
        dbx.output_to_tsv("/tmp/select_result.tsv")
    """

    def __init__(
        self,
        patterns: BoxPatterns = DEFAULT_PATTERNS,
        input_encoding: str = "utf-8",
        output_encoding: str = "utf-8",
    ):
        self.patterns = patterns
        self.input_encoding = input_encoding
        self.output_encoding = output_encoding
        self._reset()

    def _reset(self) -> None:
        self.header: List[str] = []
        self.dialect: Optional[Dialect] = None
        self.boundaries: List[int] = []
        self.last_result: Optional[BoxTable] = None

    def _remember(self, table: BoxTable) -> BoxTable:
        self.header = list(table.header)
        self.dialect = table.dialect
        self.boundaries = list(table.boundaries)
        self.last_result = table
        return table

    def read_dbox(self, text: Optional[str] = None, input_file: str = "") -> BoxTable:
        """Parse with the ruler-based fixed-width strategy."""
        self._reset()
        source = load_input(text, input_file, self.input_encoding)
        return self._remember(parse_dbox(source, self.patterns))

    def read_simple(self, text: Optional[str] = None, input_file: str = "") -> BoxTable:
        """Parse with the delimiter-split fallback strategy."""
        from .simple import parse_simple

        self._reset()
        source = load_input(text, input_file, self.input_encoding)
        return self._remember(parse_simple(source, self.patterns))

    def _table_for_output(self, text: Optional[str], input_file: str) -> BoxTable:
        if text is not None or input_file:
            return self.read_dbox(text, input_file)
        if self.last_result is None:
            raise ValueError("Nothing to write: read a table first or pass its input")
        return self.last_result

    def output_to_tsv(
        self, output_file: str, text: Optional[str] = None, input_file: str = ""
    ) -> BoxTable:
        """Write a table as TSV: the given input, or else the last one read."""
        from ..export import write_tsv

        table = self._table_for_output(text, input_file)
        write_tsv(table, output_file, encoding=self.output_encoding)
        return table

    def output_to_csv(
        self, output_file: str, text: Optional[str] = None, input_file: str = ""
    ) -> BoxTable:
        """Write a table as CSV: the given input, or else the last one read."""
        from ..export import write_csv

        table = self._table_for_output(text, input_file)
        write_csv(table, output_file, encoding=self.output_encoding)
        return table
