"""Exporters -- TSV, CSV and pandas DataFrames from parsed tables."""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Any, List, Sequence, Union

import pandas as pd

from ._io import load_input
from ._types import BoxTable, unique_columns

logger = logging.getLogger(__name__)

_FORMATS = {"tsv", "csv"}
_STRATEGIES = {"dbox", "simple"}

RowData = Union[BoxTable, Sequence[Sequence[str]]]


def _rows(data: RowData) -> List[List[str]]:
    if isinstance(data, BoxTable):
        return data.data
    return [list(row) for row in data]


def _summary(rows: List[List[str]], fmt: str, out: Path) -> dict[str, Any]:
    return {
        "saved_to": str(out),
        "format": fmt,
        "rows": max(len(rows) - 1, 0),
        "columns": list(rows[0]) if rows else [],
    }


def format_tsv(data: RowData) -> str:
    """Join fields with tabs, one row per line."""
    return "".join("\t".join(row) + "\n" for row in _rows(data))


def write_tsv(data: RowData, output_path: str | Path, encoding: str = "utf-8") -> dict[str, Any]:
    """Write rows (header first) to a tab-separated file.

    Values are written as-is; a tab inside a value is not escaped.
    """
    rows = _rows(data)
    out = Path(output_path)
    out.write_text(format_tsv(rows), encoding=encoding)
    logger.info("Wrote %d rows to %s", max(len(rows) - 1, 0), out)
    return _summary(rows, "tsv", out)


def write_csv(data: RowData, output_path: str | Path, encoding: str = "utf-8") -> dict[str, Any]:
    """Write rows (header first) to a CSV file with standard quoting."""
    rows = _rows(data)
    out = Path(output_path)
    with open(out, "w", newline="", encoding=encoding) as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerows(rows)
    logger.info("Wrote %d rows to %s", max(len(rows) - 1, 0), out)
    return _summary(rows, "csv", out)


def to_dataframe(data: RowData) -> pd.DataFrame:
    """Build a DataFrame with the header as column names; values stay strings.

    Repeated header names get a suffix (``id``, ``id_2``) so every column
    can be selected by name.
    """
    rows = _rows(data)
    if not rows:
        return pd.DataFrame()
    return pd.DataFrame(rows[1:], columns=unique_columns(rows[0]), dtype=str)


def convert_file(
    input_path: str | Path,
    output_path: str | Path,
    fmt: str = "",
    strategy: str = "dbox",
    input_encoding: str = "utf-8",
    output_encoding: str = "utf-8",
) -> dict[str, Any]:
    """Parse a dbox file and write it out as TSV or CSV.

    Args:
        input_path: Box-format text file.
        output_path: Destination file.
        fmt: 'tsv' or 'csv'; inferred from the output suffix when empty
            ('.csv' gives csv, anything else tsv).
        strategy: 'dbox' (ruler-based) or 'simple' (delimiter split).
        input_encoding: Encoding of the input file.
        output_encoding: Encoding of the output file.

    Returns:
        Dict with saved_to, format, rows, columns, dialect and warnings.

    Raises:
        ValueError: If the format or strategy is unknown.
    """
    from .parser import parse_dbox, parse_simple

    out = Path(output_path)
    fmt = (fmt or ("csv" if out.suffix.lower() == ".csv" else "tsv")).lower()
    if fmt not in _FORMATS:
        raise ValueError(f"Unknown output format: {fmt}")
    if strategy not in _STRATEGIES:
        raise ValueError(f"Unknown strategy: {strategy}")

    text = load_input(file_path=str(input_path), encoding=input_encoding)
    table = parse_dbox(text) if strategy == "dbox" else parse_simple(text)

    writer = write_csv if fmt == "csv" else write_tsv
    result = writer(table, out, encoding=output_encoding)
    result["dialect"] = table.dialect.value if table.dialect else None
    result["warnings"] = list(table.warnings)
    return result
