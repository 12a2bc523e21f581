"""dbox-core -- Parse database shell SELECT output into rows.

Reads the boxed text tables printed by mysql, psql (ascii or unicode) and
sqlite3 (``.header on`` / ``.mode column``) and hands back a header plus
rows, ready for TSV/CSV export, pandas, or a quick plot.

Quick start::

    from dbox_core import parse_dbox, write_tsv

    table = parse_dbox(open("/tmp/select_result.dbox").read())
    print(table.dialect.value, table.header)
    write_tsv(table, "/tmp/select_result.tsv")
"""

__version__ = "0.3.0"

# Parsing
from .parser import (
    BoxFormat,
    BoxPatterns,
    CharClass,
    DEFAULT_PATTERNS,
    analyze_ruler,
    classify,
    is_cross,
    is_delimiter,
    is_horizontal,
    parse_dbox,
    parse_simple,
)

# Types and errors
from ._types import BoxTable, Dialect, DialectLayout, PlotSpec, RulerAnalysis, unique_columns
from .errors import BoxFormatError, MissingInputError, MissingRulerError

# Input / output
from ._io import load_input, read_text
from .export import convert_file, format_tsv, to_dataframe, write_csv, write_tsv

# Plotting (rendering needs the [plot] extra)
from .plot import render_plot, resolve_axes

__all__ = [
    "__version__",
    # Parsing
    "parse_dbox",
    "parse_simple",
    "analyze_ruler",
    "BoxFormat",
    "BoxPatterns",
    "DEFAULT_PATTERNS",
    "CharClass",
    "classify",
    "is_horizontal",
    "is_cross",
    "is_delimiter",
    # Types
    "BoxTable",
    "Dialect",
    "DialectLayout",
    "RulerAnalysis",
    "PlotSpec",
    "unique_columns",
    # Errors
    "BoxFormatError",
    "MissingRulerError",
    "MissingInputError",
    # I/O
    "read_text",
    "load_input",
    "format_tsv",
    "write_tsv",
    "write_csv",
    "to_dataframe",
    "convert_file",
    # Plotting
    "resolve_axes",
    "render_plot",
]
