"""Shared result types for the dbox-core library.

Parsing returns Pydantic models; exporters return plain dicts.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# -- Dialects -----------------------------------------------------------------


class DialectLayout(BaseModel):
    """Where things sit in a table of a given dialect (0-based line numbers)."""

    model_config = ConfigDict(frozen=True)

    header_index: int
    first_data_index: int
    has_trailing_ruler: bool = False
    trim_borders: bool = False


class Dialect(str, Enum):
    """Database shell output styles recognized by the ruler analyzer."""

    MYSQL = "mysql"
    POSTGRES = "postgres"
    POSTGRES_UNICODE = "postgres_unicode"
    SQLITE = "sqlite"  # psql-style with space-only borders (sqlite3 .mode column)

    @property
    def layout(self) -> DialectLayout:
        return _LAYOUTS[self]


_BORDERLESS = DialectLayout(header_index=0, first_data_index=2)

_LAYOUTS: Dict[Dialect, DialectLayout] = {
    Dialect.MYSQL: DialectLayout(
        header_index=1,
        first_data_index=3,
        has_trailing_ruler=True,
        trim_borders=True,
    ),
    Dialect.POSTGRES: _BORDERLESS,
    Dialect.POSTGRES_UNICODE: _BORDERLESS,
    Dialect.SQLITE: _BORDERLESS,
}


# -- Parse results --------------------------------------------------------------


def unique_columns(names: List[str]) -> List[str]:
    """Make column names unique: a repeated name gets a suffix (`id`, `id_2`).

    Joins often select two columns with the same name; DataFrames and
    records need them apart.
    """
    taken = set(names)
    seen: set = set()
    result = []
    for name in names:
        candidate = name
        if name in seen:
            n = 2
            while f"{name}_{n}" in taken:
                n += 1
            candidate = f"{name}_{n}"
            taken.add(candidate)
        seen.add(candidate)
        result.append(candidate)
    return result


class RulerAnalysis(BaseModel):
    """What a ruler line says about the table around it."""

    model_config = ConfigDict(frozen=True)

    dialect: Dialect
    header_index: int
    first_data_index: int
    boundaries: List[int]
    cross: Optional[str] = None  # None for a single-column ruler
    ruler: str = ""  # ruler text the boundaries index into
    warnings: List[str] = Field(default_factory=list)


class BoxTable(BaseModel):
    """A parsed table: header plus data rows, all values as strings.

    ``data`` is the full row matrix with the header as row 0, which is the
    shape the exporters consume.
    """

    model_config = ConfigDict(frozen=True)

    strategy: str = "dbox"  # "dbox" | "simple"
    dialect: Optional[Dialect] = None
    header: List[str] = Field(default_factory=list)
    data: List[List[str]] = Field(default_factory=list)
    boundaries: List[int] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)

    @property
    def rows(self) -> List[List[str]]:
        """Data rows without the header."""
        return self.data[1:]

    @property
    def row_count(self) -> int:
        return max(len(self.data) - 1, 0)

    def is_rectangular(self) -> bool:
        """True when every row has as many fields as the header."""
        width = len(self.header)
        return all(len(row) == width for row in self.data)

    @property
    def columns(self) -> List[str]:
        """Header names made unique, as used for records and DataFrames."""
        return unique_columns(self.header)

    def records(self) -> List[Dict[str, Any]]:
        columns = self.columns
        return [dict(zip(columns, row)) for row in self.rows]

    def to_dataframe(self):
        """Return the table as a pandas DataFrame (string columns)."""
        from .export import to_dataframe

        return to_dataframe(self)


# -- Plotting -----------------------------------------------------------------


class PlotSpec(BaseModel):
    """Column choices for a scatter plot of a parsed table."""

    x_axis: str
    y_fields: List[str]
    group_by: List[str] = Field(default_factory=list)

    @property
    def colour(self) -> Optional[str]:
        return self.group_by[0] if self.group_by else None

    @property
    def marker(self) -> Optional[str]:
        return self.group_by[1] if len(self.group_by) > 1 else None
