"""Scatter plots of parsed SELECT output.

Column selection follows the usual "x axis, then group-by categories, then
y values" layout of a GROUP BY query::

    +------------+-----------+-----------+
    | date       | type      | amount    |
    +------------+-----------+-----------+
    | 2010-09-01 | factory   | 146035.00 |
    | 2010-09-01 | marketing | 467087.00 |

With ``indie_count=2`` the x axis is ``date``, points are coloured by
``type`` and ``amount`` goes on the y axis.
"""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from ._types import BoxTable, PlotSpec

logger = logging.getLogger(__name__)

MAX_GROUP_BY = 2  # colour, marker

_MARKERS = ["o", "s", "^", "D", "v", "P", "X", "*"]


def _split_fields(spec: str) -> List[str]:
    return [f.strip() for f in re.split(r"[,|]", spec) if f.strip()]


def resolve_axes(
    header: List[str],
    dependents: str = "",
    independents: str = "",
    indie_count: Optional[int] = None,
) -> PlotSpec:
    """Pick the x axis, grouping categories and y fields from a header.

    Args:
        header: Column names of the table.
        dependents: Comma-separated x-axis field followed by any group-by
            categories.
        independents: Comma-separated fields for the y axis.
        indie_count: Alternative to the two lists: the first ``indie_count``
            columns are the x axis plus categories, the rest are y fields.
            Defaults to 1 when nothing is given.

    Raises:
        ValueError: On conflicting options, unknown columns, or when no
            column is left for the y axis.
    """
    if dependents and not independents:
        raise ValueError("When using dependents, also need independents.")
    if independents and not dependents:
        raise ValueError("When using independents, also need dependents.")
    if indie_count is not None and dependents:
        raise ValueError("Use either indie_count or dependents/independents, not both.")
    if not header:
        raise ValueError("Cannot plot a table without columns")

    if dependents:
        deps = _split_fields(dependents)
        ys = _split_fields(independents)
        unknown = [f for f in deps + ys if f not in header]
        if unknown:
            raise ValueError(f"Columns not found: {', '.join(unknown)}")
        x_axis, group_by = deps[0], deps[1:]
    else:
        count = 1 if indie_count is None else indie_count
        if count < 1:
            raise ValueError("indie_count must be at least 1")
        x_axis, group_by, ys = header[0], list(header[1:count]), list(header[count:])

    if not ys:
        raise ValueError("No columns left for the y axis")

    if len(group_by) > MAX_GROUP_BY:
        logger.warning(
            "Only %d group-by categories are drawn; ignoring %s",
            MAX_GROUP_BY, ", ".join(group_by[MAX_GROUP_BY:]),
        )
        group_by = group_by[:MAX_GROUP_BY]

    return PlotSpec(x_axis=x_axis, y_fields=ys, group_by=group_by)


def _numeric_where_possible(df: pd.DataFrame) -> pd.DataFrame:
    for col in df.columns:
        converted = pd.to_numeric(df[col], errors="coerce")
        if converted.notna().all():
            df[col] = converted
    return df


def render_plot(table: BoxTable, spec: PlotSpec, output_path: str | Path) -> Dict[str, Any]:
    """Draw a scatter plot of the table and save it as a PNG.

    Every y field is drawn against the x axis; the first group-by column
    picks the colour, the second the marker shape.

    Raises:
        ImportError: If matplotlib is not installed.
    """
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError(
            "matplotlib not installed. Run: pip install 'dbox-core[plot]'"
        )

    df = _numeric_where_possible(table.to_dataframe())
    out = Path(output_path)

    colour_keys = list(dict.fromkeys(df[spec.colour])) if spec.colour else [None]
    marker_keys = list(dict.fromkeys(df[spec.marker])) if spec.marker else [None]

    fig, ax = plt.subplots()
    try:
        for y_field in spec.y_fields:
            for ci, colour_key in enumerate(colour_keys):
                for mi, marker_key in enumerate(marker_keys):
                    subset = df
                    if spec.colour:
                        subset = subset[subset[spec.colour] == colour_key]
                    if spec.marker:
                        subset = subset[subset[spec.marker] == marker_key]
                    if subset.empty:
                        continue
                    label_parts = [str(k) for k in (colour_key, marker_key) if k is not None]
                    if len(spec.y_fields) > 1 or not label_parts:
                        label_parts.insert(0, y_field)
                    ax.scatter(
                        subset[spec.x_axis],
                        subset[y_field],
                        s=25,
                        color=f"C{ci % 10}" if spec.colour else None,
                        marker=_MARKERS[mi % len(_MARKERS)],
                        label=" / ".join(label_parts),
                    )

        ax.set_xlabel(spec.x_axis)
        ax.set_ylabel(", ".join(spec.y_fields))
        if spec.group_by or len(spec.y_fields) > 1:
            ax.legend(title=", ".join(spec.group_by) or None)
        fig.autofmt_xdate()
        fig.savefig(out)
    finally:
        plt.close(fig)

    logger.info("Saved plot to %s", out)
    return {
        "saved_to": str(out),
        "x_axis": spec.x_axis,
        "y_fields": list(spec.y_fields),
        "group_by": list(spec.group_by),
        "points": len(df) * len(spec.y_fields),
    }
