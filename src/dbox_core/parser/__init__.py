"""dbox-core parser -- box-format SELECT output to rows.

Public API:
    parse_dbox     -- Ruler-based fixed-width parsing (canonical)
    parse_simple   -- Delimiter-split parsing (fallback)
    analyze_ruler  -- Dialect and column boundaries from a ruler line
    BoxFormat      -- Reader object remembering the last table read
    BoxPatterns    -- Immutable set of parsing regular expressions
    classify / is_horizontal / is_cross / is_delimiter -- Character classes
"""

from .charclass import (
    CROSS_CHARS,
    DEFAULT_PATTERNS,
    DELIMITER_CHARS,
    HORIZONTAL_CHARS,
    BoxPatterns,
    CharClass,
    classify,
    is_cross,
    is_delimiter,
    is_horizontal,
)

from .ruler import (
    analyze_ruler,
    collapse_boundaries,
    cross_offsets,
    find_cross,
)

from .box import (
    BoxFormat,
    parse_dbox,
    slice_fields,
    split_lines,
    trim_borders,
)

from .simple import parse_simple

__all__ = [
    # Character classes
    "CharClass",
    "HORIZONTAL_CHARS",
    "CROSS_CHARS",
    "DELIMITER_CHARS",
    "classify",
    "is_horizontal",
    "is_cross",
    "is_delimiter",
    "BoxPatterns",
    "DEFAULT_PATTERNS",
    # Ruler
    "analyze_ruler",
    "find_cross",
    "cross_offsets",
    "collapse_boundaries",
    # Box parser
    "parse_dbox",
    "split_lines",
    "slice_fields",
    "trim_borders",
    "BoxFormat",
    # Fallback
    "parse_simple",
]
