"""Table rendering for styled terminal output."""

from __future__ import annotations

from simian.table.core import (
    DOUBLE_LINED,
    DOUBLE_LINED_SINGLE_INTERIOR,
    EMPTY,
    GLYPH_SETS,
    SINGLE_LINED,
    SINGLE_LINED_CURVED,
    Alignment,
    ColumnConfig,
    GlyphSet,
    RenderedTable,
    SeparatorPosition,
    TableBuilder,
    TableRow,
    build_table,
    build_table_from_mapping,
    column_widths,
    get_glyph_set,
    render_middle_row,
    render_separator_row,
    render_values_row,
    visible_width,
)

__all__ = [
    "DOUBLE_LINED",
    "DOUBLE_LINED_SINGLE_INTERIOR",
    "EMPTY",
    "GLYPH_SETS",
    "SINGLE_LINED",
    "SINGLE_LINED_CURVED",
    "Alignment",
    "ColumnConfig",
    "GlyphSet",
    "RenderedTable",
    "SeparatorPosition",
    "TableBuilder",
    "TableRow",
    "build_table",
    "build_table_from_mapping",
    "column_widths",
    "get_glyph_set",
    "render_middle_row",
    "render_separator_row",
    "render_values_row",
    "visible_width",
]
