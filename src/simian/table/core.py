"""Table rendering with box-drawing borders.

Cells may carry terminal escape sequences. Widths are measured on the
visible characters only, so styled and unstyled tables line up the same way.

Examples
--------
>>> rows = [
...     TableRow.values("Name", "State"),
...     TableRow.separator(),
...     TableRow.values("iPhone 15", "Booted"),
... ]
>>> print(build_table(rows, glyphs="single"))
┌───────────┬────────┐
│ Name      │ State  │
├───────────┼────────┤
│ iPhone 15 │ Booted │
└───────────┴────────┘
"""

from __future__ import annotations

import dataclasses
import enum
import typing as t

from simian import exc
from simian.styles import DEFAULT_STYLE, StyleConfig, strip_ansi

if t.TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from typing_extensions import Self


class Alignment(enum.Enum):
    """How padding is placed around a cell's content."""

    LEFT = "left"
    RIGHT = "right"
    JUSTIFY = "justify"


@dataclasses.dataclass(frozen=True)
class ColumnConfig:
    """Per-column rendering options."""

    alignment: Alignment = Alignment.LEFT


class SeparatorPosition(enum.Enum):
    """Which horizontal rule is being drawn."""

    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"


@dataclasses.dataclass(frozen=True)
class TableRow:
    """A row of cell strings, or a separator when ``cells`` is ``None``.

    Examples
    --------
    >>> TableRow.values("a", "b").cells
    ('a', 'b')
    >>> TableRow.separator().is_separator
    True
    """

    cells: tuple[str, ...] | None = None

    @classmethod
    def values(cls, *cells: str) -> Self:
        """Create a data row."""
        return cls(cells=tuple(cells))

    @classmethod
    def separator(cls) -> Self:
        """Create a separator row."""
        return cls(cells=None)

    @property
    def is_separator(self) -> bool:
        """Whether this row draws a horizontal rule."""
        return self.cells is None


@dataclasses.dataclass(frozen=True)
class GlyphSet:
    """Characters used to draw borders and junctions."""

    corner_top_left: str
    corner_top_right: str
    corner_bottom_left: str
    corner_bottom_right: str
    horizontal_down: str
    horizontal_up: str
    vertical_left: str
    vertical_right: str
    horizontal: str
    vertical: str
    outer_horizontal: str
    outer_vertical: str
    center: str


DOUBLE_LINED = GlyphSet(
    corner_top_left="╔",
    corner_top_right="╗",
    corner_bottom_left="╚",
    corner_bottom_right="╝",
    horizontal_down="╦",
    horizontal_up="╩",
    vertical_left="╠",
    vertical_right="╣",
    horizontal="═",
    vertical="║",
    outer_horizontal="═",
    outer_vertical="║",
    center="╬",
)

DOUBLE_LINED_SINGLE_INTERIOR = GlyphSet(
    corner_top_left="╔",
    corner_top_right="╗",
    corner_bottom_left="╚",
    corner_bottom_right="╝",
    horizontal_down="╤",
    horizontal_up="╧",
    vertical_left="╟",
    vertical_right="╢",
    horizontal="─",
    vertical="│",
    outer_horizontal="═",
    outer_vertical="║",
    center="┼",
)

SINGLE_LINED = GlyphSet(
    corner_top_left="┌",
    corner_top_right="┐",
    corner_bottom_left="└",
    corner_bottom_right="┘",
    horizontal_down="┬",
    horizontal_up="┴",
    vertical_left="├",
    vertical_right="┤",
    horizontal="─",
    vertical="│",
    outer_horizontal="─",
    outer_vertical="│",
    center="┼",
)

SINGLE_LINED_CURVED = dataclasses.replace(
    SINGLE_LINED,
    corner_top_left="╭",
    corner_top_right="╮",
    corner_bottom_left="╰",
    corner_bottom_right="╯",
)

EMPTY = GlyphSet(*([""] * len(dataclasses.fields(GlyphSet))))

GLYPH_SETS: dict[str, GlyphSet] = {
    "double": DOUBLE_LINED,
    "double-single": DOUBLE_LINED_SINGLE_INTERIOR,
    "single": SINGLE_LINED,
    "single-curved": SINGLE_LINED_CURVED,
    "empty": EMPTY,
}


def get_glyph_set(glyphs: str | GlyphSet) -> GlyphSet:
    """Resolve a preset name, or pass a custom :class:`GlyphSet` through.

    Raises
    ------
    :exc:`exc.UnknownGlyphSet`
        If the name is not registered in :data:`GLYPH_SETS`.
    """
    if isinstance(glyphs, GlyphSet):
        return glyphs
    try:
        return GLYPH_SETS[glyphs]
    except KeyError:
        raise exc.UnknownGlyphSet(glyphs, available=list(GLYPH_SETS)) from None


# Measuring -------------------------------------------------------------
def visible_width(text: str) -> int:
    """Count characters after removing escape sequences.

    >>> visible_width("\\x1b[1mName\\x1b[0m")
    4
    """
    return len(strip_ansi(text))


def column_widths(rows: Iterable[TableRow]) -> list[int]:
    """Return the widest visible cell for each column.

    Separator rows are ignored. The first data row fixes the column count.

    Raises
    ------
    :exc:`exc.EmptyTable`
        If there are no data rows.
    :exc:`exc.RaggedTableRows`
        If a data row has a different number of cells than the first.
    """
    widths: list[int] | None = None
    for index, row in enumerate(rows):
        if row.cells is None:
            continue
        if widths is None:
            widths = [0] * len(row.cells)
        elif len(row.cells) != len(widths):
            raise exc.RaggedTableRows(index, len(widths), len(row.cells))
        for column, cell in enumerate(row.cells):
            widths[column] = max(widths[column], visible_width(cell))

    if widths is None:
        raise exc.EmptyTable
    return widths


# Rendering -------------------------------------------------------------
def _justify(cell: str, slack: int) -> str:
    words = [word for word in cell.split(" ") if word]
    if len(words) < 2:
        return cell + " " * slack

    gap = slack // (len(words) - 1) + 1
    budget = slack + 1
    parts = []
    for word in words:
        parts.append(word)
        spaces = min(gap, budget)
        parts.append(" " * spaces)
        budget -= spaces
    return "".join(parts)


def _align(cell: str, width: int, alignment: Alignment) -> str:
    slack = width - visible_width(cell)
    if alignment is Alignment.RIGHT:
        return " " * slack + cell
    if alignment is Alignment.JUSTIFY:
        content = _justify(cell, slack)
        return content + " " * (width - visible_width(content))
    return cell + " " * slack


def render_values_row(
    values: Sequence[str],
    widths: Sequence[int],
    columns: Sequence[ColumnConfig],
    glyphs: GlyphSet,
) -> str:
    """Render a data row, padding each cell to its column width.

    A cell wider than its column is kept whole rather than truncated.

    Examples
    --------
    >>> render_values_row(
    ...     ["foo bar", "1"],
    ...     [11, 3],
    ...     [ColumnConfig(Alignment.JUSTIFY), ColumnConfig(Alignment.RIGHT)],
    ...     SINGLE_LINED,
    ... )
    '│ foo     bar │   1 │'
    """
    cells = []
    for index, value in enumerate(values):
        width = widths[index]
        if visible_width(value) > width:
            cells.append(f" {value} ")
            continue
        alignment = columns[index].alignment if index < len(columns) else Alignment.LEFT
        cells.append(f" {_align(value, width, alignment)} ")

    outer = glyphs.outer_vertical
    return f"{outer}{glyphs.vertical.join(cells)}{outer}"


def render_separator_row(
    widths: Sequence[int],
    glyphs: GlyphSet,
    position: SeparatorPosition,
) -> str:
    """Render a top, middle or bottom horizontal rule."""
    if position is SeparatorPosition.TOP:
        left, fill, junction, right = (
            glyphs.corner_top_left,
            glyphs.outer_horizontal,
            glyphs.horizontal_down,
            glyphs.corner_top_right,
        )
    elif position is SeparatorPosition.BOTTOM:
        left, fill, junction, right = (
            glyphs.corner_bottom_left,
            glyphs.outer_horizontal,
            glyphs.horizontal_up,
            glyphs.corner_bottom_right,
        )
    else:
        left, fill, junction, right = (
            glyphs.vertical_left,
            glyphs.horizontal,
            glyphs.center,
            glyphs.vertical_right,
        )

    bars = [fill * (width + 2) for width in widths]
    return f"{left}{junction.join(bars)}{right}"


def render_middle_row(widths: Sequence[int], glyphs: GlyphSet) -> str:
    """Render the rule drawn for separator rows."""
    return render_separator_row(widths, glyphs, SeparatorPosition.MIDDLE)


# Assembling ------------------------------------------------------------
@dataclasses.dataclass(frozen=True)
class RenderedTable:
    """Text of a rendered table."""

    text: str

    def __str__(self) -> str:
        """Return the table text."""
        return self.text

    @property
    def lines(self) -> list[str]:
        """Rendered lines, borders included."""
        return self.text.split("\n")


class TableBuilder:
    """Lay out rows into a bordered table.

    Parameters
    ----------
    glyphs : str or GlyphSet
        Preset name from :data:`GLYPH_SETS` or a custom glyph set.
    style : StyleConfig
        When styling is disabled, escape sequences are stripped from cells.

    Examples
    --------
    >>> builder = TableBuilder(glyphs="empty")
    >>> builder.build([TableRow.values("a", "bb"), TableRow.values("ccc", "d")])
    '\\n a    bb \\n ccc  d  \\n'
    """

    def __init__(
        self,
        glyphs: str | GlyphSet = "double",
        style: StyleConfig = DEFAULT_STYLE,
    ) -> None:
        self.glyphs = get_glyph_set(glyphs)
        self.style = style

    def render(
        self,
        rows: Sequence[TableRow],
        columns: Sequence[ColumnConfig] = (),
    ) -> RenderedTable:
        """Render ``rows`` and wrap the text in a :class:`RenderedTable`."""
        if not self.style.enabled:
            rows = [
                row
                if row.cells is None
                else TableRow.values(*(strip_ansi(cell) for cell in row.cells))
                for row in rows
            ]

        widths = column_widths(rows)
        lines = [render_separator_row(widths, self.glyphs, SeparatorPosition.TOP)]
        for row in rows:
            if row.cells is None:
                lines.append(render_middle_row(widths, self.glyphs))
            else:
                lines.append(
                    render_values_row(row.cells, widths, columns, self.glyphs),
                )
        lines.append(render_separator_row(widths, self.glyphs, SeparatorPosition.BOTTOM))
        return RenderedTable("\n".join(lines))

    def build(
        self,
        rows: Sequence[TableRow],
        columns: Sequence[ColumnConfig] = (),
    ) -> str:
        """Render ``rows`` into a multi-line string."""
        return self.render(rows, columns).text


def build_table(
    rows: Sequence[TableRow],
    columns: Sequence[ColumnConfig] = (),
    glyphs: str | GlyphSet = "double",
    style: StyleConfig | None = None,
) -> str:
    """Render ``rows`` with the given glyph set."""
    builder = TableBuilder(glyphs=glyphs, style=style or DEFAULT_STYLE)
    return builder.build(rows, columns)


def build_table_from_mapping(
    mapping: Mapping[str, str],
    glyphs: str | GlyphSet = "double",
    style: StyleConfig | None = None,
) -> str:
    """Render a two-column key/value table, preserving mapping order.

    >>> print(build_table_from_mapping({"UDID": "1234", "State": "Booted"}))
    ╔═══════╦════════╗
    ║ UDID  ║ 1234   ║
    ║ State ║ Booted ║
    ╚═══════╩════════╝
    """
    rows = [TableRow.values(key, value) for key, value in mapping.items()]
    return build_table(rows, glyphs=glyphs, style=style)
