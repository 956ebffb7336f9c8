"""
Sparse table <-> dense grid conversion.

Spreadsheet loaders deliver a sparse sheet: ragged rows of raw values, a
merge list and optional per-cell style hints. ``import_sheet`` turns that into
a rectangular Grid; ``export_sheet`` turns a Grid back into a sparse sheet that
spreadsheet writers can consume. For any sheet produced by ``export_sheet``,
exporting its import again yields the same values and merges.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable, Mapping, Sequence
from dataclasses import dataclass, field, replace
from typing import Any

from loguru import logger

from extragrid.cell import Cell, CellStyle
from extragrid.config import get_settings
from extragrid.exceptions import IndexOutOfRangeError, MalformedMergeRegionError, MergeError
from extragrid.formatting import ValueFormatter, to_text
from extragrid.grid import Grid
from extragrid.merges import MergeRegion
from extragrid.utils import a1_to_cell, cell_to_a1

COLUMN_WIDTH_KEY = "columnWidthPx"
ROW_HEIGHT_KEY = "rowHeightPx"

StyleHints = Mapping[Any, Mapping[str, Any]]


@dataclass
class SparseSheet:
    """Interchange form of a sheet.

    Attributes:
        values: Rectangular rows of display text
        merges: Merge regions (inclusive bounds)
        styles: Style hints keyed by (row, col). Column widths ride on row-0
            hints and row heights on column-0 hints.
    """

    values: list[list[str]]
    merges: list[MergeRegion] = field(default_factory=list)
    styles: dict[tuple[int, int], dict[str, Any]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable document using A1 notation."""
        result: dict[str, Any] = {"rows": self.values}
        if self.merges:
            result["merges"] = [region.to_a1() for region in self.merges]
        if self.styles:
            result["styles"] = {
                cell_to_a1(row, col): hint
                for (row, col), hint in sorted(self.styles.items())
            }
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SparseSheet:
        """Create a sparse sheet from a JSON document.

        Rows are kept as given (raw, possibly ragged); run them through
        ``import_sheet`` to get a rectangular grid.
        """
        rows = data.get("rows", [])
        merges = [MergeRegion.parse(raw) for raw in data.get("merges", [])]
        styles = {
            _parse_style_key(key): dict(hint)
            for key, hint in data.get("styles", {}).items()
        }
        return cls(values=[list(row) for row in rows], merges=merges, styles=styles)


def import_sheet(
    rows: Sequence[Sequence[Any]],
    merges: Iterable[MergeRegion | str | Mapping[str, Any]] = (),
    styles: StyleHints | None = None,
    *,
    formatter: ValueFormatter | None = None,
    formatted_columns: Collection[int] | None = None,
    header_rows: int = 0,
    placeholder: str | None = None,
) -> Grid:
    """Build a dense grid from a sparse sheet.

    Single-cell merge regions (e.g. "A1") carry no span and are dropped, so
    they do not come back from ``export_sheet``; every larger region does.

    Args:
        rows: Ragged rows of raw values (str, int, float, bool or None)
        merges: Merge regions in any shape accepted by MergeRegion.parse
        styles: Style hints keyed by (row, col) tuples or A1 references
        formatter: Converts raw values to text for formatted cells
        formatted_columns: Columns the formatter applies to (all if None)
        header_rows: Leading rows left unformatted
        placeholder: Text for empty values (configured default if None)

    Returns:
        A rectangular Grid with merges stamped

    Raises:
        MalformedMergeRegionError: If the merge list does not fit the table
        IndexOutOfRangeError: If a style hint falls outside the table
    """
    if placeholder is None:
        placeholder = get_settings().placeholder

    row_count = len(rows)
    col_count = max((len(row) for row in rows), default=0)
    grid = Grid.create_empty(row_count, col_count)

    def render(value: Any, r: int, c: int) -> str:
        if (
            formatter is not None
            and r >= header_rows
            and (formatted_columns is None or c in formatted_columns)
        ):
            return formatter(value)
        return to_text(value, placeholder)

    # Short rows are padded with empty values
    cells = [
        [
            Cell(value=render(row[c] if c < len(row) else None, r, c))
            for c in range(col_count)
        ]
        for r, row in enumerate(rows)
    ]

    widths: list[int | None] = [None] * col_count
    heights: list[int | None] = [None] * row_count
    for key, hint in (styles or {}).items():
        r, c = _parse_style_key(key)
        if not isinstance(hint, Mapping):
            raise ValueError(f"Style hint for {key!r} must be a mapping, got {hint!r}")
        if not (0 <= r < row_count and 0 <= c < col_count):
            raise IndexOutOfRangeError(r, c, row_count, col_count)
        cells[r][c] = cells[r][c].with_style(CellStyle.from_hint(hint))
        if hint.get(COLUMN_WIDTH_KEY) is not None:
            widths[c] = int(hint[COLUMN_WIDTH_KEY])
        if hint.get(ROW_HEIGHT_KEY) is not None:
            heights[r] = int(hint[ROW_HEIGHT_KEY])

    grid = replace(
        grid,
        rows=tuple(tuple(row) for row in cells),
        column_widths=tuple(widths),
        row_heights=tuple(heights),
    )

    try:
        regions = [MergeRegion.parse(raw) for raw in merges]
        grid = grid.apply_merge_regions(regions)
    except (MergeError, ValueError) as e:
        raise MalformedMergeRegionError(str(e)) from e

    logger.debug(
        "Imported {}x{} sheet with {} merges and {} style hints",
        row_count,
        col_count,
        len(grid.merges),
        len(styles or {}),
    )
    return grid


def export_sheet(grid: Grid) -> SparseSheet:
    """Convert a grid back to its sparse interchange form.

    Every cell value is emitted, including values under hidden cells, so the
    value table keeps the grid's full width. One merge region is collected
    per anchor cell.
    """
    merges: list[MergeRegion] = []
    styles: dict[tuple[int, int], dict[str, Any]] = {}

    for r, c, cell in grid.iter_cells():
        if cell.is_anchor:
            merges.append(MergeRegion.from_anchor(r, c, cell.row_span, cell.col_span))
        if cell.style is not None and not cell.style.is_empty():
            styles[(r, c)] = cell.style.to_hint()

    for c, width in enumerate(grid.column_widths):
        if width is not None:
            styles.setdefault((0, c), {})[COLUMN_WIDTH_KEY] = width
    for r, height in enumerate(grid.row_heights):
        if height is not None:
            styles.setdefault((r, 0), {})[ROW_HEIGHT_KEY] = height

    logger.debug(
        "Exported {}x{} grid with {} merges", grid.row_count, grid.col_count, len(merges)
    )
    return SparseSheet(values=grid.values(), merges=merges, styles=styles)


def _parse_style_key(key: Any) -> tuple[int, int]:
    """Accept (row, col) tuples/lists or A1 references as style keys."""
    if isinstance(key, str):
        return a1_to_cell(key)
    row, col = key
    return int(row), int(col)
