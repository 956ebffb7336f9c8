"""
Dense grid model.

A Grid is a rectangular block of Cells plus the merge list stamped onto it
and two parallel dimension tables (column widths, row heights). Grids are
values: every operation returns a new Grid and leaves the receiver as it was,
so a failed operation never leaves a half-applied grid behind.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field, replace
from functools import cached_property
from typing import Any

from loguru import logger

from extragrid.cell import EMPTY_CELL, Cell, CellStyle
from extragrid.config import get_settings
from extragrid.exceptions import (
    CellIsHiddenByMergeError,
    IndexOutOfRangeError,
    MergeOutOfBoundsError,
    StraddlingMergeError,
)
from extragrid.merges import MergeIndex, MergeRegion

Row = tuple[Cell, ...]


@dataclass(frozen=True)
class Grid:
    """An immutable, rectangular grid of cells.

    Column widths and row heights live in ``column_widths`` and
    ``row_heights`` (None means the renderer's default size) instead of being
    stored on row-0 / column-0 cells.

    ``merges`` must agree with the anchor spans and hidden flags of the cells;
    build grids with :meth:`create_empty` and set merges through
    :meth:`apply_merge_regions` rather than passing them to the constructor.
    """

    rows: tuple[Row, ...] = ()
    merges: tuple[MergeRegion, ...] = ()
    column_widths: tuple[int | None, ...] = field(default=())
    row_heights: tuple[int | None, ...] = field(default=())

    def __post_init__(self) -> None:
        col_count = len(self.rows[0]) if self.rows else 0
        for index, row in enumerate(self.rows):
            if len(row) != col_count:
                raise ValueError(
                    f"Grid rows must have equal length: row {index} has "
                    f"{len(row)} cells, expected {col_count}"
                )
        # Dimension tables default to "all default size"
        if not self.column_widths and col_count:
            object.__setattr__(self, "column_widths", (None,) * col_count)
        if not self.row_heights and self.rows:
            object.__setattr__(self, "row_heights", (None,) * len(self.rows))
        if len(self.column_widths) != col_count:
            raise ValueError(
                f"Expected {col_count} column widths, got {len(self.column_widths)}"
            )
        if len(self.row_heights) != len(self.rows):
            raise ValueError(
                f"Expected {len(self.rows)} row heights, got {len(self.row_heights)}"
            )
        for region in self.merges:
            self._check_stamped(region, col_count)

    def _check_stamped(self, region: MergeRegion, col_count: int) -> None:
        # The merge list must already be stamped onto the cells
        if region.end_row >= len(self.rows) or region.end_col >= col_count:
            raise MergeOutOfBoundsError(region, len(self.rows), col_count)
        anchor = self.rows[region.start_row][region.start_col]
        covered = (
            self.rows[r][c].hidden for r, c in region.cells() if (r, c) != region.anchor
        )
        if (anchor.row_span, anchor.col_span) != region.span or not all(covered):
            raise ValueError(
                f"Merge {region.to_a1()} does not match the cells' spans and hidden "
                "flags; set merges with apply_merge_regions"
            )

    @classmethod
    def create_empty(cls, rows: int | None = None, cols: int | None = None) -> Grid:
        """Create a grid of empty cells with no merges.

        Dimensions default to the configured baseline (50x30 unless
        overridden through settings).
        """
        settings = get_settings()
        rows = settings.default_rows if rows is None else rows
        cols = settings.default_cols if cols is None else cols
        if rows < 0 or cols < 0:
            raise ValueError(f"Grid dimensions must be non-negative, got {rows}x{cols}")
        if rows == 0:
            return cls()
        empty_row: Row = (EMPTY_CELL,) * cols
        return cls(rows=(empty_row,) * rows)

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def col_count(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    def dimensions(self) -> tuple[int, int]:
        """Return (row_count, col_count)."""
        return self.row_count, self.col_count

    def cell_at(self, row: int, col: int) -> Cell:
        self._check_coordinate(row, col)
        return self.rows[row][col]

    @cached_property
    def merge_index(self) -> MergeIndex:
        """Merge index derived from this grid's merge list."""
        return MergeIndex.build(self.row_count, self.col_count, self.merges)

    def iter_cells(self) -> Iterator[tuple[int, int, Cell]]:
        """Yield (row, col, cell) in row-major order."""
        for r, row in enumerate(self.rows):
            for c, cell in enumerate(row):
                yield r, c, cell

    def values(self) -> list[list[str]]:
        """Return the value-only projection of the grid."""
        return [[cell.value for cell in row] for row in self.rows]

    def headers(self) -> list[str]:
        """Return the values of the first row (empty list for an empty grid)."""
        if not self.rows:
            return []
        return [cell.value for cell in self.rows[0]]

    def find_row(self, key: str, column: int = 0, *, skip_header: bool = True) -> int | None:
        """Find the first row whose cell in ``column`` equals ``key``.

        Both sides are compared after stripping whitespace. Used to locate a
        person's line in a planning sheet by their identifier.

        Returns:
            Row index, or None if no row matches
        """
        if self.rows and not 0 <= column < self.col_count:
            raise IndexOutOfRangeError(0, column, self.row_count, self.col_count)
        needle = key.strip()
        start = 1 if skip_header else 0
        for r in range(start, self.row_count):
            if self.rows[r][column].value.strip() == needle:
                return r
        return None

    def search_rows(self, term: str) -> list[int]:
        """Return indices of rows containing ``term`` (case-insensitive).

        The header row is always kept so the result stays readable. An empty
        term matches every row.
        """
        needle = term.strip().lower()
        if not needle:
            return list(range(self.row_count))
        matches: list[int] = []
        for r, row in enumerate(self.rows):
            if r == 0 or any(needle in cell.value.lower() for cell in row):
                matches.append(r)
        return matches

    # ------------------------------------------------------------------
    # Mutations (each returns a new Grid)
    # ------------------------------------------------------------------

    def set_cell_value(self, row: int, col: int, value: str) -> Grid:
        """Return a grid with the value at (row, col) replaced.

        Raises:
            IndexOutOfRangeError: If (row, col) is outside the grid
            CellIsHiddenByMergeError: If the cell is covered by a merge
        """
        self._check_coordinate(row, col)
        anchor = self.merge_index.anchor_of(row, col)
        if anchor is not None:
            raise CellIsHiddenByMergeError(row, col, anchor)
        return self._replace_cell(row, col, self.rows[row][col].with_value(value))

    def set_cell_style(self, row: int, col: int, style: CellStyle | None) -> Grid:
        self._check_coordinate(row, col)
        return self._replace_cell(row, col, self.rows[row][col].with_style(style))

    def set_column_width(self, col: int, width: int | None) -> Grid:
        if not 0 <= col < self.col_count:
            raise IndexOutOfRangeError(0, col, self.row_count, self.col_count)
        widths = list(self.column_widths)
        widths[col] = width
        return replace(self, column_widths=tuple(widths))

    def set_row_height(self, row: int, height: int | None) -> Grid:
        if not 0 <= row < self.row_count:
            raise IndexOutOfRangeError(row, None, self.row_count, self.col_count)
        heights = list(self.row_heights)
        heights[row] = height
        return replace(self, row_heights=tuple(heights))

    def insert_row(self, at: int, *, strict: bool | None = None) -> Grid:
        """Insert a row of empty cells before index ``at``.

        Merge regions starting at or below ``at`` move down one row. Regions
        straddling ``at`` keep their coordinates, so they now cover the new
        row and release their old last row. With ``strict=True`` a straddling
        region raises StraddlingMergeError instead; when ``strict`` is None
        the ``strict_merges`` setting decides.
        """
        if not 0 <= at <= self.row_count:
            raise IndexOutOfRangeError(at, None, self.row_count, self.col_count)
        if strict is None:
            strict = get_settings().strict_merges

        merges: list[MergeRegion] = []
        for region in self.merges:
            if region.start_row >= at:
                merges.append(region.shifted(rows=1))
            elif region.end_row >= at:
                if strict:
                    raise StraddlingMergeError(region, "row", at)
                logger.debug("Row insert at {} leaves merge {} unshifted", at, region.to_a1())
                merges.append(region)
            else:
                merges.append(region)

        new_row: Row = (EMPTY_CELL,) * self.col_count
        grid = Grid(
            rows=self.rows[:at] + (new_row,) + self.rows[at:],
            column_widths=self.column_widths,
            row_heights=self.row_heights[:at] + (None,) + self.row_heights[at:],
        )
        return grid.apply_merge_regions(merges)

    def insert_column(self, at: int, *, strict: bool | None = None) -> Grid:
        """Insert a column of empty cells before index ``at``.

        Same merge policy as :meth:`insert_row`, applied to columns.
        """
        if not 0 <= at <= self.col_count:
            raise IndexOutOfRangeError(0, at, self.row_count, self.col_count)
        if not self.rows:
            # Nothing to widen: an empty grid has no columns to insert between
            return self
        if strict is None:
            strict = get_settings().strict_merges

        merges: list[MergeRegion] = []
        for region in self.merges:
            if region.start_col >= at:
                merges.append(region.shifted(cols=1))
            elif region.end_col >= at:
                if strict:
                    raise StraddlingMergeError(region, "column", at)
                logger.debug(
                    "Column insert at {} leaves merge {} unshifted", at, region.to_a1()
                )
                merges.append(region)
            else:
                merges.append(region)

        grid = Grid(
            rows=tuple(row[:at] + (EMPTY_CELL,) + row[at:] for row in self.rows),
            column_widths=self.column_widths[:at] + (None,) + self.column_widths[at:],
            row_heights=self.row_heights,
        )
        return grid.apply_merge_regions(merges)

    def apply_merge_regions(
        self, regions: Iterable[MergeRegion | str | Mapping[str, Any]]
    ) -> Grid:
        """Stamp a merge list onto the grid.

        Spans and hidden flags from any previous merge list are cleared first.
        Single-cell regions carry no span and are dropped.

        Raises:
            MergeOutOfBoundsError: If a region extends past the grid
            OverlappingMergeError: If two regions claim the same cell
        """
        parsed = [MergeRegion.parse(raw) for raw in regions]
        # Validate everything before building any new row
        index = MergeIndex.build(
            self.row_count,
            self.col_count,
            [region for region in parsed if region.cell_count() > 1],
        )

        new_rows: list[Row] = []
        for r, row in enumerate(self.rows):
            cells: list[Cell] = []
            for c, cell in enumerate(row):
                cell = cell.unmerged()
                span = index.anchor_span(r, c)
                if span is not None:
                    cell = cell.anchored(*span)
                elif index.is_hidden(r, c):
                    cell = cell.covered()
                cells.append(cell)
            new_rows.append(tuple(cells))

        logger.debug(
            "Stamped {} merge regions onto {}x{} grid",
            len(index),
            self.row_count,
            self.col_count,
        )
        grid = replace(self, rows=tuple(new_rows), merges=tuple(index.regions))
        # Reuse the index that was just validated
        grid.__dict__["merge_index"] = index
        return grid

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _check_coordinate(self, row: int, col: int) -> None:
        if not (0 <= row < self.row_count and 0 <= col < self.col_count):
            raise IndexOutOfRangeError(row, col, self.row_count, self.col_count)

    def _replace_cell(self, row: int, col: int, cell: Cell) -> Grid:
        # Only the edited row is rebuilt; the other row tuples are shared
        old_row = self.rows[row]
        new_row = old_row[:col] + (cell,) + old_row[col + 1 :]
        grid = replace(self, rows=self.rows[:row] + (new_row,) + self.rows[row + 1 :])
        if "merge_index" in self.__dict__:
            grid.__dict__["merge_index"] = self.__dict__["merge_index"]
        return grid
