"""
Selection membership and edge resolution.

Selections are transient interaction state owned by the UI. This module only
answers questions about them: is a cell selected, and which of its edges lie
on the selection boundary (so the renderer knows where to draw the outline).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Union

from extragrid.utils import column_index_to_letter, range_to_a1


@dataclass(frozen=True)
class CellSelection:
    row: int
    col: int


@dataclass(frozen=True)
class RowSelection:
    row: int


@dataclass(frozen=True)
class ColumnSelection:
    col: int


@dataclass(frozen=True)
class RangeSelection:
    """Rectangular selection with inclusive bounds."""

    start_row: int
    start_col: int
    end_row: int
    end_col: int

    def __post_init__(self) -> None:
        if self.start_row > self.end_row or self.start_col > self.end_col:
            raise ValueError(
                "Range selection end precedes start; use RangeSelection.from_corners"
            )

    @classmethod
    def from_corners(cls, first: tuple[int, int], second: tuple[int, int]) -> RangeSelection:
        """Build a range from two drag corners given in any order."""
        (r1, c1), (r2, c2) = first, second
        return cls(min(r1, r2), min(c1, c2), max(r1, r2), max(c1, c2))


Selection = Union[CellSelection, RowSelection, ColumnSelection, RangeSelection]


class Edges(NamedTuple):
    top: bool = False
    bottom: bool = False
    left: bool = False
    right: bool = False


NO_EDGES = Edges()


def contains(selection: Selection | None, row: int, col: int) -> bool:
    """Check whether (row, col) is part of the selection."""
    if selection is None:
        return False
    if isinstance(selection, CellSelection):
        return selection.row == row and selection.col == col
    if isinstance(selection, RowSelection):
        return selection.row == row
    if isinstance(selection, ColumnSelection):
        return selection.col == col
    return (
        selection.start_row <= row <= selection.end_row
        and selection.start_col <= col <= selection.end_col
    )


def edges(
    selection: Selection | None, row: int, col: int, row_count: int, col_count: int
) -> Edges:
    """Report which edges of (row, col) lie on the selection boundary.

    Whole-row and whole-column selections use the grid dimensions to find
    their outer ends. Cells outside the selection have no edges.
    """
    if selection is None or not contains(selection, row, col):
        return NO_EDGES
    if isinstance(selection, CellSelection):
        return Edges(True, True, True, True)
    if isinstance(selection, RowSelection):
        return Edges(
            top=True, bottom=True, left=col == 0, right=col == col_count - 1
        )
    if isinstance(selection, ColumnSelection):
        return Edges(
            top=row == 0, bottom=row == row_count - 1, left=True, right=True
        )
    return Edges(
        top=row == selection.start_row,
        bottom=row == selection.end_row,
        left=col == selection.start_col,
        right=col == selection.end_col,
    )


def selection_to_a1(selection: Selection) -> str:
    """Describe a selection in A1 notation.

    Examples:
        CellSelection(3, 2) -> "C4"
        RowSelection(2) -> "3:3"
        ColumnSelection(1) -> "B:B"
        RangeSelection(3, 2, 8, 5) -> "C4:F9"
    """
    if isinstance(selection, CellSelection):
        return range_to_a1(selection.row, selection.col, selection.row, selection.col)
    if isinstance(selection, RowSelection):
        return f"{selection.row + 1}:{selection.row + 1}"
    if isinstance(selection, ColumnSelection):
        letter = column_index_to_letter(selection.col)
        return f"{letter}:{letter}"
    return range_to_a1(
        selection.start_row, selection.start_col, selection.end_row, selection.end_col
    )
