"""Custom exceptions for the extragrid grid model."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from extragrid.merges import MergeRegion


class GridError(Exception):
    """Base exception for all extragrid errors."""

    pass


class IndexOutOfRangeError(GridError, IndexError):
    """Raised when a coordinate falls outside the current grid dimensions.

    Coordinates are never clamped; callers always see this error instead.
    """

    def __init__(self, row: int, col: int | None, row_count: int, col_count: int) -> None:
        self.row = row
        self.col = col
        self.row_count = row_count
        self.col_count = col_count
        where = f"row {row}" if col is None else f"({row}, {col})"
        super().__init__(
            f"Coordinate {where} is outside the grid ({row_count}x{col_count})"
        )


class CellIsHiddenByMergeError(GridError):
    """Raised when editing a cell covered by a merged region.

    The anchor coordinate is attached so the caller can redirect the edit.
    """

    def __init__(self, row: int, col: int, anchor: tuple[int, int]) -> None:
        self.row = row
        self.col = col
        self.anchor = anchor
        super().__init__(
            f"Cell ({row}, {col}) is hidden by the merge anchored at {anchor}; "
            "edit the anchor cell instead."
        )


class MergeError(GridError):
    """Base exception for merge-region errors."""

    pass


class OverlappingMergeError(MergeError):
    """Raised when two merge regions claim the same cell."""

    def __init__(
        self, first: MergeRegion, second: MergeRegion, cell: tuple[int, int]
    ) -> None:
        self.first = first
        self.second = second
        self.cell = cell
        super().__init__(
            f"Merge regions {first.to_a1()} and {second.to_a1()} overlap at {cell}"
        )


class MergeOutOfBoundsError(MergeError):
    """Raised when a merge region references rows/columns beyond the grid."""

    def __init__(self, region: MergeRegion, row_count: int, col_count: int) -> None:
        self.region = region
        self.row_count = row_count
        self.col_count = col_count
        super().__init__(
            f"Merge region {region.to_a1()} is outside the grid "
            f"({row_count}x{col_count})"
        )


class StraddlingMergeError(MergeError):
    """Raised by strict inserts when a merge region spans the insertion point."""

    def __init__(self, region: MergeRegion, axis: str, index: int) -> None:
        self.region = region
        self.axis = axis
        self.index = index
        super().__init__(
            f"Cannot insert {axis} at {index}: merge region {region.to_a1()} "
            "straddles the insertion point"
        )


class MalformedMergeRegionError(MergeError):
    """Raised when an import carries a merge list the grid cannot accept.

    The original merge error is available as ``__cause__``.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Malformed merge regions: {reason}")


class InvalidLabelError(GridError, ValueError):
    """Raised for malformed column letters or A1 references."""

    def __init__(self, label: str) -> None:
        self.label = label
        super().__init__(f"Invalid column label or cell reference: {label!r}")


class InvalidFileError(GridError):
    """Raised when a sheet document is missing or has an invalid format."""

    def __init__(self, file_path: str, reason: str) -> None:
        self.file_path = file_path
        self.reason = reason
        super().__init__(f"Invalid file '{file_path}': {reason}")
