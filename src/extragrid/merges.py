"""
Merge regions and the merge index.

The index answers, for any grid coordinate, whether it anchors a merged
region (and with what span) or is hidden under another anchor. It is built
once from a merge list and never mutated; a changed merge list means a new
index.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, NamedTuple

from extragrid.exceptions import MergeOutOfBoundsError, OverlappingMergeError
from extragrid.utils import a1_to_range, range_to_a1


class Span(NamedTuple):
    row_span: int
    col_span: int


@dataclass(frozen=True, order=True)
class MergeRegion:
    """A rectangular merged region. All bounds are inclusive."""

    start_row: int
    start_col: int
    end_row: int
    end_col: int

    def __post_init__(self) -> None:
        if self.start_row < 0 or self.start_col < 0:
            raise ValueError(f"Merge region has negative start: {self!r}")
        if self.start_row > self.end_row or self.start_col > self.end_col:
            raise ValueError(f"Merge region end precedes start: {self!r}")

    @property
    def anchor(self) -> tuple[int, int]:
        return self.start_row, self.start_col

    @property
    def span(self) -> Span:
        return Span(
            self.end_row - self.start_row + 1, self.end_col - self.start_col + 1
        )

    def cell_count(self) -> int:
        row_span, col_span = self.span
        return row_span * col_span

    def cells(self) -> Iterable[tuple[int, int]]:
        for r in range(self.start_row, self.end_row + 1):
            for c in range(self.start_col, self.end_col + 1):
                yield r, c

    def contains(self, row: int, col: int) -> bool:
        return (
            self.start_row <= row <= self.end_row
            and self.start_col <= col <= self.end_col
        )

    def shifted(self, rows: int = 0, cols: int = 0) -> MergeRegion:
        return MergeRegion(
            self.start_row + rows,
            self.start_col + cols,
            self.end_row + rows,
            self.end_col + cols,
        )

    def to_a1(self) -> str:
        """Convert to A1 notation."""
        return range_to_a1(self.start_row, self.start_col, self.end_row, self.end_col)

    def to_dict(self) -> dict[str, int]:
        return {
            "startRow": self.start_row,
            "startCol": self.start_col,
            "endRow": self.end_row,
            "endCol": self.end_col,
        }

    @classmethod
    def from_anchor(cls, row: int, col: int, row_span: int, col_span: int) -> MergeRegion:
        return cls(row, col, row + row_span - 1, col + col_span - 1)

    @classmethod
    def from_a1(cls, a1_range: str) -> MergeRegion:
        """Create a region from A1 notation, e.g. "B2:C3"."""
        return cls(*a1_to_range(a1_range))

    @classmethod
    def parse(cls, raw: MergeRegion | str | Mapping[str, Any]) -> MergeRegion:
        """Accept any of the supported external merge shapes.

        - MergeRegion instances (returned as-is)
        - A1 strings: "B2:C3"
        - {"startRow", "startCol", "endRow", "endCol"}
        - xlsx-style {"s": {"r", "c"}, "e": {"r", "c"}}
        """
        if isinstance(raw, MergeRegion):
            return raw
        if isinstance(raw, str):
            return cls.from_a1(raw)
        if not isinstance(raw, Mapping):
            raise ValueError(
                f"Merge region must be an A1 string or an object, got {type(raw).__name__}: "
                f"{raw!r}"
            )
        try:
            if "s" in raw and "e" in raw:
                start, end = raw["s"], raw["e"]
                return cls(int(start["r"]), int(start["c"]), int(end["r"]), int(end["c"]))
            return cls(
                int(raw["startRow"]),
                int(raw["startCol"]),
                int(raw["endRow"]),
                int(raw["endCol"]),
            )
        except KeyError as e:
            raise ValueError(f"Merge region is missing field {e}: {dict(raw)!r}") from e
        except TypeError as e:
            raise ValueError(f"Merge region has a malformed field: {dict(raw)!r}") from e


class MergeIndex:
    """Read-only lookup of merge anchors and hidden cells.

    Use :meth:`build` to construct; it validates bounds and overlaps.
    """

    def __init__(
        self,
        anchors: dict[tuple[int, int], MergeRegion],
        hidden: dict[tuple[int, int], MergeRegion],
    ) -> None:
        self._anchors = anchors
        self._hidden = hidden

    @classmethod
    def build(
        cls, row_count: int, col_count: int, regions: Iterable[MergeRegion]
    ) -> MergeIndex:
        """Build an index for a grid of the given dimensions.

        Single-cell regions are accepted and recorded as 1x1 anchors.

        Raises:
            MergeOutOfBoundsError: If a region extends past the grid
            OverlappingMergeError: If two regions claim the same cell
        """
        anchors: dict[tuple[int, int], MergeRegion] = {}
        hidden: dict[tuple[int, int], MergeRegion] = {}
        # Every claimed cell -> region that claimed it
        owners: dict[tuple[int, int], MergeRegion] = {}

        for region in regions:
            if region.end_row >= row_count or region.end_col >= col_count:
                raise MergeOutOfBoundsError(region, row_count, col_count)

            for cell in region.cells():
                other = owners.get(cell)
                if other is not None:
                    raise OverlappingMergeError(other, region, cell)
                owners[cell] = region
                if cell == region.anchor:
                    anchors[cell] = region
                else:
                    hidden[cell] = region

        return cls(anchors, hidden)

    def __len__(self) -> int:
        return len(self._anchors)

    @property
    def regions(self) -> list[MergeRegion]:
        return sorted(self._anchors.values())

    def anchor_span(self, row: int, col: int) -> Span | None:
        """Return the span if (row, col) anchors a region, else None."""
        region = self._anchors.get((row, col))
        return region.span if region is not None else None

    def is_hidden(self, row: int, col: int) -> bool:
        return (row, col) in self._hidden

    def anchor_of(self, row: int, col: int) -> tuple[int, int] | None:
        """Return the anchor coordinate of the region covering a hidden cell."""
        region = self._hidden.get((row, col))
        return region.anchor if region is not None else None

    def region_at(self, row: int, col: int) -> MergeRegion | None:
        """Return the region containing (row, col), anchor or hidden."""
        return self._anchors.get((row, col)) or self._hidden.get((row, col))
