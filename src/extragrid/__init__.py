"""extragrid - Dense spreadsheet grid model with merged-cell handling.

This library turns sparse spreadsheet tables (ragged rows, merge lists and
style hints) into an editable dense grid and back, keeping merges and styles
intact across the round trip.
"""

__version__ = "0.1.0"

from loguru import logger

from extragrid.cell import Cell, CellStyle
from extragrid.converter import SparseSheet, export_sheet, import_sheet
from extragrid.exceptions import (
    CellIsHiddenByMergeError,
    GridError,
    IndexOutOfRangeError,
    InvalidFileError,
    InvalidLabelError,
    MalformedMergeRegionError,
    MergeError,
    MergeOutOfBoundsError,
    OverlappingMergeError,
    StraddlingMergeError,
)
from extragrid.formatting import format_time_of_day, time_formatter, to_text
from extragrid.grid import Grid
from extragrid.merges import MergeIndex, MergeRegion, Span
from extragrid.selection import (
    CellSelection,
    ColumnSelection,
    Edges,
    RangeSelection,
    RowSelection,
    Selection,
    contains,
    edges,
    selection_to_a1,
)
from extragrid.utils import (
    a1_to_cell,
    cell_to_a1,
    column_index_to_letter,
    letter_to_column_index,
    range_to_a1,
)

# Library code stays quiet until an application opts in via configure_logging
logger.disable("extragrid")

__all__ = [
    "Cell",
    "CellIsHiddenByMergeError",
    "CellSelection",
    "CellStyle",
    "ColumnSelection",
    "Edges",
    "Grid",
    "GridError",
    "IndexOutOfRangeError",
    "InvalidFileError",
    "InvalidLabelError",
    "MalformedMergeRegionError",
    "MergeError",
    "MergeIndex",
    "MergeOutOfBoundsError",
    "MergeRegion",
    "OverlappingMergeError",
    "RangeSelection",
    "RowSelection",
    "Selection",
    "Span",
    "SparseSheet",
    "StraddlingMergeError",
    "__version__",
    "a1_to_cell",
    "cell_to_a1",
    "column_index_to_letter",
    "contains",
    "edges",
    "export_sheet",
    "format_time_of_day",
    "import_sheet",
    "letter_to_column_index",
    "range_to_a1",
    "selection_to_a1",
    "time_formatter",
    "to_text",
]
