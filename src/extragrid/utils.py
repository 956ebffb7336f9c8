"""
Utility functions for extragrid.

Provides column-letter and A1 coordinate conversion plus TSV escaping.
"""

from __future__ import annotations

import re

from extragrid.exceptions import InvalidLabelError

_A1_PATTERN = re.compile(r"^([A-Za-z]+)(\d+)$")


def column_index_to_letter(index: int) -> str:
    """Convert a zero-based column index to column letter(s).

    Column letters are bijective base-26 (there is no zero digit).

    Examples:
        0 -> A, 1 -> B, 25 -> Z, 26 -> AA, 27 -> AB, 702 -> AAA
    """
    if index < 0:
        raise ValueError(f"Column index must be non-negative, got {index}")
    result = ""
    while True:
        result = chr(ord("A") + (index % 26)) + result
        index = index // 26 - 1
        if index < 0:
            break
    return result


def letter_to_column_index(letter: str) -> int:
    """Convert column letter(s) to a zero-based column index.

    Examples:
        A -> 0, B -> 1, Z -> 25, AA -> 26, AB -> 27, AAA -> 702

    Raises:
        InvalidLabelError: If the label is empty or contains non-letters
    """
    if not letter or not letter.isascii() or not letter.isalpha():
        raise InvalidLabelError(letter)
    result = 0
    for char in letter.upper():
        result = result * 26 + (ord(char) - ord("A") + 1)
    return result - 1


def cell_to_a1(row_index: int, col_index: int) -> str:
    """Convert zero-based row and column indices to A1 notation.

    Examples:
        (0, 0) -> A1, (0, 1) -> B1, (9, 2) -> C10
    """
    if row_index < 0:
        raise ValueError(f"Row index must be non-negative, got {row_index}")
    return f"{column_index_to_letter(col_index)}{row_index + 1}"


def a1_to_cell(a1: str) -> tuple[int, int]:
    """Convert A1 notation to zero-based (row_index, col_index).

    Examples:
        A1 -> (0, 0), B1 -> (0, 1), C10 -> (9, 2)
    """
    match = _A1_PATTERN.match(a1.strip())
    if not match:
        raise InvalidLabelError(a1)
    col_letter, row_str = match.groups()
    row = int(row_str) - 1
    if row < 0:
        raise InvalidLabelError(a1)
    return row, letter_to_column_index(col_letter)


def range_to_a1(start_row: int, start_col: int, end_row: int, end_col: int) -> str:
    """Convert an inclusive zero-based rectangle to A1 notation.

    Examples:
        (3, 2, 8, 5) -> C4:F9
        (0, 0, 0, 0) -> A1
    """
    start = cell_to_a1(start_row, start_col)
    end = cell_to_a1(end_row, end_col)
    if start == end:
        return start
    return f"{start}:{end}"


def a1_to_range(a1_range: str) -> tuple[int, int, int, int]:
    """Convert an A1 range like "C4:F9" (or a single cell) to inclusive indices.

    Returns:
        (start_row, start_col, end_row, end_col)
    """
    if ":" in a1_range:
        start, end = a1_range.split(":", 1)
        start_row, start_col = a1_to_cell(start)
        end_row, end_col = a1_to_cell(end)
    else:
        start_row, start_col = a1_to_cell(a1_range)
        end_row, end_col = start_row, start_col
    return start_row, start_col, end_row, end_col


def escape_tsv_value(value: str) -> str:
    """Escape a value for TSV format.

    Escapes tabs, newlines, and backslashes.
    """
    return (
        value.replace("\\", "\\\\")
        .replace("\t", "\\t")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )


def unescape_tsv_value(value: str) -> str:
    """Unescape a TSV value."""
    result = []
    i = 0
    while i < len(value):
        if value[i] == "\\" and i + 1 < len(value):
            next_char = value[i + 1]
            if next_char == "t":
                result.append("\t")
            elif next_char == "n":
                result.append("\n")
            elif next_char == "r":
                result.append("\r")
            elif next_char == "\\":
                result.append("\\")
            else:
                result.append(value[i : i + 2])
            i += 2
        else:
            result.append(value[i])
            i += 1
    return "".join(result)
