"""Read sheet documents from disk."""

from __future__ import annotations

import json
from pathlib import Path  # noqa: TC003 - used at runtime
from typing import Any

from extragrid.exceptions import InvalidFileError
from extragrid.utils import unescape_tsv_value


def read_sheet_document(path: Path) -> dict[str, Any]:
    """Read a JSON sheet document.

    The document holds raw rows plus optional merges and style hints::

        {"rows": [["Name", "Start"], ["Ada", 0.375]],
         "merges": ["A1:B1"],
         "styles": {"A1": {"bold": true}}}

    Args:
        path: Path to the JSON file

    Returns:
        The parsed document with "rows", "merges" and "styles" keys

    Raises:
        InvalidFileError: If the file is missing, not JSON, or misshapen
    """
    if not path.exists():
        raise InvalidFileError(str(path), "File not found")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise InvalidFileError(str(path), f"Invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise InvalidFileError(str(path), "Top-level value must be an object")

    rows = data.get("rows")
    if not isinstance(rows, list) or not all(isinstance(row, list) for row in rows):
        raise InvalidFileError(str(path), "'rows' must be a list of lists")

    merges = data.get("merges", [])
    if not isinstance(merges, list):
        raise InvalidFileError(str(path), "'merges' must be a list")
    for merge in merges:
        if not isinstance(merge, (str, dict)):
            raise InvalidFileError(
                str(path), f"Each merge must be an A1 string or an object, got {merge!r}"
            )

    styles = data.get("styles", {})
    if not isinstance(styles, dict):
        raise InvalidFileError(str(path), "'styles' must be an object keyed by A1 cell")
    for key, hint in styles.items():
        if not isinstance(hint, dict):
            raise InvalidFileError(str(path), f"Style hint for {key} must be an object")

    return {"rows": rows, "merges": merges, "styles": styles}


def parse_tsv(content: str) -> list[list[str]]:
    """Parse TSV content into a 2D grid.

    Handles escaped characters (\\t, \\n, \\r, \\\\).

    Args:
        content: TSV file content

    Returns:
        2D list of cell values
    """
    # Blank cells are still cells: only a truly empty file has no rows
    if not content:
        return []

    # Only the final row terminator is dropped; earlier empty lines are blank rows
    if content.endswith("\n"):
        content = content[:-1]
    lines = content.split("\n")
    return [[unescape_tsv_value(cell) for cell in line.split("\t")] for line in lines]
