"""
File writer utilities for extragrid.

Writes exported sheets to disk as a values TSV plus a JSON sidecar.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

from extragrid.utils import escape_tsv_value

if TYPE_CHECKING:
    from extragrid.converter import SparseSheet

DATA_FILE = "data.tsv"
SHEET_FILE = "sheet.json"


def to_tsv(values: list[list[str]]) -> str:
    """Serialize a value table as TSV (one newline-terminated line per row)."""
    return "".join("\t".join(escape_tsv_value(v) for v in row) + "\n" for row in values)


class FileWriter:
    """Writes sheet files to disk."""

    def __init__(self, base_path: str | Path) -> None:
        """Initialize the writer with a base output path.

        Args:
            base_path: Directory to write files to
        """
        self.base_path = Path(base_path)

    def write_sheet(self, sheet: SparseSheet, folder: str = "") -> list[Path]:
        """Write a sparse sheet as data.tsv and sheet.json.

        data.tsv holds the values; sheet.json holds the full document
        (rows, merges in A1 notation, style hints keyed by A1 cell).

        Returns:
            List of paths that were written
        """
        prefix = f"{folder}/" if folder else ""
        return [
            self.write_tsv(f"{prefix}{DATA_FILE}", to_tsv(sheet.values)),
            self.write_json(f"{prefix}{SHEET_FILE}", sheet.to_dict()),
        ]

    def write_tsv(self, rel_path: str, content: str) -> Path:
        """Write a TSV file.

        Args:
            rel_path: Relative path within base_path
            content: TSV content string

        Returns:
            Path to written file
        """
        full_path = self.base_path / rel_path
        full_path.parent.mkdir(parents=True, exist_ok=True)
        full_path.write_text(content, encoding="utf-8")
        return full_path

    def write_json(self, rel_path: str, content: dict[str, Any]) -> Path:
        """Write a JSON file.

        Args:
            rel_path: Relative path within base_path
            content: Dictionary to serialize as JSON

        Returns:
            Path to written file
        """
        full_path = self.base_path / rel_path
        full_path.parent.mkdir(parents=True, exist_ok=True)
        json_str = json.dumps(content, indent=2, ensure_ascii=False)
        full_path.write_text(json_str, encoding="utf-8")
        return full_path
