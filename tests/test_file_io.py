"""Tests for sheet document reading and writing."""

import json
from pathlib import Path

import pytest

from extragrid.converter import SparseSheet, export_sheet, import_sheet
from extragrid.exceptions import InvalidFileError
from extragrid.file_reader import parse_tsv, read_sheet_document
from extragrid.merges import MergeRegion
from extragrid.writer import FileWriter, to_tsv


def write_document(tmp_path: Path, content: object) -> Path:
    path = tmp_path / "sheet.json"
    path.write_text(json.dumps(content), encoding="utf-8")
    return path


class TestReadSheetDocument:
    def test_reads_full_document(self, tmp_path: Path) -> None:
        path = write_document(
            tmp_path,
            {
                "rows": [["Name", "Start"], ["Ada", 0.375]],
                "merges": ["A1:B1"],
                "styles": {"A1": {"bold": True}},
            },
        )
        document = read_sheet_document(path)
        assert document["rows"] == [["Name", "Start"], ["Ada", 0.375]]
        assert document["merges"] == ["A1:B1"]
        assert document["styles"] == {"A1": {"bold": True}}

    def test_optional_sections_default_empty(self, tmp_path: Path) -> None:
        document = read_sheet_document(write_document(tmp_path, {"rows": [["a"]]}))
        assert document["merges"] == []
        assert document["styles"] == {}

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(InvalidFileError, match="File not found"):
            read_sheet_document(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(InvalidFileError, match="Invalid JSON"):
            read_sheet_document(path)

    @pytest.mark.parametrize(
        "content",
        [
            [["a"]],
            {"rows": "a"},
            {"rows": ["a"]},
            {"rows": [["a"]], "merges": "A1:B1"},
            {"rows": [["a"]], "styles": []},
            {"rows": [["a", "b"]], "merges": [[0, 0, 0, 1]]},
            {"rows": [["a", "b"]], "merges": [5]},
            {"rows": [["a"]], "styles": {"A1": 5}},
            {"rows": [["a"]], "styles": {"A1": ["bold"]}},
        ],
    )
    def test_misshapen_documents(self, tmp_path: Path, content: object) -> None:
        with pytest.raises(InvalidFileError):
            read_sheet_document(write_document(tmp_path, content))


class TestTsv:
    def test_parse_tsv(self) -> None:
        assert parse_tsv("a\tb\nc\td\n") == [["a", "b"], ["c", "d"]]

    def test_parse_keeps_blank_cells(self) -> None:
        assert parse_tsv("\t\n\t") == [["", ""], ["", ""]]

    def test_parse_empty(self) -> None:
        assert parse_tsv("") == []

    def test_trailing_blank_rows_survive(self) -> None:
        values = [["a"], [""]]
        assert to_tsv(values) == "a\n\n"
        assert parse_tsv(to_tsv(values)) == values

    def test_single_column_blank_grid_roundtrip(self) -> None:
        values = [[""], [""], [""]]
        assert parse_tsv(to_tsv(values)) == values

    def test_escaped_values_roundtrip(self) -> None:
        values = [["multi\nline", "tab\there"], ["back\\slash", ""]]
        assert parse_tsv(to_tsv(values)) == values


class TestFileWriter:
    def test_write_sheet(self, tmp_path: Path) -> None:
        grid = import_sheet([["Team", ""], ["x", "y"]], ["A1:B1"], {"A1": {"bold": True}})
        written = FileWriter(tmp_path).write_sheet(export_sheet(grid), folder="planning")

        assert written == [
            tmp_path / "planning" / "data.tsv",
            tmp_path / "planning" / "sheet.json",
        ]
        assert parse_tsv(written[0].read_text(encoding="utf-8")) == [["Team", ""], ["x", "y"]]
        document = json.loads(written[1].read_text(encoding="utf-8"))
        assert document == {
            "rows": [["Team", ""], ["x", "y"]],
            "merges": ["A1:B1"],
            "styles": {"A1": {"bold": True}},
        }

    def test_written_document_reimports(self, tmp_path: Path) -> None:
        sheet = SparseSheet(values=[["a", "b"], ["c", "d"]], merges=[MergeRegion(0, 0, 1, 0)])
        FileWriter(tmp_path).write_sheet(sheet)

        document = read_sheet_document(tmp_path / "sheet.json")
        grid = import_sheet(document["rows"], document["merges"], document["styles"])

        assert export_sheet(grid) == sheet
