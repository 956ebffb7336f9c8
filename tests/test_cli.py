"""Tests for the extragrid command line."""

from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path

import pytest
from loguru import logger

from extragrid.__main__ import main, parse_column_list
from extragrid.file_reader import parse_tsv


@pytest.fixture(autouse=True)
def quiet_logger() -> Iterator[None]:
    """Undo the sink the CLI installs so later tests don't write to a closed stream."""
    yield
    logger.remove()
    logger.disable("extragrid")


@pytest.fixture
def schedule_doc(tmp_path: Path) -> Path:
    path = tmp_path / "schedule.json"
    path.write_text(
        json.dumps(
            {
                "rows": [
                    ["Name", "Day", "Start", "End"],
                    ["Ada", "Mon", 0.375, 0.75],
                    ["", "Tue", "9:05:30", None],
                ],
                "merges": ["A2:A3"],
                "styles": {"A1": {"bold": True}},
            }
        ),
        encoding="utf-8",
    )
    return path


class TestParseColumnList:
    def test_letters(self) -> None:
        assert parse_column_list("C,D") == {2, 3}
        assert parse_column_list(" a , AA ,") == {0, 26}


class TestLabel:
    def test_index_to_letters(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["label", "27"]) == 0
        assert capsys.readouterr().out.strip() == "AB"

    def test_letters_to_index(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["label", "zz"]) == 0
        assert capsys.readouterr().out.strip() == "701"

    def test_invalid_label(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["label", "A1"]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_non_ascii_digits(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["label", "²"]) == 1
        assert "Error:" in capsys.readouterr().err


class TestShow:
    def test_summary(self, schedule_doc: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["show", str(schedule_doc)]) == 0
        out = capsys.readouterr().out
        assert "Dimensions: 3 rows x 4 columns" in out
        assert "Merges (1):" in out
        assert "  A2:A3 (2x1)" in out
        assert "Headers: Name, Day, Start, End" in out

    def test_no_merges(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "plain.json"
        path.write_text(json.dumps({"rows": [["a", "b"]]}), encoding="utf-8")
        assert main(["show", str(path)]) == 0
        assert "Merges: none" in capsys.readouterr().out

    def test_missing_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["show", str(tmp_path / "missing.json")]) == 1
        assert "File not found" in capsys.readouterr().err

    def test_malformed_merge(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"rows": [["a"]], "merges": ["A1:C3"]}), encoding="utf-8")
        assert main(["show", str(path)]) == 1
        assert "Error:" in capsys.readouterr().err

    @pytest.mark.parametrize(
        "document",
        [
            {"rows": [["a", "b"]], "merges": [[0, 0, 0, 1]]},
            {"rows": [["a"]], "styles": {"A1": 5}},
        ],
    )
    def test_malformed_items_report_error(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str], document: dict
    ) -> None:
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(document), encoding="utf-8")
        assert main(["show", str(path)]) == 1
        assert "Error:" in capsys.readouterr().err


class TestExport:
    def test_writes_normalized_files(
        self, schedule_doc: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        out_dir = tmp_path / "out"
        assert main(["export", str(schedule_doc), str(out_dir), "--time-columns", "C,D"]) == 0
        assert "Wrote 2 files" in capsys.readouterr().out

        values = parse_tsv((out_dir / "data.tsv").read_text(encoding="utf-8"))
        assert values == [
            ["Name", "Day", "Start", "End"],
            ["Ada", "Mon", "09:00", "18:00"],
            ["", "Tue", "09:05", ""],
        ]
        document = json.loads((out_dir / "sheet.json").read_text(encoding="utf-8"))
        assert document["merges"] == ["A2:A3"]
        assert document["styles"] == {"A1": {"bold": True}}

    def test_placeholder_from_environment(
        self, schedule_doc: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("EXTRAGRID_PLACEHOLDER", "--:--")
        out_dir = tmp_path / "out"
        assert main(["export", str(schedule_doc), str(out_dir), "--time-columns", "D"]) == 0

        values = parse_tsv((out_dir / "data.tsv").read_text(encoding="utf-8"))
        assert values[2][3] == "--:--"

    def test_without_time_columns_keeps_raw_numbers(
        self, schedule_doc: Path, tmp_path: Path
    ) -> None:
        out_dir = tmp_path / "out"
        assert main(["export", str(schedule_doc), str(out_dir)]) == 0
        values = parse_tsv((out_dir / "data.tsv").read_text(encoding="utf-8"))
        assert values[1][2] == "0.375"


class TestBlank:
    def test_explicit_size(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["blank", str(tmp_path), "--rows", "2", "--cols", "3"]) == 0
        assert "Wrote empty 2x3 grid" in capsys.readouterr().out
        values = parse_tsv((tmp_path / "data.tsv").read_text(encoding="utf-8"))
        assert values == [["", "", ""], ["", "", ""]]

    def test_baseline_size(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["blank", str(tmp_path)]) == 0
        assert "Wrote empty 50x30 grid" in capsys.readouterr().out

    def test_negative_size(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["blank", str(tmp_path), "--rows", "-1"]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_single_column_keeps_every_row(self, tmp_path: Path) -> None:
        assert main(["blank", str(tmp_path), "--rows", "3", "--cols", "1"]) == 0
        values = parse_tsv((tmp_path / "data.tsv").read_text(encoding="utf-8"))
        assert values == [[""], [""], [""]]


class TestVerbose:
    def test_verbose_emits_debug_logs(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(["-v", "blank", str(tmp_path), "--rows", "1", "--cols", "1"]) == 0
        assert "Running extragrid blank" in capsys.readouterr().err
