"""Tests for cell value objects."""

import pytest

from extragrid.cell import Cell, CellStyle, normalize_hex_color


class TestNormalizeHexColor:
    def test_uppercases_and_adds_hash(self) -> None:
        assert normalize_hex_color("ff0000") == "#FF0000"
        assert normalize_hex_color("#d7ffd7") == "#D7FFD7"

    def test_expands_short_form(self) -> None:
        assert normalize_hex_color("#abc") == "#AABBCC"

    def test_rejects_garbage(self) -> None:
        with pytest.raises(ValueError):
            normalize_hex_color("red")


class TestCellStyle:
    def test_from_hint_maps_fields(self) -> None:
        style = CellStyle.from_hint(
            {
                "backgroundColorHex": "#ffff00",
                "textColorHex": "000000",
                "bold": True,
                "horizontalAlign": "center",
                "verticalAlign": "top",
            }
        )
        assert style == CellStyle(
            background_color="#FFFF00",
            text_color="#000000",
            bold=True,
            horizontal_align="center",
            vertical_align="top",
        )

    def test_from_hint_with_only_dimensions_is_none(self) -> None:
        assert CellStyle.from_hint({"columnWidthPx": 120}) is None

    def test_to_hint_omits_defaults(self) -> None:
        style = CellStyle(italic=True, background_color="#00ff00")
        assert style.to_hint() == {"backgroundColorHex": "#00FF00", "italic": True}

    def test_hint_roundtrip(self) -> None:
        hint = {
            "backgroundColorHex": "#112233",
            "underline": True,
            "horizontalAlign": "right",
            "verticalAlign": "bottom",
        }
        style = CellStyle.from_hint(hint)
        assert style is not None
        assert style.to_hint() == hint

    def test_invalid_alignment(self) -> None:
        with pytest.raises(ValueError):
            CellStyle(horizontal_align="justify")
        with pytest.raises(ValueError):
            CellStyle(vertical_align="middle")


class TestCell:
    def test_defaults(self) -> None:
        cell = Cell()
        assert cell.value == ""
        assert cell.row_span == 1
        assert cell.col_span == 1
        assert not cell.hidden
        assert not cell.is_anchor

    def test_with_value_returns_new_cell(self) -> None:
        cell = Cell("a")
        updated = cell.with_value("b")
        assert updated.value == "b"
        assert cell.value == "a"

    def test_anchored_and_covered(self) -> None:
        anchor = Cell("x").anchored(2, 3)
        assert anchor.is_anchor
        assert (anchor.row_span, anchor.col_span) == (2, 3)

        covered = anchor.covered()
        assert covered.hidden
        assert (covered.row_span, covered.col_span) == (1, 1)
        assert covered.value == "x"

    def test_unmerged_clears_bookkeeping(self) -> None:
        assert Cell("x").anchored(2, 2).unmerged() == Cell("x")
        assert Cell("y").covered().unmerged() == Cell("y")

    def test_hidden_anchor_rejected(self) -> None:
        with pytest.raises(ValueError):
            Cell(row_span=2, hidden=True)

    def test_zero_span_rejected(self) -> None:
        with pytest.raises(ValueError):
            Cell(col_span=0)
