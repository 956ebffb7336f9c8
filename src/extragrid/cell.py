"""
Cell value objects.

A Cell is one position in the dense grid: its display text, optional style,
its span when it anchors a merged region, and a hidden flag when another
anchor covers it. Cells are frozen; edits produce new Cell instances.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import Any

HORIZONTAL_ALIGNMENTS = ("left", "center", "right")
VERTICAL_ALIGNMENTS = ("top", "center", "bottom")

_HEX_COLOR = re.compile(r"^#?([0-9A-Fa-f]{6}|[0-9A-Fa-f]{3})$")


def normalize_hex_color(color: str) -> str:
    """Normalize a hex color to upper-case "#RRGGBB".

    Accepts "#abc", "abc", "#aabbcc" and "aabbcc".
    """
    match = _HEX_COLOR.match(color.strip())
    if not match:
        raise ValueError(f"Invalid hex color: {color!r}")
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return f"#{digits.upper()}"


@dataclass(frozen=True)
class CellStyle:
    """Visual attributes carried by a cell."""

    background_color: str | None = None
    text_color: str | None = None
    bold: bool = False
    italic: bool = False
    underline: bool = False
    horizontal_align: str | None = None
    vertical_align: str | None = None

    def __post_init__(self) -> None:
        if self.background_color is not None:
            object.__setattr__(
                self, "background_color", normalize_hex_color(self.background_color)
            )
        if self.text_color is not None:
            object.__setattr__(self, "text_color", normalize_hex_color(self.text_color))
        if (
            self.horizontal_align is not None
            and self.horizontal_align not in HORIZONTAL_ALIGNMENTS
        ):
            raise ValueError(f"Invalid horizontal alignment: {self.horizontal_align!r}")
        if (
            self.vertical_align is not None
            and self.vertical_align not in VERTICAL_ALIGNMENTS
        ):
            raise ValueError(f"Invalid vertical alignment: {self.vertical_align!r}")

    def is_empty(self) -> bool:
        return self == CellStyle()

    @classmethod
    def from_hint(cls, hint: dict[str, Any]) -> CellStyle | None:
        """Build a style from an external style hint.

        Dimension keys (columnWidthPx, rowHeightPx) are ignored here; the
        converter stores them on the grid's width/height tables.

        Returns:
            The style, or None if the hint carries no visual attribute
        """
        style = cls(
            background_color=hint.get("backgroundColorHex"),
            text_color=hint.get("textColorHex"),
            bold=bool(hint.get("bold", False)),
            italic=bool(hint.get("italic", False)),
            underline=bool(hint.get("underline", False)),
            horizontal_align=hint.get("horizontalAlign"),
            vertical_align=hint.get("verticalAlign"),
        )
        return None if style.is_empty() else style

    def to_hint(self) -> dict[str, Any]:
        """Convert back to the external hint shape, omitting defaults."""
        hint: dict[str, Any] = {}
        if self.background_color:
            hint["backgroundColorHex"] = self.background_color
        if self.text_color:
            hint["textColorHex"] = self.text_color
        # Boolean flags - only include if True
        for key, flag in (
            ("bold", self.bold),
            ("italic", self.italic),
            ("underline", self.underline),
        ):
            if flag:
                hint[key] = True
        if self.horizontal_align:
            hint["horizontalAlign"] = self.horizontal_align
        if self.vertical_align:
            hint["verticalAlign"] = self.vertical_align
        return hint


@dataclass(frozen=True)
class Cell:
    """A single grid position.

    A hidden cell is covered by a merge anchored elsewhere and never carries
    a span greater than one.
    """

    value: str = ""
    row_span: int = 1
    col_span: int = 1
    hidden: bool = False
    style: CellStyle | None = field(default=None)

    def __post_init__(self) -> None:
        if self.row_span < 1 or self.col_span < 1:
            raise ValueError(
                f"Spans must be >= 1, got row_span={self.row_span}, col_span={self.col_span}"
            )
        if self.hidden and self.is_anchor:
            raise ValueError("A hidden cell cannot anchor a merged region")

    @property
    def is_anchor(self) -> bool:
        """True if this cell anchors a merge spanning more than one cell."""
        return self.row_span > 1 or self.col_span > 1

    def with_value(self, value: str) -> Cell:
        return replace(self, value=value)

    def with_style(self, style: CellStyle | None) -> Cell:
        return replace(self, style=style)

    def anchored(self, row_span: int, col_span: int) -> Cell:
        """Return this cell as a merge anchor with the given span."""
        return replace(self, row_span=row_span, col_span=col_span, hidden=False)

    def covered(self) -> Cell:
        """Return this cell as covered by another anchor."""
        return replace(self, row_span=1, col_span=1, hidden=True)

    def unmerged(self) -> Cell:
        """Return this cell with all merge bookkeeping cleared."""
        if not self.hidden and not self.is_anchor:
            return self
        return replace(self, row_span=1, col_span=1, hidden=False)


EMPTY_CELL = Cell()
