"""Shared test fixtures for extragrid."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from extragrid.config import get_settings
from extragrid.grid import Grid


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate every test from EXTRAGRID_* variables and the settings cache."""
    monkeypatch.delenv("EXTRAGRID_DEFAULT_ROWS", raising=False)
    monkeypatch.delenv("EXTRAGRID_DEFAULT_COLS", raising=False)
    monkeypatch.delenv("EXTRAGRID_PLACEHOLDER", raising=False)
    monkeypatch.delenv("EXTRAGRID_STRICT_MERGES", raising=False)
    monkeypatch.delenv("EXTRAGRID_LOG_LEVEL", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def merged_grid() -> Grid:
    """3x3 grid with values 1..9 and a 2x2 merge anchored at (0, 0)."""
    grid = Grid.create_empty(3, 3)
    value = 1
    for r in range(3):
        for c in range(3):
            grid = grid.set_cell_value(r, c, str(value))
            value += 1
    return grid.apply_merge_regions(["A1:B2"])
