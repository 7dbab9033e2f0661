"""Tests for the named-style cache."""

from __future__ import annotations

import pytest
from openpyxl import Workbook

from rastexcel.template.styles import CENTERED, STYLE_PREFIX, StyleCache, StyleSpec, cache_for


def test_same_name_returns_same_handle() -> None:
    cache = StyleCache(Workbook())

    first = cache.centered()
    second = cache.get_or_create("centered", CENTERED)

    assert first == second
    assert cache.allocations == 1


def test_different_names_allocate_separately() -> None:
    wb = Workbook()
    cache = StyleCache(wb)

    centered = cache.centered()
    left = cache.left()

    assert centered != left
    assert cache.allocations == 2
    assert {centered, left} <= set(wb.named_styles)


def test_existing_named_style_is_reused() -> None:
    wb = Workbook()
    StyleCache(wb).centered()

    fresh = StyleCache(wb)
    handle = fresh.centered()

    assert handle == STYLE_PREFIX + "centered"
    assert fresh.allocations == 0


def test_centered_style_formatting() -> None:
    wb = Workbook()
    cell = wb.active["A1"]
    cell.style = StyleCache(wb).centered()

    assert cell.alignment.horizontal == "center"
    assert cell.alignment.vertical == "center"
    assert cell.font.name == "Times New Roman"
    assert cell.border.left.style == "thin"
    assert cell.border.bottom.style == "thin"


def test_unbordered_spec() -> None:
    wb = Workbook()
    cell = wb.active["A1"]
    cell.style = StyleCache(wb).get_or_create("plain", StyleSpec(horizontal="right", bordered=False))

    assert cell.alignment.horizontal == "right"
    assert cell.border.left.style is None


def test_unknown_logical_name() -> None:
    with pytest.raises(KeyError, match="bold"):
        StyleCache(Workbook()).get("bold")


def test_cache_for_rebinds_on_new_workbook() -> None:
    wb = Workbook()
    cache = cache_for(None, wb)

    assert cache_for(cache, wb) is cache
    assert cache_for(cache, Workbook()) is not cache
