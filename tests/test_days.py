"""Tests for day-column expansion."""

from __future__ import annotations

from datetime import date

import pytest
from openpyxl import Workbook
from openpyxl.styles import Font

from rastexcel.sheet.cells import cell_at, column_letter
from rastexcel.template.handlers.days import DAYS_KEY, DaysHandler
from rastexcel.template.processor import Processor
from rastexcel.template.registry import PassKind, Registry


def _template() -> Workbook:
    wb = Workbook()
    ws = wb.active
    ws["A3"] = "Name"
    ws["C1"] = "Days of month"
    ws["C2"] = "Day"
    ws["C3"] = DAYS_KEY
    ws["C3"].font = Font(bold=True)
    ws["D3"] = "after"
    return wb


def _run(wb: Workbook, handler: DaysHandler) -> None:
    registry = Registry(PassKind.STRUCTURAL, "days")
    registry.register(DAYS_KEY, handler)
    assert Processor(registry).process_workbook(wb) == 1


@pytest.mark.parametrize(
    ("month", "days"),
    [
        (date(2023, 2, 1), 28),
        (date(2024, 2, 1), 29),
        (date(2024, 4, 1), 30),
        (date(2024, 1, 1), 31),
    ],
)
def test_expands_to_month_length(month: date, days: int) -> None:
    wb = _template()
    ws = wb.active

    _run(wb, DaysHandler(month))

    assert [cell_at(ws, 2, 2 + offset).value for offset in range(days)] == list(range(1, days + 1))
    assert cell_at(ws, 2, 2 + days).value == "after"
    assert ws.max_column == 4 + days - 1
    last = column_letter(2 + days - 1)
    merges = {str(rng) for rng in ws.merged_cells.ranges}
    assert merges == {f"C1:{last}1", f"C2:{last}2"}
    assert ws["C1"].value == "Days of month"


def test_span_copies_placeholder_style_and_width() -> None:
    wb = _template()
    ws = wb.active

    _run(wb, DaysHandler(day_count=5))

    for offset in range(5):
        assert cell_at(ws, 2, 2 + offset).font.bold is True
        assert ws.column_dimensions[column_letter(2 + offset)].width == 4
    assert ws["A3"].value == "Name"


def test_single_day_inserts_nothing() -> None:
    wb = _template()
    ws = wb.active

    _run(wb, DaysHandler(day_count=1))

    assert ws["C3"].value == 1
    assert ws["D3"].value == "after"
    assert not ws.merged_cells.ranges


def test_placeholder_on_first_row_skips_headers() -> None:
    wb = Workbook()
    ws = wb.active
    ws["A1"] = DAYS_KEY

    _run(wb, DaysHandler(day_count=3))

    assert [ws["A1"].value, ws["B1"].value, ws["C1"].value] == [1, 2, 3]
    assert not ws.merged_cells.ranges


def test_rejects_empty_month() -> None:
    with pytest.raises(ValueError):
        DaysHandler(day_count=0)
