"""Tests for structural edits that keep merges, dimensions and formulas aligned."""

from __future__ import annotations

import pytest
from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.worksheet.dimensions import ColumnDimension

from rastexcel.core.errors import StructuralEditError
from rastexcel.sheet import ops
from rastexcel.sheet.cells import cell_name, cell_text, column_letter, range_name
from rastexcel.sheet.workbook_io import open_workbook_bytes, workbook_to_bytes


def _merges(ws) -> list[str]:
    return sorted(str(rng) for rng in ws.merged_cells.ranges)


def test_coordinate_helpers() -> None:
    assert column_letter(0) == "A"
    assert column_letter(25) == "Z"
    assert column_letter(26) == "AA"
    assert cell_name(0, 0) == "A1"
    assert cell_name(9, 27) == "AB10"
    assert range_name(1, 4, 1, 34) == "E2:AI2"
    with pytest.raises(ValueError):
        cell_name(-1, 0)


def test_cell_text() -> None:
    assert cell_text(None) == ""
    assert cell_text(3.0) == "3"
    assert cell_text(2.5) == "2.5"
    assert cell_text("{{t}}") == "{{t}}"


def test_insert_rows_moves_values_and_merges(sheet) -> None:
    sheet["A2"] = "moved"
    sheet.merge_cells("A3:B3")

    ops.insert_rows(sheet, 1, 2)

    assert sheet["A4"].value == "moved"
    assert sheet["A2"].value is None
    assert _merges(sheet) == ["A5:B5"]


def test_insert_rows_grows_spanning_merge(sheet) -> None:
    sheet.merge_cells("A1:A3")

    ops.insert_rows(sheet, 1, 1)

    assert _merges(sheet) == ["A1:A4"]


def test_insert_rows_shifts_heights(sheet) -> None:
    sheet.row_dimensions[3].height = 30

    ops.insert_rows(sheet, 0, 2)

    assert sheet.row_dimensions[5].height == 30
    assert sheet.row_dimensions[3].height is None


def test_insert_zero_rows_is_noop(sheet) -> None:
    sheet["A1"] = "x"
    ops.insert_rows(sheet, 0, 0)
    assert sheet["A1"].value == "x"


def test_remove_row_drops_and_shifts_merges(sheet) -> None:
    sheet.merge_cells("A2:C2")
    sheet.merge_cells("A4:B4")
    sheet.merge_cells("E1:E3")
    sheet["A5"] = "tail"

    ops.remove_row(sheet, 1)

    assert _merges(sheet) == ["A3:B3", "E1:E2"]
    assert sheet["A4"].value == "tail"


def test_insert_cols_moves_merges_and_widths(sheet) -> None:
    sheet["C1"] = "right"
    sheet.merge_cells("C2:D2")
    sheet.column_dimensions["C"].width = 20

    ops.insert_cols(sheet, 1, 3)

    assert sheet["F1"].value == "right"
    assert _merges(sheet) == ["F2:G2"]
    assert sheet.column_dimensions["F"].width == 20


def test_row_limit(sheet) -> None:
    with pytest.raises(StructuralEditError, match="row limit"):
        ops.insert_rows(sheet, ops.MAX_ROWS - 1, 5)


def test_column_limit(sheet) -> None:
    with pytest.raises(StructuralEditError, match="column limit"):
        ops.insert_cols(sheet, 0, ops.MAX_COLUMNS)


def test_merge_replaces_overlapping_ranges(sheet) -> None:
    sheet.merge_cells("A1:B1")
    sheet.merge_cells("F1:G1")

    ops.merge(sheet, 0, 0, 0, 3)

    assert _merges(sheet) == ["A1:D1", "F1:G1"]


def test_merge_single_cell_is_noop(sheet) -> None:
    ops.merge(sheet, 2, 2, 2, 2)
    assert _merges(sheet) == []


def test_merged_range_at(sheet) -> None:
    sheet.merge_cells("B2:D2")

    assert str(ops.merged_range_at(sheet, 1, 1)) == "B2:D2"
    assert ops.merged_range_at(sheet, 1, 2) is None


def _reloaded(wb: Workbook):
    return open_workbook_bytes(workbook_to_bytes(wb)).active


def test_insert_cols_spreads_grouped_column_widths() -> None:
    wb = Workbook()
    ws = wb.active
    ws["A1"] = "{{days}}"
    ws.column_dimensions["B"] = ColumnDimension(ws, index="B", width=20, min=2, max=4)
    ws = _reloaded(wb)
    assert (ws.column_dimensions["B"].min, ws.column_dimensions["B"].max) == (2, 4)

    ops.insert_cols(ws, 1, 2)

    assert [ws.column_dimensions[letter].width for letter in "DEF"] == [20, 20, 20]
    assert ws.column_dimensions["B"].width != 20
    assert ws.column_dimensions["C"].width != 20


def test_insert_cols_grows_straddling_width_group() -> None:
    wb = Workbook()
    ws = wb.active
    ws.column_dimensions["B"] = ColumnDimension(ws, index="B", width=20, min=2, max=4)

    ops.insert_cols(ws, 2, 2)

    assert [ws.column_dimensions[letter].width for letter in "BCDEF"] == [20] * 5
    assert ws.column_dimensions["G"].width != 20


def test_replace_row_stretches_ranges_over_the_new_rows() -> None:
    wb = Workbook()
    ws = wb.active
    ws.title = "Staff"
    ws["A2"] = "template"
    ws["A3"] = "=COUNTA(A2:A2)"
    ws["C1"] = "=A3*2"
    totals = wb.create_sheet("Totals")
    totals["A1"] = "=SUM(Staff!A2:A2)"
    totals["A2"] = "=A3"

    ops.replace_row(ws, 1, 3)

    assert ws["A2"].value is None
    assert ws["A5"].value == "=COUNTA(A2:A4)"
    assert ws["C1"].value == "=A5*2"
    assert totals["A1"].value == "=SUM(Staff!A2:A4)"
    assert totals["A2"].value == "=A3"


def test_replace_row_with_nothing_removes_it() -> None:
    wb = Workbook()
    ws = wb.active
    ws["A2"] = "template"
    ws["A3"] = "=SUM(A1:A4)"

    ops.replace_row(ws, 1, 0)

    assert ws["A2"].value == "=SUM(A1:A3)"


def test_remove_row_marks_deleted_references() -> None:
    wb = Workbook()
    ws = wb.active
    ws["A1"] = "=B3+SUM(B2:B4)"

    ops.remove_row(ws, 2)

    assert ws["A1"].value == "=#REF!+SUM(B2:B3)"


def test_insert_cols_shifts_column_references() -> None:
    wb = Workbook()
    ws = wb.active
    ws["A1"] = "=SUM(B2:D2)+$D$1"
    other = wb.create_sheet("Other")
    other["A1"] = "=D1"

    ops.insert_cols(ws, 2, 2)

    assert ws["A1"].value == "=SUM(B2:F2)+$F$1"
    assert other["A1"].value == "=D1"


def test_insert_rows_sweeps_formatting_left_at_sheet_end(sheet) -> None:
    sheet["A2"] = "template"
    sheet.cell(row=ops.MAX_ROWS, column=1).font = Font(bold=True)
    sheet.row_dimensions[ops.MAX_ROWS].height = 30

    ops.insert_rows(sheet, 1, 3)

    assert sheet["A5"].value == "template"
    assert sheet.max_row == 5
    assert ops.MAX_ROWS not in sheet.row_dimensions


def test_insert_rows_keeps_values_at_sheet_end(sheet) -> None:
    sheet.cell(row=ops.MAX_ROWS, column=1).value = "kept"

    with pytest.raises(StructuralEditError, match="row limit"):
        ops.insert_rows(sheet, 0, 2)

    assert sheet.cell(row=ops.MAX_ROWS, column=1).value == "kept"
