"""Tests for employee row injection."""

from __future__ import annotations

import pytest
from openpyxl import Workbook

from rastexcel.core.errors import HandlerError, ProcessingError
from rastexcel.domain.models import EmployeeBlock
from rastexcel.sheet.cells import cell_at
from rastexcel.template.handlers.employees import (
    EMPLOYEE_COLUMNS,
    EMPLOYEES_KEY,
    EmployeeColumn,
    EmployeeHandler,
    attendance_start_col,
)
from rastexcel.template.processor import Processor
from rastexcel.template.registry import PassKind, Registry


def _template() -> Workbook:
    wb = Workbook()
    ws = wb.active
    ws.title = "Timesheet"
    ws.append(["id", "full_name", "table_id", "job_position", "1", "2", "3", "4"])
    ws["A2"] = EMPLOYEES_KEY
    ws["I3"] = "{{t}}"
    return wb


def _run(wb: Workbook, handler: EmployeeHandler) -> None:
    registry = Registry(PassKind.STRUCTURAL, "employees")
    registry.register(EMPLOYEES_KEY, handler)
    Processor(registry).process_workbook(wb)


def test_attendance_start_col() -> None:
    assert attendance_start_col(0) == len(EMPLOYEE_COLUMNS) == 4
    assert attendance_start_col(2) == 6
    assert attendance_start_col(1, prefix_width=2) == 3


def test_one_row_per_employee_in_order(make_employee) -> None:
    employees = [
        make_employee(7, ["W", "8", "P", "A"]),
        make_employee(2, ["8", "8", "L", "W"], position="Accountant"),
        make_employee(5, ["A", "A", "A", "A"]),
    ]
    wb = _template()
    ws = wb.active
    handler = EmployeeHandler(employees)

    _run(wb, handler)

    for offset, emp in enumerate(employees):
        row = 1 + offset
        assert [cell_at(ws, row, col).value for col in range(4)] == [
            emp.id,
            emp.full_name,
            emp.table_id,
            emp.job_position,
        ]
        assert [cell_at(ws, row, 4 + day).value for day in range(4)] == list(emp.attendance)
        assert cell_at(ws, row, 4).style == "rastexcel.centered"
        assert cell_at(ws, row, 0).style == "rastexcel.centered"

    assert ws["I5"].value == "{{t}}"
    assert ws["A1"].value == "id"
    assert handler.blocks == [
        EmployeeBlock(
            sheet="Timesheet",
            first_row=1,
            row_count=3,
            origin_col=0,
            attendance_start=4,
            attendance_width=4,
        )
    ]
    assert handler.blocks[0].attendance_range(1) == "E2:H2"


def test_empty_roster_removes_template_row() -> None:
    wb = _template()
    ws = wb.active
    handler = EmployeeHandler([])

    _run(wb, handler)

    assert ws["A2"].value is None
    assert ws["I2"].value == "{{t}}"
    assert handler.blocks[0].row_count == 0
    assert handler.blocks[0].end_row == 0


def test_custom_columns_shift_attendance(make_employee) -> None:
    columns = (EmployeeColumn("name", lambda emp: emp.full_name, style="left"),)
    wb = _template()
    ws = wb.active
    handler = EmployeeHandler([make_employee(1, ["W", "8"])], columns=columns)

    _run(wb, handler)

    assert ws["A2"].value == "Employee 1"
    assert ws["A2"].style == "rastexcel.left"
    assert [ws["B2"].value, ws["C2"].value] == ["W", "8"]
    assert handler.blocks[0].attendance_start == 1


def test_write_failure_names_employee(make_employee) -> None:
    columns = (EmployeeColumn("broken", lambda emp: 1 / 0),)
    wb = _template()

    with pytest.raises(ProcessingError) as excinfo:
        _run(wb, EmployeeHandler([make_employee(42, ["W"])], columns=columns))

    cause = excinfo.value.__cause__
    assert isinstance(cause, HandlerError)
    assert "employee 42" in str(cause)
    assert excinfo.value.cell == "A2"


def test_template_totals_cover_the_written_rows(make_employee) -> None:
    wb = Workbook()
    ws = wb.active
    ws["A2"] = EMPLOYEES_KEY
    ws["A3"] = "=COUNTA(A2:A2)"
    employees = [make_employee(idx, ["W"]) for idx in (1, 2, 3)]

    _run(wb, EmployeeHandler(employees))

    assert [ws.cell(row=r, column=1).value for r in (2, 3, 4)] == [1, 2, 3]
    assert ws["A5"].value == "=COUNTA(A2:A4)"
