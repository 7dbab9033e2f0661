"""Demonstration timesheet template using every built-in placeholder."""

from __future__ import annotations

import logging

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font

from rastexcel.sheet.cells import cell_at, column_letter

from .handlers import DAYS_KEY, EMPLOYEES_KEY, MARKS_KEY
from .handlers.employees import EMPLOYEE_COLUMNS
from .styles import CENTERED

LOGGER = logging.getLogger(__name__)

# 0-based layout of the sample sheet.
HEADER_ROW = 2
DAY_ROW = 4
EMPLOYEE_ROW = 5
SUMMARY_ROW = 6
LEGEND_ROW = 8
DAYS_COL = len(EMPLOYEE_COLUMNS)

SUMMARY_COLUMNS: tuple[tuple[str, str], ...] = (
    ("T+D", "{{t}}{{d}}"),
    ("Hours", "{{num_sum}}"),
    ("Days worked", "{{num_count}}"),
    ("Trips", "{{w}}"),
    ("Note", "{{}}"),
)


def build_sample_template() -> Workbook:
    workbook = Workbook()
    ws = workbook.active
    ws.title = "Timesheet"
    workbook.add_named_style(CENTERED.build("rastexcel.centered"))

    cell_at(ws, 0, 0).value = "Timesheet {{month}} {{year}}[0:3]"
    cell_at(ws, 0, 0).font = Font(bold=True, size=14)
    cell_at(ws, 1, 0).value = "Working time: {{working_time}}, {{days_in_month}} days"

    header_font = Font(bold=True)
    header_align = Alignment(horizontal="center", vertical="center")
    for offset, column in enumerate(EMPLOYEE_COLUMNS):
        cell = cell_at(ws, HEADER_ROW, offset)
        cell.value = column.header
        cell.font = header_font
        cell.alignment = header_align

    days_header = cell_at(ws, HEADER_ROW, DAYS_COL)
    days_header.value = "Days of month"
    days_header.font = header_font
    days_header.alignment = header_align
    cell_at(ws, HEADER_ROW + 1, DAYS_COL).value = "Day"
    cell_at(ws, HEADER_ROW + 1, DAYS_COL).alignment = header_align
    day_cell = cell_at(ws, DAY_ROW, DAYS_COL)
    day_cell.value = DAYS_KEY
    day_cell.style = "rastexcel.centered"

    for offset, (title, key) in enumerate(SUMMARY_COLUMNS, start=DAYS_COL + 1):
        cell = cell_at(ws, HEADER_ROW, offset)
        cell.value = title
        cell.font = header_font
        cell.alignment = header_align
        cell_at(ws, SUMMARY_ROW, offset).value = key

    cell_at(ws, EMPLOYEE_ROW, 0).value = EMPLOYEES_KEY

    cell_at(ws, LEGEND_ROW, 0).value = MARKS_KEY
    ws.merge_cells(start_row=LEGEND_ROW + 1, start_column=1, end_row=LEGEND_ROW + 1, end_column=4)

    ws.column_dimensions[column_letter(1)].width = 30
    ws.column_dimensions[column_letter(3)].width = 22
    LOGGER.debug("Built sample template with %d summary columns", len(SUMMARY_COLUMNS))
    return workbook
