"""``{{start_process}}``: replace the template row with one row per employee."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from operator import attrgetter
from typing import Callable, Sequence

from openpyxl.worksheet.worksheet import Worksheet

from rastexcel.core.errors import HandlerError
from rastexcel.domain.models import Employee, EmployeeBlock
from rastexcel.sheet import ops
from rastexcel.sheet.cells import cell_at

from ..registry import CellContext
from ..styles import StyleCache, cache_for

LOGGER = logging.getLogger(__name__)

EMPLOYEES_KEY = "{{start_process}}"


@dataclass(frozen=True, slots=True)
class EmployeeColumn:
    """One fixed descriptive column: how to read the value, which style to use."""

    header: str
    value: Callable[[Employee], object]
    style: str = "centered"


# To add a descriptive column append one entry; the attendance block follows them.
EMPLOYEE_COLUMNS: tuple[EmployeeColumn, ...] = (
    EmployeeColumn("id", attrgetter("id")),
    EmployeeColumn("full_name", attrgetter("full_name")),
    EmployeeColumn("table_id", attrgetter("table_id")),
    EmployeeColumn("job_position", attrgetter("job_position")),
)


def attendance_start_col(origin_col: int, prefix_width: int = len(EMPLOYEE_COLUMNS)) -> int:
    """0-based column where attendance begins for a section starting at *origin_col*."""

    return origin_col + prefix_width


class EmployeeHandler:
    """Write employee rows (descriptive columns + attendance) over the template row.

    No formulas are written here; every written block is appended to
    :attr:`blocks` so the formula pass can locate the rows it summarizes.
    """

    structural = True

    def __init__(
        self,
        employees: Sequence[Employee],
        columns: Sequence[EmployeeColumn] = EMPLOYEE_COLUMNS,
    ) -> None:
        self.employees = list(employees)
        self.columns = tuple(columns)
        self.blocks: list[EmployeeBlock] = []
        self._styles: StyleCache | None = None

    def __call__(self, ctx: CellContext) -> None:
        ws, row, col = ctx.sheet, ctx.row, ctx.col
        styles = self._styles = cache_for(self._styles, ctx.workbook)

        ops.replace_row(ws, row, len(self.employees))

        for offset, emp in enumerate(self.employees):
            try:
                self._write_row(ws, row + offset, col, emp, styles)
            except Exception as exc:  # noqa: BLE001 - attach the employee to any write failure
                raise HandlerError(f"employee {emp.id}: {exc}") from exc

        block = EmployeeBlock(
            sheet=ws.title,
            first_row=row,
            row_count=len(self.employees),
            origin_col=col,
            attendance_start=attendance_start_col(col, len(self.columns)),
            attendance_width=max((len(e.attendance) for e in self.employees), default=0),
        )
        self.blocks.append(block)
        LOGGER.info(
            "Wrote %d employee rows on %s starting at %s",
            block.row_count,
            ws.title,
            ctx.label,
        )

    def _write_row(
        self, ws: Worksheet, row: int, col: int, emp: Employee, styles: StyleCache
    ) -> None:
        for offset, column in enumerate(self.columns):
            cell = cell_at(ws, row, col + offset)
            cell.value = column.value(emp)
            cell.style = styles.get(column.style)

        start = attendance_start_col(col, len(self.columns))
        centered = styles.centered()
        for day, symbol in enumerate(emp.attendance):
            cell = cell_at(ws, row, start + day)
            cell.value = symbol
            cell.style = centered
