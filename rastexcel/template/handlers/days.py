"""``{{days}}``: expand one placeholder column into one column per day of the month."""

from __future__ import annotations

import logging
from datetime import date

from openpyxl.utils import get_column_letter

from rastexcel.core.errors import StructuralEditError
from rastexcel.domain.calendar import days_in_month
from rastexcel.sheet import ops
from rastexcel.sheet.cells import apply_style, cell_at, copy_style

from ..registry import CellContext

LOGGER = logging.getLogger(__name__)

DAYS_KEY = "{{days}}"


class DaysHandler:
    """Insert D-1 columns after the placeholder and number them 1..D.

    The ``header_depth`` rows directly above the day row are merged across the
    new span, keeping the style of their left-most cell.
    """

    structural = True

    def __init__(
        self,
        month: date | None = None,
        *,
        day_count: int | None = None,
        header_depth: int = 2,
        column_width: float = 4,
    ) -> None:
        if day_count is not None and day_count < 1:
            raise ValueError("day_count must be >= 1")
        self.month = month
        self.day_count = day_count
        self.header_depth = header_depth
        self.column_width = column_width

    @property
    def days(self) -> int:
        return self.day_count if self.day_count is not None else days_in_month(self.month)

    def __call__(self, ctx: CellContext) -> None:
        ws, row, col = ctx.sheet, ctx.row, ctx.col
        days = self.days
        last_col = col + days - 1

        placeholder_style = copy_style(cell_at(ws, row, col))

        ops.insert_cols(ws, col + 1, days - 1)

        for header_row in range(row - self.header_depth, row):
            if header_row < 0:
                continue
            header_style = copy_style(cell_at(ws, header_row, col))
            try:
                ops.merge(ws, header_row, col, header_row, last_col)
            except StructuralEditError as exc:
                raise StructuralEditError(f"merge header row {header_row + 1}: {exc}") from exc
            apply_style(ws, header_row, col, header_row, last_col, header_style)

        for offset in range(days):
            cell_at(ws, row, col + offset).value = offset + 1
        apply_style(ws, row, col, row, last_col, placeholder_style)

        for idx in range(col, last_col + 1):
            ws.column_dimensions[get_column_letter(idx + 1)].width = self.column_width

        LOGGER.info("Expanded %s!%s into %d day columns", ws.title, ctx.label, days)

