"""Employee, legend and layout records consumed by the template handlers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from rastexcel.sheet.cells import cell_name


@dataclass(frozen=True, slots=True)
class Employee:
    """One employee with one attendance symbol per day of the reported month."""

    id: int
    full_name: str
    table_id: str
    job_position: str
    attendance: tuple[str, ...] = field(default_factory=tuple)

    def check_month(self, day_count: int) -> None:
        if len(self.attendance) != day_count:
            raise ValueError(
                f"employee {self.id}: {len(self.attendance)} attendance values "
                f"for a {day_count}-day month"
            )


@dataclass(frozen=True, slots=True)
class Mark:
    """Attendance legend entry: a label and the symbol written in the sheet.

    Attributes:
        name: Human readable meaning, e.g. "Business trip".
        key: Abbreviation used in attendance cells, e.g. "W".
    """

    name: str
    key: str

    @property
    def numeric(self) -> bool:
        """Purely numeric keys denote worked hours, not symbolic codes."""

        return self.key.isdigit()


def legend_entries(marks: Iterable[Mark]) -> list[Mark]:
    """Drop marks whose key is a plain number (e.g. "8" for worked hours)."""

    return [mark for mark in marks if not mark.numeric]


@dataclass(frozen=True, slots=True)
class EmployeeBlock:
    """Rows written by the employee handler; consumed by the formula pass.

    All indices are 0-based.
    """

    sheet: str
    first_row: int
    row_count: int
    origin_col: int
    attendance_start: int
    attendance_width: int

    @property
    def end_row(self) -> int:
        """Last employee row (``first_row - 1`` for an empty block)."""

        return self.first_row + self.row_count - 1

    @property
    def rows(self) -> range:
        return range(self.first_row, self.first_row + self.row_count)

    def attendance_range(self, row: int) -> str:
        return attendance_range(row, self.attendance_start, self.attendance_width)


def attendance_range(row: int, start_col: int, width: int) -> str:
    """Reference of one employee's attendance cells, e.g. ``E4:AI4``."""

    end_col = start_col + max(width, 1) - 1
    return f"{cell_name(row, start_col)}:{cell_name(row, end_col)}"
