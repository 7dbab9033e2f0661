"""Employee roster workbooks: read real rosters, write generated ones."""

# Module responsibilities:
# - Load employee rosters from Excel/CSV through pandas with header aliases.
# - Write a roster workbook in the same layout so generated data can be edited and fed back.

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Sequence

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Alignment, Font

from rastexcel.core.errors import RosterError
from rastexcel.sheet.cells import column_letter
from rastexcel.sheet.workbook_io import workbook_to_bytes, write_bytes_atomic

from .models import Employee

LOGGER = logging.getLogger(__name__)

ROSTER_HEADERS: tuple[str, ...] = ("id", "full_name", "table_id", "job_position")
_COLUMN_WIDTHS: tuple[float, ...] = (6, 30, 12, 25)
_DAY_WIDTH = 4

FIELD_ALIASES: dict[str, set[str]] = {
    "id": {"id", "№", "no"},
    "full_name": {"full_name", "name", "f.i.o."},
    "table_id": {"table_id", "tabel", "table"},
    "job_position": {"job_position", "position", "wezipesi"},
    "attendance": {"attendance"},
}


def _normalize(label: object) -> str:
    return str(label).strip().lower()


def _read_frame(path: Path) -> pd.DataFrame:
    suffix = path.suffix.lower()
    if suffix in {".xlsx", ".xlsm"}:
        return pd.read_excel(path, dtype=str)
    if suffix == ".csv":
        return pd.read_csv(path, dtype=str)
    raise RosterError(f"unsupported roster file: {path}")


def _resolve_columns(columns: Iterable[object]) -> tuple[dict[str, object], list[object]]:
    fields: dict[str, object] = {}
    days: list[tuple[int, object]] = []
    for column in columns:
        normalized = _normalize(column)
        if normalized.isdigit():
            days.append((int(normalized), column))
            continue
        for field, aliases in FIELD_ALIASES.items():
            if normalized in aliases and field not in fields:
                fields[field] = column
                break
    return fields, [column for _, column in sorted(days)]


def _parse_id(raw: str, line: int) -> int:
    try:
        return int(float(raw))
    except ValueError as exc:
        raise RosterError(f"row {line}: invalid employee id {raw!r}") from exc


def read_roster(path: str | Path, day_count: int | None = None) -> list[Employee]:
    """Load employees from a roster workbook or CSV.

    Attendance comes either from an ``attendance`` column holding a
    comma-separated list or from day columns titled ``1`` .. ``D``.

    Raises:
        RosterError: When the file is missing, malformed, or an employee's
            attendance does not cover *day_count* days.
    """

    path = Path(path)
    if not path.exists():
        raise RosterError(f"roster not found: {path}")

    LOGGER.info("Reading employee roster %s", path)
    try:
        frame = _read_frame(path).fillna("")
    except (OSError, ValueError) as exc:
        raise RosterError(f"read roster {path}: {exc}") from exc

    fields, day_columns = _resolve_columns(frame.columns)
    missing = [name for name in ROSTER_HEADERS if name not in fields]
    if missing:
        raise RosterError(f"roster {path.name} missing columns: {', '.join(missing)}")

    employees: list[Employee] = []
    for offset, record in enumerate(frame.to_dict(orient="records")):
        line = offset + 2
        if not str(record[fields["id"]]).strip():
            continue
        if "attendance" in fields:
            raw = str(record[fields["attendance"]])
            attendance = tuple(token.strip() for token in raw.split(",")) if raw.strip() else ()
        else:
            attendance = tuple(str(record[column]).strip() for column in day_columns)
        employee = Employee(
            id=_parse_id(str(record[fields["id"]]), line),
            full_name=str(record[fields["full_name"]]).strip(),
            table_id=str(record[fields["table_id"]]).strip(),
            job_position=str(record[fields["job_position"]]).strip(),
            attendance=attendance,
        )
        if day_count is not None:
            try:
                employee.check_month(day_count)
            except ValueError as exc:
                raise RosterError(f"row {line}: {exc}") from exc
        employees.append(employee)

    LOGGER.info("Roster loaded: %d employees", len(employees))
    return employees


def build_roster(employees: Sequence[Employee]) -> Workbook:
    days = max((len(e.attendance) for e in employees), default=0)
    workbook = Workbook()
    ws = workbook.active
    ws.title = "Employees"

    header_font = Font(bold=True)
    header_align = Alignment(horizontal="center")
    headers = list(ROSTER_HEADERS) + [day for day in range(1, days + 1)]
    ws.append(headers)
    for cell in ws[1]:
        cell.font = header_font
        cell.alignment = header_align

    for emp in employees:
        ws.append([emp.id, emp.full_name, emp.table_id, emp.job_position, *emp.attendance])

    for idx, width in enumerate(_COLUMN_WIDTHS):
        ws.column_dimensions[column_letter(idx)].width = width
    for day in range(days):
        ws.column_dimensions[column_letter(len(_COLUMN_WIDTHS) + day)].width = _DAY_WIDTH
    return workbook


def roster_bytes(employees: Sequence[Employee]) -> bytes:
    return workbook_to_bytes(build_roster(employees))


def write_roster(employees: Sequence[Employee], path: str | Path) -> Path:
    """Write *employees* as a roster workbook and return the output path."""

    target = write_bytes_atomic(roster_bytes(employees), path)
    LOGGER.info("Roster written: %s (%d employees)", target, len(employees))
    return target
