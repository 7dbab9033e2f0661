from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Sequence

from openpyxl.workbook.workbook import Workbook

from rastexcel.config import TimesheetSettings
from rastexcel.domain.calendar import days_in_month, month_start
from rastexcel.domain.models import Employee
from rastexcel.sheet.workbook_io import open_workbook, open_workbook_bytes, workbook_to_bytes
from rastexcel.template.handlers import (
    DAYS_KEY,
    EMPLOYEES_KEY,
    MARKS_KEY,
    MERGE_KEY,
    DaysHandler,
    EmployeeHandler,
    FormulaHandler,
    LabelHandler,
    LegendHandler,
    MergeCodeHandler,
    month_labels,
    register_formula_keys,
)
from rastexcel.template.processor import Processor
from rastexcel.template.registry import PassKind, Registry

from .errors import PassOrderError, RosterError
from .logger import get_logger


def check_pass_order(passes: Sequence[Registry]) -> None:
    """Reject a structural pass scheduled after a stable one."""

    stable_seen: str | None = None
    for registry in passes:
        if registry.kind is PassKind.STABLE:
            stable_seen = stable_seen or registry.name
        elif stable_seen is not None:
            raise PassOrderError(
                f"structural pass {registry.name!r} runs after stable pass {stable_seen!r}"
            )


class TemplatePipeline:
    """Runs processing passes in order over one in-memory workbook."""

    def __init__(self, passes: Sequence[Registry], logger=None) -> None:
        check_pass_order(passes)
        self.passes = list(passes)
        self.logger = logger or get_logger()

    def run_workbook(self, workbook: Workbook) -> dict[str, int]:
        """Apply every pass; return the number of handled cells per pass name."""

        matches: dict[str, int] = {}
        total = len(self.passes)
        for idx, registry in enumerate(self.passes, start=1):
            self.logger.info("%d/%d %s - %d placeholder(s)", idx, total, registry.name, len(registry))
            matches[registry.name] = Processor(registry).process_workbook(workbook)
        return matches

    def run_file(self, path: str | Path) -> bytes:
        workbook = open_workbook(path)
        try:
            self.run_workbook(workbook)
            return workbook_to_bytes(workbook)
        finally:
            workbook.close()

    def run_bytes(self, data: bytes) -> bytes:
        workbook = open_workbook_bytes(data)
        try:
            self.run_workbook(workbook)
            return workbook_to_bytes(workbook)
        finally:
            workbook.close()


def build_timesheet_pipeline(
    settings: TimesheetSettings,
    employees: Sequence[Employee],
    month: date | None = None,
    logger=None,
) -> TemplatePipeline:
    """Assemble the default passes: days, legend, employees, summary, merge codes.

    Employee rows are inserted last among the structural passes so the blocks
    they record are still valid when the summary pass reads them.

    Raises:
        RosterError: An employee's attendance does not cover the month.
    """

    month = month_start(month)
    day_count = days_in_month(month)
    for emp in employees:
        try:
            emp.check_month(day_count)
        except ValueError as exc:
            raise RosterError(str(exc)) from exc

    days = Registry(PassKind.STRUCTURAL, "days")
    days.register(DAYS_KEY, DaysHandler(month))

    legend = Registry(PassKind.STRUCTURAL, "legend")
    legend.register(MARKS_KEY, LegendHandler(settings.mark_records()))

    employee_handler = EmployeeHandler(employees)
    rows = Registry(PassKind.STRUCTURAL, "employees")
    rows.register(EMPLOYEES_KEY, employee_handler)

    summary = Registry(PassKind.STABLE, "summary")
    labels = LabelHandler(month_labels(month, settings.month_names))
    for key, text in settings.labels.items():
        labels.add(key, text)
    labels.register(summary)
    register_formula_keys(
        summary,
        FormulaHandler(settings.formula_key_records(), blocks=employee_handler.blocks),
    )

    merges = Registry(PassKind.STABLE, "merge-codes")
    merges.register(MERGE_KEY, MergeCodeHandler())

    return TemplatePipeline([days, legend, rows, summary, merges], logger=logger)
