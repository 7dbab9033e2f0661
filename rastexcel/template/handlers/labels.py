"""Plain text placeholders such as ``{{year}}`` or ``{{working_time}}``."""

from __future__ import annotations

import calendar
from datetime import date
from typing import Mapping, Sequence

from rastexcel.domain.calendar import days_in_month, month_start
from rastexcel.sheet.cells import cell_at

from ..registry import CellContext, Registry

LabelValue = str | int


def month_labels(month: date | None = None, names: Sequence[str] | None = None) -> dict[str, LabelValue]:
    """Labels describing the reported month.

    ``names`` holds twelve month names (January first); defaults to the
    English names from :mod:`calendar`.
    """

    month = month_start(month)
    if names is not None and len(names) != 12:
        raise ValueError(f"expected 12 month names, got {len(names)}")
    name = names[month.month - 1] if names is not None else calendar.month_name[month.month]
    return {
        "{{year}}": month.year,
        "{{month}}": name,
        "{{month_number}}": month.month,
        "{{days_in_month}}": days_in_month(month),
    }


class LabelHandler:
    """Replace every known key in a cell with its text in a single dispatch."""

    def __init__(self, labels: Mapping[str, LabelValue] | None = None) -> None:
        self.labels: dict[str, LabelValue] = {}
        for key, text in (labels or {}).items():
            self.add(key, text)

    def add(self, key: str, text: LabelValue) -> LabelHandler:
        if not key:
            raise ValueError("label key must not be empty")
        self.labels[key] = text
        return self

    def register(self, registry: Registry) -> None:
        for key in self.labels:
            registry.register(key, self)

    def render(self, value: str) -> LabelValue:
        # a cell holding exactly one key keeps the label's type
        stripped = value.strip()
        if stripped in self.labels:
            return self.labels[stripped]
        for key, text in self.labels.items():
            value = value.replace(key, str(text))
        return value

    def __call__(self, ctx: CellContext) -> None:
        cell_at(ctx.sheet, ctx.row, ctx.col).value = self.render(ctx.value)
