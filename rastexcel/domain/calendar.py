"""Month arithmetic for the reported period."""

from __future__ import annotations

import calendar
from datetime import date, datetime


def month_start(value: date | None = None) -> date:
    """First day of the month containing *value* (default: today)."""

    value = value or date.today()
    return value.replace(day=1)


def days_in_month(month: date | None = None) -> int:
    month = month_start(month)
    return calendar.monthrange(month.year, month.month)[1]


def parse_month(text: str) -> date:
    """Parse ``YYYY-MM`` into the first day of that month."""

    try:
        parsed = datetime.strptime(text.strip(), "%Y-%m")
    except ValueError as exc:
        raise ValueError(f"month must be formatted as YYYY-MM, got {text!r}") from exc
    return date(parsed.year, parsed.month, 1)
