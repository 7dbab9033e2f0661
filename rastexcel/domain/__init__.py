"""Domain records and employee sources."""

from .calendar import days_in_month, month_start, parse_month
from .models import Employee, EmployeeBlock, Mark, attendance_range, legend_entries

__all__ = [
    "Employee",
    "EmployeeBlock",
    "Mark",
    "attendance_range",
    "legend_entries",
    "days_in_month",
    "month_start",
    "parse_month",
]
