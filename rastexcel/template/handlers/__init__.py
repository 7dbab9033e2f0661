"""Built-in placeholder handlers."""

from .days import DAYS_KEY, DaysHandler
from .employees import (
    EMPLOYEE_COLUMNS,
    EMPLOYEES_KEY,
    EmployeeColumn,
    EmployeeHandler,
    attendance_start_col,
)
from .formulas import (
    FormulaGenerator,
    FormulaHandler,
    FormulaKey,
    NumericCount,
    NumericSum,
    SymbolCount,
    register_formula_keys,
)
from .labels import LabelHandler, month_labels
from .legend import MARKS_KEY, LegendHandler, legend_lines
from .merge_codes import MERGE_KEY, MergeCodeHandler

__all__ = [
    "DAYS_KEY",
    "DaysHandler",
    "EMPLOYEE_COLUMNS",
    "EMPLOYEES_KEY",
    "EmployeeColumn",
    "EmployeeHandler",
    "attendance_start_col",
    "FormulaGenerator",
    "FormulaHandler",
    "FormulaKey",
    "NumericCount",
    "NumericSum",
    "SymbolCount",
    "register_formula_keys",
    "LabelHandler",
    "month_labels",
    "MARKS_KEY",
    "LegendHandler",
    "legend_lines",
    "MERGE_KEY",
    "MergeCodeHandler",
]
