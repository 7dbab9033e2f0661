"""Thin adapter over openpyxl exposing the spreadsheet capabilities the templates need."""

from .cells import apply_style, cell_at, cell_name, cell_text, column_letter, copy_style
from .ops import insert_cols, insert_rows, merge, merged_range_at, remove_row, replace_row
from .references import LineShift, shift_formula
from .workbook_io import open_workbook, open_workbook_bytes, save_workbook, workbook_to_bytes

__all__ = [
    "apply_style",
    "cell_at",
    "cell_name",
    "cell_text",
    "column_letter",
    "copy_style",
    "insert_cols",
    "insert_rows",
    "merge",
    "merged_range_at",
    "remove_row",
    "replace_row",
    "LineShift",
    "shift_formula",
    "open_workbook",
    "open_workbook_bytes",
    "save_workbook",
    "workbook_to_bytes",
]
