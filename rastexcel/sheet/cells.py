"""Cell addressing and style-handle helpers.

All row/column indices accepted here are 0-based; openpyxl itself is 1-based.
"""

from __future__ import annotations

from copy import copy
from typing import Any

from openpyxl.cell.cell import Cell
from openpyxl.styles.cell_style import StyleArray
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet


def column_letter(col: int) -> str:
    """Convert a 0-based column index to Excel letters (0 -> A, 26 -> AA)."""

    if col < 0:
        raise ValueError(f"column index must be >= 0, got {col}")
    return get_column_letter(col + 1)


def cell_name(row: int, col: int) -> str:
    """Convert 0-based row/column indices to a cell reference (0, 0 -> "A1")."""

    if row < 0:
        raise ValueError(f"row index must be >= 0, got {row}")
    return f"{column_letter(col)}{row + 1}"


def range_name(top: int, left: int, bottom: int, right: int) -> str:
    return f"{cell_name(top, left)}:{cell_name(bottom, right)}"


def cell_at(ws: Worksheet, row: int, col: int) -> Cell:
    return ws.cell(row=row + 1, column=col + 1)


def cell_text(value: Any) -> str:
    """Render a raw cell value the way the scanner sees it."""

    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def copy_style(cell: Cell) -> StyleArray | None:
    """Return a detached style handle for *cell*, or None for the default style."""

    if not cell.has_style:
        return None
    return copy(cell._style)


def apply_style(
    ws: Worksheet,
    top: int,
    left: int,
    bottom: int,
    right: int,
    style: StyleArray | str | None,
) -> None:
    """Assign a style handle to every cell of a rectangle.

    *style* is either a copied ``StyleArray`` or the name of a registered
    ``NamedStyle``. ``None`` leaves the cells untouched.
    """

    if style is None:
        return
    for row in range(top, bottom + 1):
        for col in range(left, right + 1):
            cell = cell_at(ws, row, col)
            if isinstance(style, str):
                cell.style = style
            else:
                cell._style = copy(style)
