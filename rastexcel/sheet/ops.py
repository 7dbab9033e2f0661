"""Structural worksheet edits with full-engine semantics.

openpyxl moves cell values and styles on ``insert_rows``/``delete_rows``/
``insert_cols`` but leaves merged ranges, row heights, column widths and
formula references where they were. The helpers below snapshot those, perform
the edit and restore them at their shifted positions, the way a spreadsheet
application does.
"""

from __future__ import annotations

import logging
from copy import copy
from typing import Callable, Iterable, Optional

from openpyxl.utils import column_index_from_string, get_column_letter
from openpyxl.worksheet.cell_range import CellRange
from openpyxl.worksheet.dimensions import ColumnDimension
from openpyxl.worksheet.worksheet import Worksheet

from rastexcel.core.errors import StructuralEditError

from .cells import range_name
from .references import LineShift, shift_workbook_formulas

LOGGER = logging.getLogger(__name__)

MAX_ROWS = 1_048_576
MAX_COLUMNS = 16_384

Bounds = tuple[int, int, int, int]  # min_row, min_col, max_row, max_col (1-based)
BoundsShift = Callable[[Bounds], Optional[Bounds]]


def _detach_merges(ws: Worksheet) -> list[Bounds]:
    bounds: list[Bounds] = []
    for rng in list(ws.merged_cells.ranges):
        bounds.append((rng.min_row, rng.min_col, rng.max_row, rng.max_col))
        ws.unmerge_cells(rng.coord)
    return bounds


def _attach_merges(ws: Worksheet, bounds: Iterable[Bounds]) -> None:
    for min_row, min_col, max_row, max_col in bounds:
        if min_row == max_row and min_col == max_col:
            continue
        ws.merge_cells(start_row=min_row, start_column=min_col, end_row=max_row, end_column=max_col)


def _restructure(
    ws: Worksheet,
    edit: Callable[[], None],
    shift: BoundsShift,
    lines: LineShift,
) -> None:
    merges = _detach_merges(ws)
    edit()
    shifted = [b for b in (shift(bounds) for bounds in merges) if b is not None]
    _attach_merges(ws, shifted)
    shift_workbook_formulas(ws.parent, lines)


def _shift_row_heights(ws: Worksheet, start: int, offset: int) -> None:
    """Move custom heights of rows >= *start* (1-based) by *offset*."""

    heights = {
        idx: dim.height
        for idx, dim in list(ws.row_dimensions.items())
        if idx >= start and dim.height is not None
    }
    for idx in heights:
        ws.row_dimensions[idx].height = None
    for idx, height in heights.items():
        ws.row_dimensions[idx + offset].height = height


def _place_columns(ws: Worksheet, source: ColumnDimension, lo: int, hi: int) -> None:
    letter = get_column_letter(lo)
    dim = copy(source)
    dim.index = letter
    dim.min = lo
    dim.max = hi
    ws.column_dimensions[letter] = dim


def _shift_column_widths(ws: Worksheet, start: int, amount: int) -> None:
    """Move column formatting of columns >= *start* (1-based) right by *amount*.

    Saved files group equal columns into one ``min..max`` entry. Entries
    touching *start* are re-created one per column; an entry running to the
    last sheet column is split only inside the used area. An entry straddling
    *start* grows by *amount*.
    """

    moved: list[tuple[int, int, ColumnDimension]] = []
    for letter, dim in list(ws.column_dimensions.items()):
        lo = dim.min or column_index_from_string(letter)
        hi = max(dim.max or lo, lo)
        if hi < start:
            continue
        del ws.column_dimensions[letter]
        new_lo = lo if lo < start else lo + amount
        new_hi = min(hi + amount, MAX_COLUMNS)
        if new_lo <= new_hi:
            moved.append((new_lo, new_hi, dim))

    used = max(ws.max_column, start) + amount
    for lo, hi, dim in moved:
        split = hi if hi < MAX_COLUMNS else min(hi, max(used, lo))
        for idx in range(lo, split + 1):
            _place_columns(ws, dim, idx, idx)
        if split < hi:
            _place_columns(ws, dim, split + 1, hi)


def _sweep_tail_rows(ws: Worksheet, amount: int) -> int:
    """Drop rows past ``MAX_ROWS - amount`` that carry formatting but no value.

    Such rows are editing leftovers near the end of the sheet; they would make
    any insertion of *amount* rows overflow. Returns the number of rows removed,
    0 when one of them holds a value.
    """

    first = MAX_ROWS - amount + 1
    last = ws.max_row
    if last < first:
        return 0
    for values in ws.iter_rows(min_row=first, max_row=last, values_only=True):
        if any(value is not None for value in values):
            return 0
    ws.delete_rows(first, last - first + 1)
    for idx in [idx for idx in ws.row_dimensions if idx >= first]:
        del ws.row_dimensions[idx]
    LOGGER.info("Removed %d empty trailing rows from %s", last - first + 1, ws.title)
    return last - first + 1


def _insert_rows(ws: Worksheet, row: int, amount: int, absorb: bool) -> None:
    if amount <= 0:
        return
    if row < 0:
        raise StructuralEditError(f"insert rows: invalid row index {row}")
    limit_error = StructuralEditError(
        f"insert rows: {amount} rows at {row + 1} would exceed the {MAX_ROWS} row limit"
    )
    if row + 1 + amount > MAX_ROWS:
        raise limit_error
    if ws.max_row + amount > MAX_ROWS and not _sweep_tail_rows(ws, amount):
        raise limit_error
    at = row + 1

    def shift(bounds: Bounds) -> Bounds:
        min_row, min_col, max_row, max_col = bounds
        if min_row >= at:
            return (min_row + amount, min_col, max_row + amount, max_col)
        if max_row >= at:
            return (min_row, min_col, max_row + amount, max_col)
        return bounds

    _shift_row_heights(ws, at, amount)
    _restructure(
        ws,
        lambda: ws.insert_rows(at, amount),
        shift,
        LineShift(ws.title, "row", at, amount, absorb=absorb),
    )
    LOGGER.debug("Inserted %d rows at %d on %s", amount, at, ws.title)


def insert_rows(ws: Worksheet, row: int, amount: int) -> None:
    """Insert *amount* blank rows so that the first new row has index *row*."""

    _insert_rows(ws, row, amount, absorb=False)


def remove_row(ws: Worksheet, row: int) -> None:
    """Delete the row with index *row*, pulling the rows below up by one."""

    if row < 0:
        raise StructuralEditError(f"remove row: invalid row index {row}")
    at = row + 1

    def shift(bounds: Bounds) -> Bounds | None:
        min_row, min_col, max_row, max_col = bounds
        if min_row == at and max_row == at:
            return None
        if min_row > at:
            return (min_row - 1, min_col, max_row - 1, max_col)
        if max_row >= at:
            return (min_row, min_col, max_row - 1, max_col)
        return bounds

    if at in ws.row_dimensions:
        ws.row_dimensions[at].height = None
    _shift_row_heights(ws, at + 1, -1)
    _restructure(ws, lambda: ws.delete_rows(at, 1), shift, LineShift(ws.title, "row", at, -1))
    LOGGER.debug("Removed row %d on %s", at, ws.title)


def replace_row(ws: Worksheet, row: int, count: int) -> None:
    """Replace the row with index *row* by *count* blank rows.

    Formula ranges over the replaced row stretch to cover the new rows, so a
    template total such as ``COUNTA(A2:A2)`` ends up summarizing the block.
    """

    if count > 0:
        _insert_rows(ws, row, count, absorb=True)
    remove_row(ws, row + max(count, 0))


def insert_cols(ws: Worksheet, col: int, amount: int) -> None:
    """Insert *amount* blank columns so that the first new column has index *col*."""

    if amount <= 0:
        return
    if col < 0:
        raise StructuralEditError(f"insert cols: invalid column index {col}")
    if max(ws.max_column, col + 1) + amount > MAX_COLUMNS:
        raise StructuralEditError(
            f"insert cols: {amount} columns at {get_column_letter(col + 1)} "
            f"would exceed the {MAX_COLUMNS} column limit"
        )
    at = col + 1

    def shift(bounds: Bounds) -> Bounds:
        min_row, min_col, max_row, max_col = bounds
        if min_col >= at:
            return (min_row, min_col + amount, max_row, max_col + amount)
        if max_col >= at:
            return (min_row, min_col, max_row, max_col + amount)
        return bounds

    _shift_column_widths(ws, at, amount)
    _restructure(
        ws,
        lambda: ws.insert_cols(at, amount),
        shift,
        LineShift(ws.title, "col", at, amount),
    )
    LOGGER.debug("Inserted %d columns at %s on %s", amount, get_column_letter(at), ws.title)


def merge(ws: Worksheet, top: int, left: int, bottom: int, right: int) -> None:
    """Merge a rectangle, replacing any merged ranges that overlap it."""

    if bottom < top or right < left:
        raise StructuralEditError(f"merge: empty range {top},{left}..{bottom},{right}")
    if top == bottom and left == right:
        return
    target = CellRange(min_row=top + 1, min_col=left + 1, max_row=bottom + 1, max_col=right + 1)
    for rng in list(ws.merged_cells.ranges):
        if not rng.isdisjoint(target):
            ws.unmerge_cells(rng.coord)
    try:
        ws.merge_cells(target.coord)
    except ValueError as exc:
        raise StructuralEditError(f"merge {range_name(top, left, bottom, right)}: {exc}") from exc


def merged_range_at(ws: Worksheet, row: int, col: int) -> CellRange | None:
    """Return the merged range whose top-left cell is (row, col), if any."""

    for rng in ws.merged_cells.ranges:
        if rng.min_row == row + 1 and rng.min_col == col + 1:
            return rng
    return None
