"""Rewrite A1 references in formulas when rows or columns of a sheet move.

openpyxl moves cells on insert and delete but keeps formula text as written.
The helpers below walk every formula of the workbook with openpyxl's tokenizer
and adjust the references that point at the edited sheet: references past an
insertion move, ranges spanning it grow, references into deleted lines become
``#REF!``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Literal

from openpyxl.formula.tokenizer import Token, Tokenizer, TokenizerError
from openpyxl.utils import column_index_from_string, get_column_letter
from openpyxl.workbook.workbook import Workbook

LOGGER = logging.getLogger(__name__)

REF_ERROR = "#REF!"

_CELL_RE = re.compile(r"^(\$?)([A-Za-z]{1,3})(\$?)([0-9]+)$")
_ROW_RE = re.compile(r"^(\$?)([0-9]+)$")
_COL_RE = re.compile(r"^(\$?)([A-Za-z]{1,3})$")


@dataclass(frozen=True, slots=True)
class LineShift:
    """Rows (or columns) of one sheet moving at the 1-based line *at*.

    A positive *amount* inserts lines before *at*; a negative one deletes
    ``-amount`` lines starting at *at*. With *absorb* set, an insertion keeps
    the start of references that begin exactly at *at* so ranges over that
    line stretch across the new lines instead of moving past them.
    """

    sheet: str
    axis: Literal["row", "col"]
    at: int
    amount: int
    absorb: bool = False

    def _inserted(self, index: int) -> int:
        if index > self.at or (index == self.at and not self.absorb):
            return index + self.amount
        return index

    def line(self, index: int) -> int | None:
        """New index of one line; None when the line was deleted."""

        if self.amount >= 0:
            return self._inserted(index)
        end = self.at - self.amount
        if index < self.at:
            return index
        if index >= end:
            return index + self.amount
        return None

    def span(self, lo: int, hi: int) -> tuple[int, int] | None:
        """New bounds of the inclusive range lo..hi; None when all of it was deleted."""

        if self.amount >= 0:
            return self._inserted(lo), hi + self.amount if hi >= self.at else hi
        end = self.at - self.amount
        if lo >= self.at and hi < end:
            return None
        if lo < self.at:
            new_lo = lo
        else:
            new_lo = self.at if lo < end else lo + self.amount
        if hi < self.at:
            new_hi = hi
        else:
            new_hi = self.at - 1 if hi < end else hi + self.amount
        return new_lo, new_hi


def _sheet_name(prefix: str) -> str:
    if len(prefix) >= 2 and prefix[0] == prefix[-1] == "'":
        return prefix[1:-1].replace("''", "'")
    return prefix


def _col_index(letters: str) -> int:
    return column_index_from_string(letters.upper())


def _shift_cells(shift: LineShift, first: re.Match, last: re.Match) -> str | None:
    col_a, col_b = _col_index(first[2]), _col_index(last[2])
    row_a, row_b = int(first[4]), int(last[4])
    if shift.axis == "row":
        span = shift.span(row_a, row_b)
        if span is None:
            return None
        row_a, row_b = span
    else:
        span = shift.span(col_a, col_b)
        if span is None:
            return None
        col_a, col_b = span
    return (
        f"{first[1]}{get_column_letter(col_a)}{first[3]}{row_a}:"
        f"{last[1]}{get_column_letter(col_b)}{last[3]}{row_b}"
    )


def _shift_area(area: str, shift: LineShift) -> str | None:
    """Shift one reference without sheet prefix; names are returned unchanged."""

    pieces = area.split(":")
    if len(pieces) == 1:
        cell = _CELL_RE.match(area)
        if cell is None:
            return area
        if shift.axis == "row":
            row = shift.line(int(cell[4]))
            return None if row is None else f"{cell[1]}{cell[2]}{cell[3]}{row}"
        col = shift.line(_col_index(cell[2]))
        return None if col is None else f"{cell[1]}{get_column_letter(col)}{cell[3]}{cell[4]}"
    if len(pieces) != 2:
        return area

    first, last = _CELL_RE.match(pieces[0]), _CELL_RE.match(pieces[1])
    if first is not None and last is not None:
        return _shift_cells(shift, first, last)

    rows = _ROW_RE.match(pieces[0]), _ROW_RE.match(pieces[1])
    if rows[0] is not None and rows[1] is not None:
        if shift.axis != "row":
            return area
        span = shift.span(int(rows[0][2]), int(rows[1][2]))
        if span is None:
            return None
        return f"{rows[0][1]}{span[0]}:{rows[1][1]}{span[1]}"

    cols = _COL_RE.match(pieces[0]), _COL_RE.match(pieces[1])
    if cols[0] is not None and cols[1] is not None:
        if shift.axis != "col":
            return area
        span = shift.span(_col_index(cols[0][2]), _col_index(cols[1][2]))
        if span is None:
            return None
        return (
            f"{cols[0][1]}{get_column_letter(span[0])}:"
            f"{cols[1][1]}{get_column_letter(span[1])}"
        )
    return area


def shift_reference(reference: str, host: str, shift: LineShift) -> str:
    """Adjust one range operand written in a formula on sheet *host*."""

    prefix, bang, area = reference.rpartition("!")
    target = _sheet_name(prefix) if bang else host
    if target != shift.sheet:
        return reference
    moved = _shift_area(area, shift)
    if moved is None:
        return prefix + bang + REF_ERROR
    return prefix + bang + moved


def shift_formula(formula: str, host: str, shift: LineShift) -> str:
    """Return *formula* with every reference into the edited sheet adjusted."""

    try:
        tokens = Tokenizer(formula)
    except TokenizerError as exc:
        LOGGER.warning("Keeping unparsable formula %r on %s: %s", formula, host, exc)
        return formula

    changed = False
    for token in tokens.items:
        if token.type != Token.OPERAND or token.subtype != Token.RANGE:
            continue
        moved = shift_reference(token.value, host, shift)
        if moved != token.value:
            token.value = moved
            changed = True
    return tokens.render() if changed else formula


def shift_workbook_formulas(workbook: Workbook, shift: LineShift) -> int:
    """Rewrite formulas on every sheet of *workbook*; return the number changed."""

    changed = 0
    for ws in workbook.worksheets:
        for row in ws.iter_rows():
            for cell in row:
                if cell.data_type != "f" or not isinstance(cell.value, str):
                    continue
                moved = shift_formula(cell.value, ws.title, shift)
                if moved != cell.value:
                    cell.value = moved
                    changed += 1
    if changed:
        LOGGER.debug("Rewrote %d formula(s) after %s shift on %s", changed, shift.axis, shift.sheet)
    return changed
