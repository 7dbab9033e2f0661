"""Per-employee summary formulas written above a placeholder row.

A summary cell such as ``{{t}}{{d}}`` sits directly below the employee block.
Every registered key found in the cell text contributes one formula fragment;
the fragments are added and written once per employee row into the
placeholder's column.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Protocol, Sequence

from openpyxl.worksheet.worksheet import Worksheet

from rastexcel.core.errors import HandlerError
from rastexcel.domain.models import EmployeeBlock, attendance_range
from rastexcel.sheet import ops
from rastexcel.sheet.cells import cell_at, column_letter

from ..registry import CellContext, Registry
from ..styles import StyleCache, cache_for

LOGGER = logging.getLogger(__name__)


class FormulaGenerator(Protocol):
    """Turns an attendance range reference (e.g. ``E4:AI4``) into a formula body."""

    blank_zero: bool

    def render(self, cell_range: str) -> str:  # pragma: no cover - interface definition
        ...


@dataclass(frozen=True, slots=True)
class SymbolCount:
    """Number of cells equal to *symbol*, multiplied by *weight*."""

    symbol: str
    weight: float = 1
    blank_zero: bool = True

    def render(self, cell_range: str) -> str:
        symbol = self.symbol.replace('"', '""')
        return f'SUMPRODUCT(({cell_range}="{symbol}")*{self.weight:g})'


@dataclass(frozen=True, slots=True)
class NumericSum:
    """Sum of every cell that parses as a number; text counts as zero."""

    blank_zero: bool = False

    def render(self, cell_range: str) -> str:
        return f"IFERROR(SUMPRODUCT(IFERROR(VALUE({cell_range}),0)),0)"


@dataclass(frozen=True, slots=True)
class NumericCount:
    """Number of cells that parse as a number."""

    blank_zero: bool = False

    def render(self, cell_range: str) -> str:
        return f"IFERROR(SUMPRODUCT(IFERROR(VALUE({cell_range})*0+1,0)),0)"


@dataclass(frozen=True, slots=True)
class FormulaKey:
    """Placeholder plus its generator; ``formula=None`` only applies the style."""

    key: str
    formula: FormulaGenerator | None = None


class FormulaHandler:
    """Write summary formulas for the employee rows above the placeholder.

    Rows are resolved either from the blocks recorded by the employee handler
    (``blocks``) or, in counted mode, from ``employee_count`` rows directly
    above the placeholder with attendance starting at ``attendance_start`` and
    spanning ``day_count`` columns.

    Args:
        keys: Formula keys in registration order.
        blocks: Live list of ``EmployeeBlock`` hand-offs.
        employee_count: Counted mode: number of employee rows above.
        attendance_start: Counted mode: 0-based first attendance column.
        day_count: Counted mode: width of the attendance range.
        remove_template_row: Remove the placeholder row (once) instead of
            clearing the cell; makes the handler structural.
    """

    def __init__(
        self,
        keys: Iterable[FormulaKey],
        *,
        blocks: Sequence[EmployeeBlock] | None = None,
        employee_count: int | None = None,
        attendance_start: int | None = None,
        day_count: int | None = None,
        remove_template_row: bool = False,
    ) -> None:
        self.keys = list(keys)
        if blocks is None and None in (employee_count, attendance_start, day_count):
            raise ValueError(
                "counted mode needs employee_count, attendance_start and day_count"
            )
        self.blocks = blocks
        self.employee_count = employee_count
        self.attendance_start = attendance_start
        self.day_count = day_count
        self.remove_template_row = remove_template_row
        self.structural = remove_template_row
        self.processed: set[tuple[str, int]] = set()
        self._styles: StyleCache | None = None

    def build_formula(self, value: str, cell_range: str) -> str | None:
        """Combined formula for every key contained in *value*; None if style-only."""

        generators = [k.formula for k in self.keys if k.key in value and k.formula is not None]
        if not generators:
            return None
        expr = "+".join(gen.render(cell_range) for gen in generators)
        if all(gen.blank_zero for gen in generators):
            return f'IF({expr}=0,"",({expr}))'
        return expr

    def _rows(self, ctx: CellContext) -> list[tuple[int, str]]:
        """(row, attendance range) pairs the placeholder summarizes."""

        if self.blocks is not None:
            block = self._block_above(ctx, self.blocks)
            return [(r, block.attendance_range(r)) for r in block.rows]

        count, start, width = self.employee_count, self.attendance_start, self.day_count
        if count is None or start is None or width is None:
            raise HandlerError("counted mode needs employee_count, attendance_start and day_count")
        rows = range(ctx.row - count, ctx.row)
        return [
            (r, attendance_range(r, start, width))
            for r in rows
            if r >= 0
        ]

    def _block_above(self, ctx: CellContext, blocks: Sequence[EmployeeBlock]) -> EmployeeBlock:
        for block in reversed(blocks):
            if block.sheet == ctx.sheet.title and block.end_row == ctx.row - 1:
                return block
        raise HandlerError(
            f"no employee block ends directly above {ctx.label} "
            f"({len(blocks)} block(s) recorded)"
        )

    def __call__(self, ctx: CellContext) -> None:
        ws, col = ctx.sheet, ctx.col
        self._styles = cache_for(self._styles, ctx.workbook)
        centered = self._styles.centered()

        rows = self._rows(ctx)
        for row, cell_range in rows:
            try:
                formula = self.build_formula(ctx.value, cell_range)
            except Exception as exc:  # noqa: BLE001 - attach the target cell to generator failures
                raise HandlerError(f"column {column_letter(col)} row {row + 1}: {exc}") from exc
            cell = cell_at(ws, row, col)
            if formula is not None:
                cell.value = "=" + formula
            cell.style = centered

        self._finish_template_row(ws, ctx)
        LOGGER.debug("Wrote %d summary cells above %s!%s", len(rows), ws.title, ctx.label)

    def _finish_template_row(self, ws: Worksheet, ctx: CellContext) -> None:
        key = (ws.title, ctx.row)
        first_hit = key not in self.processed
        self.processed.add(key)
        if not self.remove_template_row:
            cell_at(ws, ctx.row, ctx.col).value = None
        elif first_hit:
            ops.remove_row(ws, ctx.row)
            LOGGER.debug("Removed summary template row %d on %s", ctx.row + 1, ws.title)


def register_formula_keys(registry: Registry, handler: FormulaHandler) -> None:
    """Register *handler* once per key so any key hit dispatches it."""

    for key in handler.keys:
        registry.register(key.key, handler)
