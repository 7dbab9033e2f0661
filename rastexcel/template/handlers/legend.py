"""``{{marks_list}}``: expand into one legend row per symbolic mark."""

from __future__ import annotations

import logging
from typing import Iterable

from rastexcel.domain.models import Mark, legend_entries
from rastexcel.sheet import ops
from rastexcel.sheet.cells import apply_style, cell_at, copy_style

from ..registry import CellContext

LOGGER = logging.getLogger(__name__)

MARKS_KEY = "{{marks_list}}"


def legend_lines(marks: Iterable[Mark], gap: int = 4) -> list[str]:
    """Render ``name____key`` lines padded to one shared width."""

    marks = list(marks)
    if not marks:
        return []
    width = max(len(m.name) + len(m.key) for m in marks) + gap
    return [m.name + "_" * max(width - len(m.name) - len(m.key), 1) + m.key for m in marks]


class LegendHandler:
    """Replace the template row with the legend, keeping its merge width and style."""

    structural = True

    def __init__(self, marks: Iterable[Mark]) -> None:
        self.marks = legend_entries(marks)

    def __call__(self, ctx: CellContext) -> None:
        ws, row, col = ctx.sheet, ctx.row, ctx.col

        merged = ops.merged_range_at(ws, row, col)
        extra_cols = merged.max_col - merged.min_col if merged is not None else 0
        style = copy_style(cell_at(ws, row, col))

        ops.replace_row(ws, row, len(self.marks))

        for offset, line in enumerate(legend_lines(self.marks)):
            target = row + offset
            ops.merge(ws, target, col, target, col + extra_cols)
            cell_at(ws, target, col).value = line
            apply_style(ws, target, col, target, col + extra_cols, style)

        LOGGER.info("Wrote %d legend rows on %s at %s", len(self.marks), ws.title, ctx.label)
