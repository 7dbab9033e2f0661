"""``[rows:cols]`` directives: merge a cell with its neighbours."""

from __future__ import annotations

import logging
import re

from rastexcel.sheet import ops
from rastexcel.sheet.cells import apply_style, cell_at, copy_style

from ..registry import CellContext

LOGGER = logging.getLogger(__name__)

MERGE_KEY = "["
MERGE_CODE = re.compile(r"\[(\d+):(\d+)\]")


class MergeCodeHandler:
    """Strip ``[rows:cols]`` from the text and merge that many extra rows/columns.

    Only the first directive defines the span; every directive is removed.
    """

    def __call__(self, ctx: CellContext) -> None:
        match = MERGE_CODE.search(ctx.value)
        if match is None:
            return
        rows, cols = int(match.group(1)), int(match.group(2))
        ws, row, col = ctx.sheet, ctx.row, ctx.col

        cell = cell_at(ws, row, col)
        style = copy_style(cell)
        cell.value = MERGE_CODE.sub("", ctx.value).strip() or None

        if rows or cols:
            ops.merge(ws, row, col, row + rows, col + cols)
            apply_style(ws, row, col, row + rows, col + cols, style)
            LOGGER.debug("Merged %s!%s by %d rows, %d cols", ws.title, ctx.label, rows, cols)
