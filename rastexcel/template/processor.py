"""Sheet scanner feeding every non-empty cell to a registry."""

from __future__ import annotations

import logging
from pathlib import Path

from openpyxl.workbook.workbook import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from rastexcel.core.errors import ProcessingError
from rastexcel.sheet.cells import cell_name, cell_text
from rastexcel.sheet.workbook_io import open_workbook, open_workbook_bytes, workbook_to_bytes

from .registry import CellContext, Registry

LOGGER = logging.getLogger(__name__)


def text_grid(ws: Worksheet) -> list[list[str]]:
    """Snapshot all rows of *ws* as text, row 0 being the first sheet row."""

    return [[cell_text(value) for value in row] for row in ws.iter_rows(values_only=True)]


class Processor:
    """Applies one registry (one pass) to workbooks.

    Rows are snapshotted per sheet before dispatching, so handlers that insert
    or remove rows/columns do not shift the indices of cells visited later in
    the same pass. Keep such handlers in their own structural pass.
    """

    def __init__(self, registry: Registry) -> None:
        self.registry = registry

    def process_file(self, path: str | Path) -> bytes:
        """Process a workbook from disk and return the result as bytes; the file is untouched."""

        workbook = open_workbook(path)
        try:
            self.process_workbook(workbook)
            return workbook_to_bytes(workbook)
        finally:
            workbook.close()

    def process_bytes(self, data: bytes) -> bytes:
        workbook = open_workbook_bytes(data)
        try:
            self.process_workbook(workbook)
            return workbook_to_bytes(workbook)
        finally:
            workbook.close()

    def process_workbook(self, workbook: Workbook) -> int:
        """Dispatch every non-empty cell of every sheet; return the number of matches."""

        matched = 0
        for ws in workbook.worksheets:
            matched += self._process_sheet(ws)
        LOGGER.info("Pass %s finished: %d placeholder cells handled", self.registry.name, matched)
        return matched

    def _process_sheet(self, ws: Worksheet) -> int:
        matched = 0
        for row, values in enumerate(text_grid(ws)):
            for col, value in enumerate(values):
                if not value:
                    continue
                ctx = CellContext(sheet=ws, row=row, col=col, value=value)
                try:
                    if self.registry.dispatch(ctx):
                        matched += 1
                except Exception as exc:  # noqa: BLE001 - every failure aborts the pass
                    raise ProcessingError(
                        str(exc) or type(exc).__name__, sheet=ws.title, cell=cell_name(row, col)
                    ) from exc
        return matched
