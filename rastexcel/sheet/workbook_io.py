"""Open and serialize workbooks from paths or in-memory buffers."""

from __future__ import annotations

import logging
import os
from io import BytesIO
from pathlib import Path
from zipfile import BadZipFile

from openpyxl import Workbook, load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from rastexcel.core.errors import WorkbookIOError

LOGGER = logging.getLogger(__name__)

_LOAD_ERRORS = (OSError, BadZipFile, InvalidFileException, KeyError, ValueError)


def open_workbook(path: str | Path) -> Workbook:
    """Load a workbook from disk keeping formulas and styles intact."""

    path = Path(path)
    if not path.exists():
        raise WorkbookIOError(f"open {path}: file not found")
    try:
        workbook = load_workbook(path)
    except _LOAD_ERRORS as exc:
        raise WorkbookIOError(f"open {path}: {exc}") from exc
    LOGGER.debug("Opened workbook %s (%d sheets)", path, len(workbook.sheetnames))
    return workbook


def open_workbook_bytes(data: bytes) -> Workbook:
    try:
        return load_workbook(BytesIO(data))
    except _LOAD_ERRORS as exc:
        raise WorkbookIOError(f"open from bytes: {exc}") from exc


def workbook_to_bytes(workbook: Workbook) -> bytes:
    buffer = BytesIO()
    try:
        workbook.save(buffer)
    except (OSError, ValueError, TypeError) as exc:
        raise WorkbookIOError(f"write to buffer: {exc}") from exc
    return buffer.getvalue()


def _tmp_path(path: Path) -> Path:
    return path.with_name(path.name + ".tmp")


def write_bytes_atomic(data: bytes, path: str | Path) -> Path:
    """Write *data* to *path* through a temporary file swap."""

    path = Path(path)
    tmp_path = _tmp_path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_bytes(data)
        os.replace(tmp_path, path)
    except OSError as exc:
        if tmp_path.exists():
            tmp_path.unlink()
        raise WorkbookIOError(f"save {path}: {exc}") from exc
    return path


def save_workbook(workbook: Workbook, path: str | Path) -> Path:
    """Serialize *workbook* and write it atomically to *path*."""

    return write_bytes_atomic(workbook_to_bytes(workbook), path)
