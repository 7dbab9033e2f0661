from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Iterator

import pytest
from openpyxl import Workbook

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from rastexcel.core import logger as core_logger
from rastexcel.domain.models import Employee


@pytest.fixture(autouse=True)
def _isolated_logging(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep log files out of the home directory."""

    monkeypatch.setenv(core_logger.LOG_DIR_ENV, str(tmp_path / "logs"))
    core_logger.reset_logger()
    yield
    core_logger.reset_logger()


@pytest.fixture
def make_employee() -> Callable[..., Employee]:
    def _make(idx: int, attendance: list[str], position: str = "QA Engineer") -> Employee:
        return Employee(
            id=idx,
            full_name=f"Employee {idx}",
            table_id=f"{idx:03d}",
            job_position=position,
            attendance=tuple(attendance),
        )

    return _make


@pytest.fixture
def sheet():
    wb = Workbook()
    ws = wb.active
    ws.title = "Sheet1"
    return ws
