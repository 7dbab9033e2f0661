"""Custom exceptions used across rast-excel."""

from __future__ import annotations


class RastExcelError(Exception):
    """Base error for the application."""


class ConfigError(RastExcelError):
    """Configuration related error."""


class PassOrderError(ConfigError):
    """Raised when structural handlers are mixed into the wrong pass."""


class WorkbookIOError(RastExcelError):
    """Raised when a workbook cannot be opened or serialized."""


class StructuralEditError(RastExcelError):
    """Raised when a row/column insert, removal or merge is rejected."""


class HandlerError(RastExcelError):
    """Raised when a placeholder handler fails internally."""


class RosterError(RastExcelError):
    """Raised when an employee roster cannot be read."""


class ProcessingError(RastExcelError):
    """A processing pass aborted on a specific cell."""

    def __init__(self, message: str, *, sheet: str, cell: str) -> None:
        super().__init__(f"sheet {sheet!r}: cell {cell}: {message}")
        self.sheet = sheet
        self.cell = cell


def error_chain(exc: BaseException) -> str:
    """Render an exception and its causes as ``outer: inner: root``."""

    parts: list[str] = []
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        text = str(current) or type(current).__name__
        if not parts or text not in parts[-1]:
            parts.append(text)
        current = current.__cause__
    return ": ".join(parts)
