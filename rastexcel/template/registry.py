"""Placeholder registry: ordered pattern -> handler dispatch.

A registry is one *pass*. The scanner feeds every non-empty cell to
:meth:`Registry.dispatch`; the first registered pattern contained in the cell
text wins and its handler mutates the workbook. Handlers that insert or remove
rows/columns are *structural*: they may only live in a ``STRUCTURAL`` pass,
one handler per pass, and structural passes must run before stable ones.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Protocol, TypeVar

from openpyxl.workbook.workbook import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from rastexcel.core.errors import PassOrderError
from rastexcel.sheet.cells import cell_name

LOGGER = logging.getLogger(__name__)


class PassKind(str, Enum):
    """Whether a pass may change row/column indices."""

    STRUCTURAL = "structural"
    STABLE = "stable"


@dataclass(frozen=True, slots=True)
class CellContext:
    """The matched cell handed to a handler (0-based row/col)."""

    sheet: Worksheet
    row: int
    col: int
    value: str

    @property
    def label(self) -> str:
        return cell_name(self.row, self.col)

    @property
    def workbook(self) -> Workbook:
        return self.sheet.parent


class Handler(Protocol):
    """Callable mutating the workbook for one matched cell; raises on failure."""

    def __call__(self, ctx: CellContext) -> None:  # pragma: no cover - interface definition
        ...


F = TypeVar("F", bound=Callable[[CellContext], None])


def structural(func: F) -> F:
    """Mark a plain handler function as inserting/removing rows or columns."""

    func.structural = True  # type: ignore[attr-defined]
    return func


def is_structural(handler: Handler) -> bool:
    return bool(getattr(handler, "structural", False))


@dataclass(frozen=True, slots=True)
class _Entry:
    pattern: str
    handler: Handler


class Registry:
    """Ordered, append-only list of (pattern, handler) entries."""

    def __init__(self, kind: PassKind = PassKind.STABLE, name: str = "") -> None:
        self.kind = kind
        self.name = name or kind.value
        self._entries: list[_Entry] = []
        self._structural_handler: Handler | None = None

    def register(self, pattern: str, handler: Handler) -> None:
        """Append *handler* for *pattern*. Earlier registrations win on overlap."""

        if not pattern:
            raise ValueError("placeholder pattern must not be empty")
        if is_structural(handler):
            if self.kind is not PassKind.STRUCTURAL:
                raise PassOrderError(
                    f"pass {self.name!r}: structural handler for {pattern!r} "
                    "requires a structural pass"
                )
            if self._structural_handler is not None and self._structural_handler is not handler:
                raise PassOrderError(
                    f"pass {self.name!r}: already holds a structural handler; "
                    f"register {pattern!r} in its own pass"
                )
            self._structural_handler = handler
        self._entries.append(_Entry(pattern, handler))

    def dispatch(self, ctx: CellContext) -> bool:
        """Run the first handler whose pattern occurs in ``ctx.value``.

        Returns True when a handler ran. Handler errors propagate unchanged.
        """

        for entry in self._entries:
            if entry.pattern in ctx.value:
                LOGGER.debug("%s!%s matched %r", ctx.sheet.title, ctx.label, entry.pattern)
                entry.handler(ctx)
                return True
        return False

    @property
    def patterns(self) -> list[str]:
        return [entry.pattern for entry in self._entries]

    @property
    def structural(self) -> bool:
        return self._structural_handler is not None

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Registry(kind={self.kind.value!r}, name={self.name!r}, patterns={self.patterns!r})"
