"""Named-style cache so each reusable style is registered once per workbook."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from openpyxl.styles import Alignment, Border, Font, NamedStyle, Side
from openpyxl.workbook.workbook import Workbook

LOGGER = logging.getLogger(__name__)

STYLE_PREFIX = "rastexcel."


@dataclass(frozen=True, slots=True)
class StyleSpec:
    """Declarative description of a reusable cell style."""

    horizontal: str
    vertical: str = "center"
    font_name: str = "Times New Roman"
    font_size: float = 11
    bordered: bool = True

    def build(self, name: str) -> NamedStyle:
        side = Side(style="thin", color="000000")
        border = Border(left=side, right=side, top=side, bottom=side) if self.bordered else Border()
        return NamedStyle(
            name=name,
            font=Font(name=self.font_name, size=self.font_size),
            alignment=Alignment(horizontal=self.horizontal, vertical=self.vertical),
            border=border,
        )


CENTERED = StyleSpec(horizontal="center")
LEFT = StyleSpec(horizontal="left")

BUILTIN_SPECS: dict[str, StyleSpec] = {
    "centered": CENTERED,
    "left": LEFT,
}


class StyleCache:
    """Memoize style handles by logical name for one workbook.

    A handle is the name of a ``NamedStyle`` registered in the workbook and can
    be assigned with ``cell.style = handle``. Not safe for concurrent use.
    """

    def __init__(self, workbook: Workbook) -> None:
        self.workbook = workbook
        self.allocations = 0
        self._handles: dict[str, str] = {}

    def get_or_create(self, name: str, spec: StyleSpec) -> str:
        handle = self._handles.get(name)
        if handle is not None:
            return handle

        handle = STYLE_PREFIX + name
        if handle not in self.workbook.named_styles:
            self.workbook.add_named_style(spec.build(handle))
            self.allocations += 1
            LOGGER.debug("Registered named style %s", handle)
        self._handles[name] = handle
        return handle

    def get(self, name: str) -> str:
        """Resolve one of the built-in logical names ("centered", "left")."""

        try:
            spec = BUILTIN_SPECS[name]
        except KeyError:
            raise KeyError(f"unknown logical style {name!r}") from None
        return self.get_or_create(name, spec)

    def centered(self) -> str:
        return self.get_or_create("centered", CENTERED)

    def left(self) -> str:
        return self.get_or_create("left", LEFT)


def cache_for(cache: StyleCache | None, workbook: Workbook) -> StyleCache:
    """Return *cache* when bound to *workbook*, else a fresh cache for it."""

    if cache is None or cache.workbook is not workbook:
        return StyleCache(workbook)
    return cache
