"""Template substitution engine: registry, scanner, styles and handlers."""

from .processor import Processor, text_grid
from .registry import CellContext, Handler, PassKind, Registry, is_structural, structural
from .styles import StyleCache, StyleSpec

__all__ = [
    "CellContext",
    "Handler",
    "PassKind",
    "Processor",
    "Registry",
    "StyleCache",
    "StyleSpec",
    "is_structural",
    "structural",
    "text_grid",
]
