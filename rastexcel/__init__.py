"""Fill monthly attendance spreadsheet templates."""

from __future__ import annotations

__version__ = "0.3.0"
