"""Timesheet settings: employees, legend, labels and summary formula keys.

The defaults live in ``timesheet.yaml`` next to this module; a different file
can be passed to :func:`load_settings`. Only the CLI reads configuration, the
template engine receives plain objects.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from rastexcel.core.errors import ConfigError
from rastexcel.domain.models import Mark
from rastexcel.template.handlers.formulas import (
    FormulaKey,
    NumericCount,
    NumericSum,
    SymbolCount,
)


CONFIG_DIR = Path(__file__).resolve().parent
DEFAULT_SETTINGS_PATH = CONFIG_DIR / "timesheet.yaml"


class MarkSettings(BaseModel):
    """One legend entry."""

    model_config = ConfigDict(extra="forbid")

    name: str
    key: str

    def to_mark(self) -> Mark:
        return Mark(name=self.name, key=self.key)


class FormulaKeySettings(BaseModel):
    """Summary placeholder and the formula it produces.

    ``kind`` selects the generator: ``count`` (symbol x weight), ``num_sum``,
    ``num_count`` or ``style`` (no formula, style only).
    """

    model_config = ConfigDict(extra="forbid")

    key: str = Field(min_length=1)
    kind: Literal["count", "num_sum", "num_count", "style"]
    symbol: str | None = None
    weight: float = 1

    @field_validator("symbol")
    @classmethod
    def _symbol_not_empty(cls, value: str | None) -> str | None:
        if value is not None and not value:
            raise ValueError("symbol must not be empty")
        return value

    @model_validator(mode="after")
    def _count_needs_symbol(self) -> FormulaKeySettings:
        if self.kind == "count" and self.symbol is None:
            raise ValueError(f"formula key {self.key}: kind 'count' needs a symbol")
        return self

    def to_formula_key(self) -> FormulaKey:
        if self.kind == "count":
            if self.symbol is None:
                raise ConfigError(f"formula key {self.key}: kind 'count' needs a symbol")
            return FormulaKey(self.key, SymbolCount(self.symbol, self.weight))
        if self.kind == "num_sum":
            return FormulaKey(self.key, NumericSum())
        if self.kind == "num_count":
            return FormulaKey(self.key, NumericCount())
        return FormulaKey(self.key)


class TimesheetSettings(BaseModel):
    """Complete settings file model."""

    model_config = ConfigDict(extra="forbid")

    employee_count: int = Field(default=25, ge=0)
    attendance_symbols: List[str] = Field(default_factory=lambda: ["W", "8", "P", "W", "A", "L"])
    job_positions: List[str] = Field(default_factory=lambda: ["Software Engineer"])
    labels: Dict[str, str] = Field(default_factory=dict)
    month_names: List[str] | None = None
    marks: List[MarkSettings] = Field(default_factory=list)
    formula_keys: List[FormulaKeySettings] = Field(default_factory=list)

    @field_validator("attendance_symbols", "job_positions")
    @classmethod
    def _not_empty(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("at least one entry is required")
        return value

    @field_validator("month_names")
    @classmethod
    def _twelve_months(cls, value: List[str] | None) -> List[str] | None:
        if value is not None and len(value) != 12:
            raise ValueError(f"expected 12 month names, got {len(value)}")
        return value

    def mark_records(self) -> list[Mark]:
        return [mark.to_mark() for mark in self.marks]

    def formula_key_records(self) -> list[FormulaKey]:
        return [key.to_formula_key() for key in self.formula_keys]


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"settings file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"settings file {path} is not valid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"settings file {path} must contain a mapping")
    return data


def load_settings(path: str | Path | None = None) -> TimesheetSettings:
    """Load and validate timesheet settings (bundled defaults when *path* is None)."""

    settings_path = Path(path) if path else DEFAULT_SETTINGS_PATH
    data = _load_yaml(settings_path)
    try:
        return TimesheetSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"invalid settings in {settings_path}: {exc}") from exc


__all__ = [
    "DEFAULT_SETTINGS_PATH",
    "FormulaKeySettings",
    "MarkSettings",
    "TimesheetSettings",
    "load_settings",
]
