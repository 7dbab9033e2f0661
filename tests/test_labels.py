"""Tests for plain text label substitution."""

from __future__ import annotations

from datetime import date

import pytest
from openpyxl import Workbook

from rastexcel.template.handlers.labels import LabelHandler, month_labels
from rastexcel.template.processor import Processor
from rastexcel.template.registry import Registry


def test_month_labels() -> None:
    assert month_labels(date(2024, 2, 10)) == {
        "{{year}}": 2024,
        "{{month}}": "February",
        "{{month_number}}": 2,
        "{{days_in_month}}": 29,
    }


def test_month_labels_custom_names() -> None:
    names = [f"M{idx}" for idx in range(1, 13)]
    assert month_labels(date(2025, 11, 1), names)["{{month}}"] == "M11"
    with pytest.raises(ValueError):
        month_labels(date(2025, 11, 1), names[:3])


def test_all_keys_replaced_in_one_dispatch() -> None:
    wb = Workbook()
    ws = wb.active
    ws["A1"] = "Report {{month}} {{year}}"
    ws["A2"] = "{{year}}"
    ws["A3"] = "Shift {{working_time}}"
    handler = LabelHandler(month_labels(date(2024, 2, 1))).add("{{working_time}}", "08:00-17:00")
    registry = Registry()
    handler.register(registry)

    assert Processor(registry).process_workbook(wb) == 3

    assert ws["A1"].value == "Report February 2024"
    assert ws["A2"].value == 2024
    assert ws["A3"].value == "Shift 08:00-17:00"
    assert "{{working_time}}" in registry.patterns


def test_empty_key_rejected() -> None:
    with pytest.raises(ValueError):
        LabelHandler().add("", "x")
