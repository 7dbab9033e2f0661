"""Random employee records for demos and smoke runs."""

from __future__ import annotations

import random
from datetime import date
from typing import Sequence

from .calendar import days_in_month
from .models import Employee

DEFAULT_SYMBOLS: tuple[str, ...] = ("W", "8", "P", "W", "A", "L")

DEFAULT_POSITIONS: tuple[str, ...] = (
    "Software Engineer",
    "Backend Developer",
    "Frontend Developer",
    "DevOps Engineer",
    "QA Engineer",
    "Project Manager",
)

_FIRST_NAMES = (
    "Atageldi", "Merdan", "Aynur", "Kerim", "Jennet", "Serdar",
    "Ogulgerek", "Maksat", "Gulalek", "Dowran", "Leyli", "Batyr",
)
_LAST_NAMES = (
    "Orazow", "Annayew", "Saparowa", "Muhammedow", "Orazowa", "Berdiyew",
    "Atayewa", "Gurbansahedow", "Bayramowa", "Meredow", "Hojayewa", "Nurmuhammedow",
)


def generate_employees(
    count: int,
    month: date | None = None,
    *,
    symbols: Sequence[str] = DEFAULT_SYMBOLS,
    positions: Sequence[str] = DEFAULT_POSITIONS,
    seed: int | None = None,
) -> list[Employee]:
    """Create *count* employees whose attendance covers every day of *month*."""

    if count < 0:
        raise ValueError("employee count must be >= 0")
    if not symbols:
        raise ValueError("at least one attendance symbol is required")
    rng = random.Random(seed)
    days = days_in_month(month)
    employees: list[Employee] = []
    for idx in range(1, count + 1):
        employees.append(
            Employee(
                id=idx,
                full_name=f"{rng.choice(_FIRST_NAMES)} {rng.choice(_LAST_NAMES)}",
                table_id=f"{idx:03d}",
                job_position=rng.choice(positions) if positions else "",
                attendance=tuple(rng.choice(symbols) for _ in range(days)),
            )
        )
    return employees
