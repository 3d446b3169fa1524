"""
Public Holiday Calendar

Colombian public holidays for a given year. Three kinds:
- Fixed dates, never moved
- Easter-relative dates, some of them moved to the following Monday
- Named dates moved to the following Monday unless already on one

Pure functions, cached per year.
"""

from __future__ import annotations

from datetime import date, timedelta
from functools import lru_cache

MIN_YEAR = 1583
MAX_YEAR = 9999

MONDAY = 0
SUNDAY = 6

FIXED_HOLIDAYS = (
    (1, 1, "Año Nuevo"),
    (5, 1, "Día del Trabajo"),
    (7, 20, "Día de la Independencia"),
    (8, 7, "Batalla de Boyacá"),
    (12, 8, "Inmaculada Concepción"),
    (12, 25, "Navidad"),
)

# Offsets from Easter Sunday; True means the date moves to the following Monday
EASTER_HOLIDAYS = (
    (-3, False, "Jueves Santo"),
    (-2, False, "Viernes Santo"),
    (39, True, "Ascensión del Señor"),
    (60, True, "Corpus Christi"),
    (68, True, "Sagrado Corazón"),
)

MONDAY_HOLIDAYS = (
    (1, 6, "Reyes Magos"),
    (3, 19, "San José"),
    (6, 29, "San Pedro y San Pablo"),
    (8, 15, "Asunción de la Virgen"),
    (10, 12, "Día de la Raza"),
    (11, 1, "Todos los Santos"),
    (11, 11, "Independencia de Cartagena"),
)


def _check_year(year: int) -> None:
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise ValueError(f"Year {year} is outside the supported range {MIN_YEAR}-{MAX_YEAR}")


def easter_sunday(year: int) -> date:
    """Gregorian Easter Sunday (Meeus/Jones/Butcher)."""
    _check_year(year)
    a = year % 19
    b, c = divmod(year, 100)
    d, e = divmod(b, 4)
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i, k = divmod(c, 4)
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month, day = divmod(h + l - 7 * m + 114, 31)
    return date(year, month, day + 1)


def move_to_monday(day: date) -> date:
    """Observed-holiday rule: Monday stays, anything else moves to the next Monday."""
    weekday = day.weekday()
    if weekday == MONDAY:
        return day
    if weekday == SUNDAY:
        return day + timedelta(days=1)
    return day + timedelta(days=7 - weekday)


def named_holidays(year: int) -> list[tuple[date, str]]:
    """Every holiday of ``year`` with its name, sorted by date."""
    _check_year(year)
    easter = easter_sunday(year)

    entries = [(date(year, month, day), name) for month, day, name in FIXED_HOLIDAYS]
    for offset, moved, name in EASTER_HOLIDAYS:
        day = easter + timedelta(days=offset)
        entries.append((move_to_monday(day) if moved else day, name))
    for month, day, name in MONDAY_HOLIDAYS:
        entries.append((move_to_monday(date(year, month, day)), name))

    return sorted(entries)


@lru_cache(maxsize=64)
def holidays_for_year(year: int) -> frozenset[date]:
    """Set of public holiday dates in ``year``."""
    return frozenset(day for day, _ in named_holidays(year))


def is_holiday(day: date) -> bool:
    return day in holidays_for_year(day.year)
