# fincalc/finance/daycount.py
"""
Day-count conventions used by the date-weighted cashflow functions.

Supported bases:
    ACT/365  actual days / 365
    ACT/360  actual days / 360
    30E/360  Eurobond 30/360, both day-of-month values capped at 30
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Union

from fincalc.errors import InvalidDate, UnsupportedBasis

ACT_365 = "ACT/365"
ACT_360 = "ACT/360"
THIRTY_E_360 = "30E/360"

SUPPORTED_BASES = (ACT_365, ACT_360, THIRTY_E_360)
DEFAULT_BASIS = ACT_365

DateLike = Union[str, date, datetime]


def to_date(value: DateLike) -> date:
    """Coerce *value* to a calendar date (ISO-8601 strings accepted)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidDate(f"Invalid date: {value!r}")
    try:
        return datetime.fromisoformat(value.strip()).date()
    except ValueError:
        raise InvalidDate(f"Invalid date: {value!r}") from None


def normalize_basis(basis: str) -> str:
    tag = str(basis).strip().upper()
    if tag not in SUPPORTED_BASES:
        raise UnsupportedBasis(
            f"Unsupported basis: {basis!r} (expected one of {', '.join(SUPPORTED_BASES)})"
        )
    return tag


def year_fraction(start: DateLike, end: DateLike, basis: str = DEFAULT_BASIS) -> float:
    """Return the year fraction between *start* and *end* under *basis*."""
    d0 = to_date(start)
    d1 = to_date(end)
    tag = normalize_basis(basis)

    if tag == ACT_365:
        return (d1 - d0).days / 365.0
    if tag == ACT_360:
        return (d1 - d0).days / 360.0

    # 30E/360
    dd0 = min(d0.day, 30)
    dd1 = min(d1.day, 30)
    return (360 * (d1.year - d0.year) + 30 * (d1.month - d0.month) + (dd1 - dd0)) / 360.0


__all__ = [
    "ACT_365",
    "ACT_360",
    "THIRTY_E_360",
    "SUPPORTED_BASES",
    "DEFAULT_BASIS",
    "to_date",
    "normalize_basis",
    "year_fraction",
]
