# fincalc/finance/irr.py
"""
Discounted cashflow and internal rate of return.

This is the single home of npv/irr (periodic) and xnpv/xirr (date-weighted).
Everything else in the package imports them from here.
"""

from __future__ import annotations

import math
from typing import Iterable, List, Sequence

from ..errors import InvalidRate, LengthMismatch
from .daycount import DEFAULT_BASIS, DateLike, normalize_basis, year_fraction
from .solver import SolverConfig, find_root

IRR_BRACKET = (-0.9, 10.0)
IRR_CONFIG = SolverConfig(tolerance=1e-10)
XIRR_CONFIG = SolverConfig(tolerance=1e-8)


def _check_rate(rate: float) -> float:
    r = float(rate)
    if not math.isfinite(r):
        raise InvalidRate(f"Invalid rate: {rate!r}")
    return r


def discounted(cf: float, base: float, t: float) -> float:
    # IEEE semantics: an overflowed factor vanishes the term, a zero one blows it up
    try:
        factor = base ** t
    except OverflowError:
        return 0.0
    if factor == 0.0:
        if cf == 0.0:
            return 0.0
        return math.copysign(math.inf, cf) * math.copysign(1.0, factor)
    return cf / factor


def _pv_at_times(rate: float, cashflows: Sequence[float], times: Sequence[float]) -> float:
    base = 1.0 + rate
    total = 0.0
    for cf, t in zip(cashflows, times):
        total += discounted(cf, base, t)
    return total


# ---------- NPV ----------
def npv(rate: float, cashflows: Iterable[float]) -> float:
    """
    Classic discounted cash flow:
        NPV(r) = sum_{t=0..N-1} CF[t] / (1+r)^t
    """
    r = _check_rate(rate)
    base = 1.0 + r
    total = 0.0
    for t, cf in enumerate(cashflows):
        total += discounted(float(cf), base, t)
    return total


# ---------- IRR (periodic) ----------
def irr(cashflows: Iterable[float], guess: float = 0.1) -> float:
    """
    Periodic IRR: the rate r with NPV(r) = 0.

    Newton on the closed-form derivative, then bisection on [-0.9, 10.0].
    Raises RootNotBracketed when NPV keeps one sign across that range.
    Returns a decimal rate (e.g., 0.18 = 18%).
    """
    cfs = [float(x) for x in cashflows]

    def f(r: float) -> float:
        base = 1.0 + r
        return sum(discounted(cf, base, t) for t, cf in enumerate(cfs))

    def df(r: float) -> float:
        base = 1.0 + r
        return sum(discounted(-t * cf, base, t + 1) for t, cf in enumerate(cfs) if t)

    return find_root(f, guess, IRR_BRACKET, fprime=df, config=IRR_CONFIG)


# ---------- XNPV / XIRR (dated) ----------
def _year_fractions(
    cashflows: Sequence[float], dates: Sequence[DateLike], basis: str
) -> List[float]:
    if len(cashflows) != len(dates):
        raise LengthMismatch(
            f"cashflows and dates length mismatch: {len(cashflows)} != {len(dates)}"
        )
    if not dates:
        return []
    t0 = dates[0]
    return [year_fraction(t0, d, basis) for d in dates]


def xnpv(
    rate: float,
    cashflows: Sequence[float],
    dates: Sequence[DateLike],
    basis: str = DEFAULT_BASIS,
) -> float:
    """
    Date-weighted NPV; each CF[i] is discounted by (1+r)^yf(dates[0], dates[i]).
    """
    r = _check_rate(rate)
    if r <= -1.0:
        raise InvalidRate(f"Invalid rate: {rate!r} (must be greater than -1 for fractional periods)")
    cfs = [float(x) for x in cashflows]
    times = _year_fractions(cfs, list(dates), normalize_basis(basis))
    return _pv_at_times(r, cfs, times)


def xirr(
    cashflows: Sequence[float],
    dates: Sequence[DateLike],
    guess: float = 0.1,
    basis: str = DEFAULT_BASIS,
) -> float:
    """
    Date-weighted IRR. Newton on a central-difference derivative, then
    bisection on [-0.9, 10.0]; RootNotBracketed if XNPV never changes sign.
    """
    cfs = [float(x) for x in cashflows]
    times = _year_fractions(cfs, list(dates), normalize_basis(basis))

    def f(r: float) -> float:
        return _pv_at_times(r, cfs, times)

    return find_root(f, guess, IRR_BRACKET, config=XIRR_CONFIG)


__all__ = ["IRR_BRACKET", "discounted", "npv", "irr", "xnpv", "xirr"]
