# fincalc/finance/bonds.py
"""
Plain-vanilla bullet bond analytics on a periodic coupon schedule.

Every function here goes through build_schedule() so price, yield,
duration and convexity agree on periods, coupon size and per-period yield.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from ..errors import FinCalcError
from .irr import discounted
from .solver import SolverConfig, find_root

YIELD_BRACKET = (0.000001, 1.0)  # per period
YIELD_CONFIG = SolverConfig(tolerance=1e-8)
YIELD_SEED = 0.05  # annual, divided by freq


@dataclass(frozen=True)
class BondSchedule:
    face: float
    freq: int
    periods: int
    coupon: float        # per period
    period_yield: float  # per period
    cashflows: Tuple[Tuple[int, float], ...]  # (t, amount), t = 1..periods

    def present_values(self, period_yield: float | None = None) -> List[float]:
        y = self.period_yield if period_yield is None else period_yield
        base = 1.0 + y
        return [discounted(cf, base, t) for t, cf in self.cashflows]


def build_schedule(
    face: float,
    coupon_rate: float,
    yield_rate: float,
    years: float,
    freq: int = 1,
) -> BondSchedule:
    """m = round(years*freq) coupons of coupon_rate*face/freq; face repaid with the last."""
    face = float(face)
    freq = int(freq)
    if freq < 1:
        raise FinCalcError(f"coupon frequency must be at least 1 per year, got {freq}")
    m = int(round(float(years) * freq))
    if m < 1:
        raise FinCalcError(
            f"bond must have at least one coupon period: years={years}, freq={freq}"
        )
    c = float(coupon_rate) * face / freq
    flows = tuple((t, c + face if t == m else c) for t in range(1, m + 1))
    return BondSchedule(
        face=face,
        freq=freq,
        periods=m,
        coupon=c,
        period_yield=float(yield_rate) / freq,
        cashflows=flows,
    )


def bond_price(face, coupon_rate, yield_rate, years, freq=1) -> float:
    return sum(build_schedule(face, coupon_rate, yield_rate, years, freq).present_values())


def bond_yield(face, coupon_rate, price, years, freq=1) -> float:
    """
    Annualised yield to maturity for a given price.

    Solves on the per-period yield (seed 0.05/freq, bisection bracket
    [0.000001, 1.0]) and returns it multiplied by freq.
    """
    sched = build_schedule(face, coupon_rate, 0.0, years, freq)
    target = float(price)

    def f(y: float) -> float:
        return sum(sched.present_values(y)) - target

    y = find_root(f, YIELD_SEED / sched.freq, YIELD_BRACKET, config=YIELD_CONFIG)
    return y * sched.freq


def macaulay_duration(face, coupon_rate, yield_rate, years, freq=1) -> float:
    """PV-weighted average time to cashflow, in years."""
    sched = build_schedule(face, coupon_rate, yield_rate, years, freq)
    pvs = sched.present_values()
    weighted = sum((t / sched.freq) * pv for (t, _), pv in zip(sched.cashflows, pvs))
    return weighted / sum(pvs)


def modified_duration(face, coupon_rate, yield_rate, years, freq=1) -> float:
    mac = macaulay_duration(face, coupon_rate, yield_rate, years, freq)
    return mac / (1.0 + float(yield_rate) / int(freq))


def convexity(face, coupon_rate, yield_rate, years, freq=1) -> float:
    """Annualised convexity: sum(cf*t*(t+1)/(1+y)^t) / (P*(1+y)^2*freq^2)."""
    sched = build_schedule(face, coupon_rate, yield_rate, years, freq)
    base = 1.0 + sched.period_yield
    total = sum(discounted(cf * t * (t + 1), base, t) for t, cf in sched.cashflows)
    price = sum(sched.present_values())
    return total / (price * base ** 2 * sched.freq ** 2)


__all__ = [
    "BondSchedule",
    "build_schedule",
    "bond_price",
    "bond_yield",
    "macaulay_duration",
    "modified_duration",
    "convexity",
]
