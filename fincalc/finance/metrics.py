"""
Closed-form corporate-finance formulas.

Design:
- No iteration here; anything that needs a root finder lives in irr.py / bonds.py.
- NPV is imported from fincalc.finance.irr (singleton), never redefined.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Union

import numpy_financial as npf

from fincalc.errors import FinCalcError, InvalidWeights, NonConvergentGrowth
from .irr import npv

WEIGHT_TOLERANCE = 1e-8


def annuity_pv(rate: float, n: float, pmt: float) -> float:
    """Present value of n level payments in arrears."""
    if rate == 0:
        return pmt * n
    return -float(npf.pv(rate, n, pmt))


def annuity_fv(rate: float, n: float, pmt: float) -> float:
    """Future value of n level payments in arrears."""
    if rate == 0:
        return pmt * n
    return -float(npf.fv(rate, n, pmt, 0))


def payback_period(cashflows: Iterable[float]) -> float:
    """
    Periods until the running total first reaches zero, interpolated
    linearly inside the crossing period. math.inf if it never does.
    """
    cum = 0.0
    for t, cf in enumerate(cashflows):
        cf = float(cf)
        prev = cum
        cum += cf
        if cum >= 0:
            frac = -prev / cf if cf != 0 else 0.0
            return max(0.0, t - 1 + frac)
    return math.inf


def profitability_index(rate: float, cashflows: Iterable[float]) -> float:
    """NPV of cashflows[1:] over the absolute initial outlay."""
    cfs = [float(x) for x in cashflows]
    c0 = cfs[0] if cfs else 0.0
    if c0 == 0:
        raise FinCalcError("profitability index needs a non-zero initial cashflow")
    return npv(rate, cfs[1:]) / abs(c0)


@dataclass(frozen=True)
class WaccInputs:
    we: float   # equity weight
    wd: float   # debt weight
    re: float   # cost of equity
    rd: float   # pre-tax cost of debt
    tax: float  # marginal tax rate


def wacc(inputs: Union[WaccInputs, Mapping[str, Any]]) -> float:
    """we*re + wd*rd*(1 - tax). Weights must sum to 1 (±1e-8)."""
    if not isinstance(inputs, WaccInputs):
        inputs = WaccInputs(**{k: float(inputs[k]) for k in ("we", "wd", "re", "rd", "tax")})
    we, wd = inputs.we, inputs.wd
    if abs(we + wd - 1.0) > WEIGHT_TOLERANCE:
        raise InvalidWeights(f"Weights must sum to 1, got we + wd = {we + wd:.10g}")
    return we * inputs.re + wd * inputs.rd * (1.0 - inputs.tax)


def gordon_growth(d1: float, g: float, r: float) -> float:
    """Gordon growth value D1 / (r - g)."""
    if r <= g:
        raise NonConvergentGrowth(f"Required return must exceed growth (r={r}, g={g})")
    return d1 / (r - g)


ddm_gordon = gordon_growth

__all__ = [
    "WaccInputs",
    "annuity_pv",
    "annuity_fv",
    "payback_period",
    "profitability_index",
    "wacc",
    "gordon_growth",
    "ddm_gordon",
]
