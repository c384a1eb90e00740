"""Finance core: day-count, root finder, cashflow PV/IRR, bonds, closed forms."""
from .bonds import bond_price, bond_yield, convexity, macaulay_duration, modified_duration
from .daycount import SUPPORTED_BASES, year_fraction
from .irr import irr, npv, xirr, xnpv
from .metrics import (
    WaccInputs,
    annuity_fv,
    annuity_pv,
    ddm_gordon,
    gordon_growth,
    payback_period,
    profitability_index,
    wacc,
)

__all__ = [
    "SUPPORTED_BASES",
    "year_fraction",
    "npv",
    "irr",
    "xnpv",
    "xirr",
    "bond_price",
    "bond_yield",
    "macaulay_duration",
    "modified_duration",
    "convexity",
    "WaccInputs",
    "annuity_pv",
    "annuity_fv",
    "payback_period",
    "profitability_index",
    "wacc",
    "gordon_growth",
    "ddm_gordon",
]
