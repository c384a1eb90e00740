# fincalc/errors.py
"""
Error kinds raised by the finance core and the CLI glue.

All of them derive from ValueError so generic callers can still catch them,
while CLI code catches FinCalcError to report a clean message.
"""

from __future__ import annotations


class FinCalcError(ValueError):
    """Base class for every domain failure raised by fincalc."""


class InvalidRate(FinCalcError):
    """Discount rate is NaN or infinite."""


class InvalidDate(FinCalcError):
    """A value could not be read as a calendar date."""


class UnsupportedBasis(FinCalcError):
    """Day-count basis tag is not one of the supported conventions."""


class LengthMismatch(FinCalcError):
    """Cashflow and date sequences differ in length."""


class RootNotBracketed(FinCalcError):
    """Payoff has the same sign at both ends of the search bracket."""


class InvalidWeights(FinCalcError):
    """Capital-structure weights do not sum to one."""


class NonConvergentGrowth(FinCalcError):
    """Gordon growth model with required return <= growth rate."""


class InputError(FinCalcError):
    """Raw CLI or file input could not be turned into model arguments."""


__all__ = [
    "FinCalcError",
    "InvalidRate",
    "InvalidDate",
    "UnsupportedBasis",
    "LengthMismatch",
    "RootNotBracketed",
    "InvalidWeights",
    "NonConvergentGrowth",
    "InputError",
]
