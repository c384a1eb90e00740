"""fincalc: corporate-finance and fixed-income formulas (library + CLI)."""
from .errors import (
    FinCalcError,
    InputError,
    InvalidDate,
    InvalidRate,
    InvalidWeights,
    LengthMismatch,
    NonConvergentGrowth,
    RootNotBracketed,
    UnsupportedBasis,
)
from .finance import *  # noqa: F401,F403
from .finance import __all__ as _finance_all

__version__ = "0.2.0"

__all__ = [
    "FinCalcError",
    "InputError",
    "InvalidDate",
    "InvalidRate",
    "InvalidWeights",
    "LengthMismatch",
    "NonConvergentGrowth",
    "RootNotBracketed",
    "UnsupportedBasis",
    *_finance_all,
]
