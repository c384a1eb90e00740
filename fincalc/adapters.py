# fincalc/adapters.py
"""
Command table: maps a CLI command name plus a flat parameter mapping
(flags merged over file inputs) onto one core finance call.

No math here; every handler only pulls validated arguments out of
the mapping and returns the scalar the core computes.
"""
from __future__ import annotations

from importlib import import_module
from typing import Any, Callable, Dict, Mapping

from .config import default_basis
from .errors import InputError
from .finance import bonds, metrics
from .validate import optional_text, require_number, require_numbers, split_list

# fincalc.finance re-exports the irr() function, shadowing the submodule attribute
irr_mod = import_module(".finance.irr", __package__)

Params = Mapping[str, Any]
Handler = Callable[[Params], float]


# ------------------------------
# Small helpers (no policy here)
# ------------------------------
def _basis(p: Params) -> str:
    return optional_text(p, "basis") or default_basis()


def _dates(p: Params) -> list:
    dates = split_list(p.get("dates"))
    if not dates:
        raise InputError("missing required parameter: --dates")
    return dates


def _freq(p: Params) -> int:
    # 0 / missing means annual
    freq = require_number(p, "freq", default=1) or 1
    if freq < 0 or freq != int(freq):
        raise InputError(f"--freq must be a positive whole number, got {freq}")
    return int(freq)


def _bond_args(p: Params, third: str) -> tuple:
    return (
        require_number(p, "face"),
        require_number(p, "coupon"),
        require_number(p, third),
        require_number(p, "n"),
        _freq(p),
    )


# ------------------------------
# Handlers
# ------------------------------
def _npv(p: Params) -> float:
    return irr_mod.npv(require_number(p, "rate"), require_numbers(p))


def _irr(p: Params) -> float:
    return irr_mod.irr(require_numbers(p), require_number(p, "guess", default=0.1))


def _xnpv(p: Params) -> float:
    return irr_mod.xnpv(require_number(p, "rate"), require_numbers(p), _dates(p), _basis(p))


def _xirr(p: Params) -> float:
    return irr_mod.xirr(
        require_numbers(p), _dates(p), require_number(p, "guess", default=0.1), _basis(p)
    )


def _payback(p: Params) -> float:
    return metrics.payback_period(require_numbers(p))


def _pi(p: Params) -> float:
    return metrics.profitability_index(require_number(p, "rate"), require_numbers(p))


def _annuity_pv(p: Params) -> float:
    return metrics.annuity_pv(
        require_number(p, "rate"), require_number(p, "n"), require_number(p, "pmt")
    )


def _annuity_fv(p: Params) -> float:
    return metrics.annuity_fv(
        require_number(p, "rate"), require_number(p, "n"), require_number(p, "pmt")
    )


def _bond_price(p: Params) -> float:
    return bonds.bond_price(*_bond_args(p, "yield"))


def _bond_yield(p: Params) -> float:
    return bonds.bond_yield(*_bond_args(p, "price"))


def _duration(p: Params) -> float:
    return bonds.macaulay_duration(*_bond_args(p, "yield"))


def _modified_duration(p: Params) -> float:
    return bonds.modified_duration(*_bond_args(p, "yield"))


def _convexity(p: Params) -> float:
    return bonds.convexity(*_bond_args(p, "yield"))


def _wacc(p: Params) -> float:
    inputs = metrics.WaccInputs(
        we=require_number(p, "we"),
        wd=require_number(p, "wd"),
        re=require_number(p, "re"),
        rd=require_number(p, "rd"),
        tax=require_number(p, "tax"),
    )
    return metrics.wacc(inputs)


def _ddm_gordon(p: Params) -> float:
    return metrics.gordon_growth(
        require_number(p, "d1"), require_number(p, "g"), require_number(p, "r")
    )


COMMANDS: Dict[str, Handler] = {
    "npv": _npv,
    "irr": _irr,
    "xnpv": _xnpv,
    "xirr": _xirr,
    "payback": _payback,
    "pi": _pi,
    "annuity-pv": _annuity_pv,
    "annuity-fv": _annuity_fv,
    "bond-price": _bond_price,
    "bond-yield": _bond_yield,
    "duration": _duration,
    "modified-duration": _modified_duration,
    "convexity": _convexity,
    "wacc": _wacc,
    "ddm-gordon": _ddm_gordon,
}


# ------------------------------
# Public adapter
# ------------------------------
def run_command(command: str, params: Params) -> float:
    """Dispatch *command* with *params*; raises InputError for unknown names."""
    handler = COMMANDS.get(command)
    if handler is None:
        raise InputError(f"unknown command: {command!r}")
    return handler(params)


__all__ = ["COMMANDS", "run_command"]
