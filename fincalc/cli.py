# fincalc/cli.py
from __future__ import annotations

import argparse
import json
import logging
import math
import sys
from typing import Any, Dict, List

from .adapters import COMMANDS, run_command
from .config import load_inputs, log_level
from .errors import FinCalcError
from .finance.daycount import SUPPORTED_BASES

logger = logging.getLogger(__name__)

EXAMPLES = """\
examples:
  fincalc npv --rate 0.1 --cashflows -100,50,60
  fincalc irr --cashflows -100,40,40,40
  fincalc xirr --cashflows -100,40,40,40 --dates 2025-01-01,2025-04-01,2025-07-01,2025-10-01 --basis ACT/365
  fincalc payback --cashflows -100,30,40,50
  fincalc pi --rate 0.1 --cashflows -100,50,60
  fincalc annuity-pv --rate 0.08 --n 5 --pmt 100
  fincalc bond-price --face 1000 --coupon 0.05 --yield 0.06 --n 10 --freq 2
  fincalc bond-yield --face 1000 --coupon 0.05 --price 950 --n 10 --freq 2
  fincalc wacc --we 0.6 --wd 0.4 --re 0.12 --rd 0.07 --tax 0.21
  fincalc ddm-gordon --d1 2 --g 0.04 --r 0.09
"""

# argparse dest -> parameter name used by the adapters / input files
_PARAM_FLAGS = {
    "rate": "rate",
    "cashflows": "cashflows",
    "dates": "dates",
    "guess": "guess",
    "basis": "basis",
    "n": "n",
    "pmt": "pmt",
    "face": "face",
    "coupon": "coupon",
    "yield_rate": "yield",
    "price": "price",
    "freq": "freq",
    "we": "we",
    "wd": "wd",
    "re": "re",
    "rd": "rd",
    "tax": "tax",
    "d1": "d1",
    "g": "g",
    "r": "r",
}

_LIST_FLAGS = ("--cashflows", "--dates")


def _join_list_values(argv: List[str]) -> List[str]:
    # "--cashflows -100,50" would read -100,50 as an option; glue it to the flag
    out: List[str] = []
    i = 0
    while i < len(argv):
        a = argv[i]
        if a in _LIST_FLAGS and i + 1 < len(argv) and not argv[i + 1].startswith("--"):
            out.append(f"{a}={argv[i + 1]}")
            i += 2
            continue
        out.append(a)
        i += 1
    return out


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="fincalc",
        description="Finance formulas: NPV/IRR, dated XNPV/XIRR, bonds, WACC, DDM.",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    p.add_argument("command", nargs="?", choices=sorted(COMMANDS), help="Formula to evaluate.")

    g = p.add_argument_group("inputs")
    g.add_argument("--rate", help="Discount rate as a decimal (0.1 = 10%%).")
    g.add_argument("--cashflows", help="Comma-separated cashflows, t=0 first.")
    g.add_argument("--dates", help="Comma-separated ISO dates paired with --cashflows.")
    g.add_argument("--guess", help="Seed rate for irr/xirr (default: 0.1).")
    g.add_argument(
        "--basis",
        type=str.upper,
        choices=SUPPORTED_BASES,
        help="Day-count basis for xnpv/xirr (default: ACT/365 or $FINCALC_BASIS).",
    )
    g.add_argument("--n", help="Number of periods (annuities) or years to maturity (bonds).")
    g.add_argument("--pmt", help="Level payment per period.")
    g.add_argument("--face", help="Bond face value.")
    g.add_argument("--coupon", help="Annual coupon rate.")
    g.add_argument("--yield", dest="yield_rate", help="Annual yield to maturity.")
    g.add_argument("--price", help="Bond price (bond-yield).")
    g.add_argument("--freq", help="Coupons per year (default: 1).")
    g.add_argument("--we", help="Equity weight.")
    g.add_argument("--wd", help="Debt weight.")
    g.add_argument("--re", help="Cost of equity.")
    g.add_argument("--rd", help="Pre-tax cost of debt.")
    g.add_argument("--tax", help="Marginal tax rate.")
    g.add_argument("--d1", help="Next-period dividend.")
    g.add_argument("--g", help="Dividend growth rate.")
    g.add_argument("--r", help="Required return.")

    o = p.add_argument_group("global options")
    o.add_argument("--from", dest="source", help="Load inputs from a .json, .yaml or .csv file.")
    o.add_argument("--round", dest="round_to", type=int, help="Round numeric output to N decimals.")
    o.add_argument(
        "--format",
        dest="fmt",
        default="auto",
        choices=["auto", "json", "number"],
        help="Output format (default: auto).",
    )
    o.add_argument("--verbose", "-v", action="store_true", help="Log solver steps to stderr.")
    return p


def parse_args(argv: List[str] | None) -> argparse.Namespace:
    raw = list(sys.argv[1:] if argv is None else argv)
    return build_parser().parse_args(_join_list_values(raw))


def collect_params(ns: argparse.Namespace) -> Dict[str, Any]:
    """File inputs first, explicit flags on top."""
    params: Dict[str, Any] = load_inputs(ns.source) if ns.source else {}
    for dest, key in _PARAM_FLAGS.items():
        val = getattr(ns, dest, None)
        if val is not None:
            params[key] = val
    return params


def render(value: Any, *, round_to: int | None = None, fmt: str = "auto") -> str:
    if round_to is not None and isinstance(value, float) and math.isfinite(value):
        value = round(value, round_to)
    if fmt == "json" or not isinstance(value, (int, float)):
        return json.dumps(value, indent=2)
    return str(value)


def main(argv: List[str] | None = None) -> int:
    ns = parse_args(argv)
    logging.basicConfig(
        level=log_level(ns.verbose),
        format="%(asctime)s %(levelname)s: %(message)s",
    )

    if not ns.command:
        build_parser().print_help(sys.stderr)
        return 2

    try:
        params = collect_params(ns)
        result = run_command(ns.command, params)
    except FinCalcError as e:
        logger.debug("%s failed", ns.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(render(result, round_to=ns.round_to, fmt=ns.fmt))
    return 0


__all__ = ["build_parser", "parse_args", "collect_params", "render", "main"]
