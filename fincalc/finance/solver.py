# fincalc/finance/solver.py
"""
Scalar root finder shared by IRR, XIRR and bond yield.

Two phases:
  1) Newton's method from the caller's seed (fast on well-behaved payoffs).
  2) Fixed-bracket bisection when Newton gives up or runs out of iterations.

Bisection returns an approximate root: the bracket midpoint once the
iteration budget is spent, unless |f(mid)| drops below tolerance first.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from fincalc.errors import RootNotBracketed

logger = logging.getLogger(__name__)

RATE_FLOOR = -0.999999
DIFF_STEP = 1e-6

Payoff = Callable[[float], float]


@dataclass(frozen=True)
class SolverConfig:
    """Convergence settings for one root-finding call."""
    tolerance: float = 1e-8
    newton_iterations: int = 50
    bisection_iterations: int = 200
    floor: float = RATE_FLOOR


def central_difference(f: Payoff, h: float = DIFF_STEP) -> Payoff:
    """Derivative of *f* by symmetric finite difference with step *h*."""
    def df(x: float) -> float:
        return (f(x + h) - f(x - h)) / (2.0 * h)
    return df


def newton(
    f: Payoff,
    fprime: Payoff,
    guess: float,
    config: SolverConfig,
) -> Optional[float]:
    """
    Newton phase. Returns the root, or None when the phase is abandoned
    (flat/non-finite derivative, step leaving the domain, budget exhausted).
    """
    x = float(guess)
    if not math.isfinite(x) or x <= config.floor:
        logger.debug("newton: seed %r outside the search domain, skipping", guess)
        return None

    for i in range(config.newton_iterations):
        fx = f(x)
        dfx = fprime(x)
        if abs(fx) < config.tolerance:
            logger.debug("newton: converged to %.12g after %d iteration(s)", x, i)
            return x
        if dfx == 0 or not math.isfinite(dfx):
            logger.debug("newton: derivative %r at x=%.12g, giving up", dfx, x)
            return None
        x_next = x - fx / dfx
        if not math.isfinite(x_next) or x_next <= config.floor:
            logger.debug("newton: step to %r leaves the domain, giving up", x_next)
            return None
        x = x_next

    logger.debug("newton: no convergence in %d iterations", config.newton_iterations)
    return None


def bisect(f: Payoff, bracket: Tuple[float, float], config: SolverConfig) -> float:
    """Fixed-budget bisection on *bracket*. Raises RootNotBracketed on no sign change."""
    lo, hi = float(bracket[0]), float(bracket[1])
    f_lo, f_hi = f(lo), f(hi)
    if f_lo * f_hi > 0:
        raise RootNotBracketed(
            f"no sign change on [{lo}, {hi}]: f(lo)={f_lo:.6g}, f(hi)={f_hi:.6g}"
        )

    for _ in range(config.bisection_iterations):
        mid = (lo + hi) / 2.0
        f_mid = f(mid)
        if abs(f_mid) < config.tolerance:
            return mid
        # keep the half where the sign changes
        if f_lo * f_mid <= 0:
            hi, f_hi = mid, f_mid
        else:
            lo, f_lo = mid, f_mid
    return (lo + hi) / 2.0


def find_root(
    f: Payoff,
    guess: float,
    bracket: Tuple[float, float],
    *,
    fprime: Optional[Payoff] = None,
    config: Optional[SolverConfig] = None,
) -> float:
    """
    Solve f(x) = 0: Newton from *guess*, then bisection on *bracket*.

    fprime defaults to a central difference of *f*.
    """
    cfg = config or SolverConfig()
    deriv = fprime or central_difference(f)

    root = newton(f, deriv, guess, cfg)
    if root is not None:
        return root

    logger.debug("falling back to bisection on [%s, %s]", bracket[0], bracket[1])
    return bisect(f, bracket, cfg)


__all__ = [
    "RATE_FLOOR",
    "DIFF_STEP",
    "SolverConfig",
    "central_difference",
    "newton",
    "bisect",
    "find_root",
]
