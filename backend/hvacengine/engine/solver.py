"""
Bracketing root finder for the inverse process problems.

Wraps scipy.optimize.brentq with the engine's contract:

* the residual must change sign over [lower, upper]; this is checked before
  iterating and reported as BracketError;
* a bracket end whose residual is already within tolerance is returned as is;
* running out of iterations, or hitting a non-finite residual, raises
  ConvergenceError. No best-guess value is ever returned.

The function holds no state between calls.
"""

import logging
import math
from typing import Callable

from scipy.optimize import brentq

from hvacengine.config import SOLVER_XTOL, SOLVER_RTOL, SOLVER_MAX_ITER, RESIDUAL_TOLERANCE
from hvacengine.exceptions import BracketError, ConvergenceError

logger = logging.getLogger(__name__)


def _checked(residual: Callable[[float], float], name: str) -> Callable[[float], float]:
    def wrapped(x: float) -> float:
        value = residual(x)
        if not math.isfinite(value):
            raise ConvergenceError(f"{name}: residual is not finite at x={x} ({value})")
        return value

    return wrapped


def solve(
    residual: Callable[[float], float],
    lower: float,
    upper: float,
    *,
    xtol: float = SOLVER_XTOL,
    rtol: float = SOLVER_RTOL,
    max_iter: int = SOLVER_MAX_ITER,
    residual_tolerance: float = RESIDUAL_TOLERANCE,
    name: str = "solver",
) -> float:
    """
    Find x in [lower, upper] with residual(x) == 0.

    Args:
        residual: Continuous function of one variable.
        lower, upper: Bracket ends (order does not matter).
        xtol, rtol: Absolute and relative tolerance on x.
        max_iter: Maximum number of iterations.
        residual_tolerance: |residual| at a bracket end treated as an exact root.
        name: Label used in log records and error messages.

    Returns:
        The root.
    """
    f = _checked(residual, name)
    if lower > upper:
        lower, upper = upper, lower

    f_lower = f(lower)
    if abs(f_lower) <= residual_tolerance:
        logger.debug("%s: lower bracket end %.6g is a root", name, lower)
        return lower
    f_upper = f(upper)
    if abs(f_upper) <= residual_tolerance:
        logger.debug("%s: upper bracket end %.6g is a root", name, upper)
        return upper

    if f_lower * f_upper > 0:
        raise BracketError(
            f"{name}: residual does not change sign over [{lower}, {upper}] "
            f"(f={f_lower:.6g}, {f_upper:.6g})"
        )

    root, report = brentq(
        f, lower, upper,
        xtol=xtol, rtol=rtol, maxiter=max_iter,
        full_output=True, disp=False,
    )
    if not report.converged:
        raise ConvergenceError(
            f"{name}: no convergence after {report.iterations} iterations "
            f"over [{lower}, {upper}] ({report.flag})"
        )

    logger.debug(
        "%s: root %.8g after %d iterations over [%.6g, %.6g]",
        name, root, report.iterations, lower, upper,
    )
    return root
