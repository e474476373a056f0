"""Root-finding utilities (bisection and safeguarded Newton–Raphson)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import logging

from curvelib.errors import MaxIterationsExceeded, RootNotBracketed

logger = logging.getLogger(__name__)

Func = Callable[[float], float]

DEFAULT_TOLERANCE = 1e-10
DEFAULT_MAX_ITERATIONS = 100


@dataclass
class RootResult:
    root: float
    iterations: int
    converged: bool
    method: str
    residual: float


def _converged(step: float, x: float, tol: float) -> bool:
    return abs(step) <= tol * max(1.0, abs(x))


def _check_bracket(func: Func, lower: float, upper: float) -> Tuple[float, float]:
    if not lower < upper:
        raise ValueError(f"Bracket lower bound {lower} must be below upper bound {upper}")
    f_lower = func(lower)
    f_upper = func(upper)
    if f_lower * f_upper > 0:
        raise RootNotBracketed((lower, upper), (f_lower, f_upper))
    return f_lower, f_upper


def bisect(
    func: Func,
    lower: float,
    upper: float,
    tol: float = DEFAULT_TOLERANCE,
    max_iter: int = DEFAULT_MAX_ITERATIONS,
) -> RootResult:
    """Plain bisection on a sign-changing bracket."""
    f_lower, f_upper = _check_bracket(func, lower, upper)
    if f_lower == 0.0:
        return RootResult(lower, 0, True, "bisect", 0.0)
    if f_upper == 0.0:
        return RootResult(upper, 0, True, "bisect", 0.0)

    mid, f_mid = lower, f_lower
    for iteration in range(1, max_iter + 1):
        mid = 0.5 * (lower + upper)
        f_mid = func(mid)
        if f_mid == 0.0 or _converged(0.5 * (upper - lower), mid, tol):
            return RootResult(mid, iteration, True, "bisect", f_mid)
        if f_lower * f_mid < 0:
            upper = mid
        else:
            lower, f_lower = mid, f_mid
    raise MaxIterationsExceeded(max_iter, mid, f_mid)


def _numerical_derivative(func: Func, x: float) -> float:
    h = 1e-7 * max(1.0, abs(x))
    return (func(x + h) - func(x - h)) / (2.0 * h)


def newton_with_bisect(
    func: Func,
    lower: float,
    upper: float,
    *,
    derivative: Optional[Func] = None,
    initial_guess: Optional[float] = None,
    tol: float = DEFAULT_TOLERANCE,
    max_iter: int = DEFAULT_MAX_ITERATIONS,
) -> RootResult:
    """Newton-Raphson root finder that falls back to bisection steps.

    A bisection step replaces the Newton step whenever the Newton update
    would leave the current bracket or is not shrinking fast enough, so the
    iterate always stays inside a sign-changing interval.

    Parameters
    ----------
    func:
        Objective function.
    lower, upper:
        Bracket; func must change sign across it.
    derivative:
        Optional analytic derivative; a central difference is used otherwise.
    initial_guess:
        Starting point inside the bracket (defaults to the midpoint).
    tol:
        Relative tolerance on the step size.
    """
    f_lower, f_upper = _check_bracket(func, lower, upper)
    if f_lower == 0.0:
        return RootResult(lower, 0, True, "newton", 0.0)
    if f_upper == 0.0:
        return RootResult(upper, 0, True, "newton", 0.0)

    deriv = derivative or (lambda v: _numerical_derivative(func, v))

    # Orient so that func(neg) < 0 < func(pos).
    neg, pos = (lower, upper) if f_lower < 0 else (upper, lower)

    x = initial_guess if initial_guess is not None and lower < initial_guess < upper else 0.5 * (lower + upper)
    dx_old = abs(upper - lower)
    dx = dx_old
    fx = func(x)
    dfx = deriv(x)

    for iteration in range(1, max_iter + 1):
        out_of_bracket = ((x - pos) * dfx - fx) * ((x - neg) * dfx - fx) > 0
        too_slow = abs(2.0 * fx) > abs(dx_old * dfx)
        if out_of_bracket or too_slow or dfx == 0.0:
            dx_old = dx
            dx = 0.5 * (pos - neg)
            x = neg + dx
            step = "bisect"
        else:
            dx_old = dx
            dx = fx / dfx
            x = x - dx
            step = "newton"
        logger.debug("Solver iter %s (%s): x=%s f=%s", iteration, step, x, fx)

        fx = func(x)
        if fx == 0.0 or _converged(dx, x, tol):
            return RootResult(x, iteration, True, "newton", fx)
        dfx = deriv(x)
        if fx < 0:
            neg = x
        else:
            pos = x

    raise MaxIterationsExceeded(max_iter, x, fx)


def solve(
    func: Func,
    bracket: Tuple[float, float],
    *,
    method: str = "newton",
    tol: float = DEFAULT_TOLERANCE,
    max_iter: int = DEFAULT_MAX_ITERATIONS,
    derivative: Optional[Func] = None,
    initial_guess: Optional[float] = None,
) -> RootResult:
    """Find a root of func inside bracket.

    Raises
    ------
    RootNotBracketed
        If func has the same sign at both bracket ends.
    MaxIterationsExceeded
        If the relative tolerance is not reached within max_iter iterations.
    """
    lower, upper = bracket
    if method == "bisect":
        return bisect(func, lower, upper, tol=tol, max_iter=max_iter)
    if method == "newton":
        return newton_with_bisect(
            func,
            lower,
            upper,
            derivative=derivative,
            initial_guess=initial_guess,
            tol=tol,
            max_iter=max_iter,
        )
    raise ValueError(f"Unknown root-finding method: {method}. Available: bisect, newton")
