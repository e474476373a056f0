"""
Error taxonomy shared by every curvelib component.

All failures are raised as exceptions; no operation returns a best-guess
value when it cannot produce a correct one.
"""

from __future__ import annotations

from datetime import date
from typing import Optional, Tuple


class CurveLibError(Exception):
    """Base class for all curvelib errors."""

    pass


class InvalidRange(CurveLibError, ValueError):
    """Raised when an interval has its end before (or at) its start."""

    def __init__(self, start, end, message: Optional[str] = None):
        self.start = start
        self.end = end
        super().__init__(message or f"Invalid range: end {end} precedes start {start}")


class DateBeforeReference(CurveLibError, ValueError):
    """Raised when a curve is queried before its reference date."""

    def __init__(self, query_date: date, reference_date: date):
        self.query_date = query_date
        self.reference_date = reference_date
        super().__init__(
            f"Date {query_date} is before curve reference date {reference_date}"
        )


class UnsortedQuotes(CurveLibError, ValueError):
    """Raised when bootstrap quotes are not in strictly increasing maturity order."""

    def __init__(self, index: int, previous: date, current: date):
        self.index = index
        self.previous = previous
        self.current = current
        super().__init__(
            f"Quotes must be sorted by strictly increasing maturity: "
            f"quote {index} matures {current}, previous quote matures {previous}"
        )


class ExtrapolationError(CurveLibError, ValueError):
    """Raised when an interpolator is evaluated outside its knot range."""

    def __init__(self, x: float, x_min: float, x_max: float):
        self.x = x
        self.x_min = x_min
        self.x_max = x_max
        super().__init__(
            f"x={x:.10g} is outside the interpolation range "
            f"[{x_min:.10g}, {x_max:.10g}] and extrapolation is disabled"
        )


class InsufficientPointsError(CurveLibError, ValueError):
    """Raised when too few knots are given to build an interpolator."""

    def __init__(self, count: int, required: int):
        self.count = count
        self.required = required
        super().__init__(
            f"{count} points are not enough for construction (need at least {required})"
        )


class PillarOrderError(CurveLibError, ValueError):
    """Raised when knots or pillars are not strictly increasing."""

    pass


class UnknownConventionError(CurveLibError, ValueError):
    """Raised when a convention, calendar or method name is not registered."""

    pass


class RootNotBracketed(CurveLibError, ValueError):
    """Raised when the objective does not change sign across the bracket."""

    def __init__(self, bracket: Tuple[float, float], values: Tuple[float, float]):
        self.bracket = bracket
        self.values = values
        super().__init__(
            "Root not bracketed: "
            f"f({bracket[0]:.10g})={values[0]:.6e}, f({bracket[1]:.10g})={values[1]:.6e}"
        )


class MaxIterationsExceeded(CurveLibError, RuntimeError):
    """Raised when the root finder does not converge within its iteration limit."""

    def __init__(self, iterations: int, last_x: float, residual: float):
        self.iterations = iterations
        self.last_x = last_x
        self.residual = residual
        super().__init__(
            f"Solver failed to converge after {iterations} iterations "
            f"(last x={last_x:.12g}, residual={residual:.6e})"
        )


class NoBusinessDayFound(CurveLibError, RuntimeError):
    """Raised when no business day exists within the adjustment horizon."""

    def __init__(self, start: date, horizon_days: int):
        self.start = start
        self.horizon_days = horizon_days
        super().__init__(
            f"No business day found within {horizon_days} days of {start}"
        )


class BootstrapError(CurveLibError, RuntimeError):
    """Raised when a quote cannot be calibrated; the whole curve build is aborted."""

    def __init__(self, quote, message: str):
        self.quote = quote
        super().__init__(message)
