"""
Cubic interpolation methods for yield curves.
"""
from typing import Optional, Sequence

import numpy as np

from curvelib.utils.mathutils import solve_tridiagonal

from .base import ExtrapolationPolicy, Interpolator


class NaturalCubicInterpolator(Interpolator):
    """Natural cubic spline (zero second derivative at both ends).

    C2-smooth, but not shape preserving: between knots the spline may
    overshoot the neighbouring values.
    """

    min_points = 3

    def _fit(self) -> None:
        n = len(self.xs)
        h = np.diff(self.xs)
        slopes = np.diff(self._fy) / h

        diag = np.ones(n)
        lower = np.zeros(n - 1)
        upper = np.zeros(n - 1)
        rhs = np.zeros(n)
        for i in range(1, n - 1):
            lower[i - 1] = h[i - 1] / 6.0
            diag[i] = (h[i - 1] + h[i]) / 3.0
            upper[i] = h[i] / 6.0
            rhs[i] = slopes[i] - slopes[i - 1]

        self._h = h
        self._m = solve_tridiagonal(lower, diag, upper, rhs)

    def _interpolate(self, x: float, i: int) -> float:
        h = self._h[i]
        x1, x2 = self.xs[i], self.xs[i + 1]
        y1, y2 = self._fy[i], self._fy[i + 1]
        m1, m2 = self._m[i], self._m[i + 1]

        a = x2 - x
        b = x - x1
        return (
            m1 * a ** 3 / (6.0 * h)
            + m2 * b ** 3 / (6.0 * h)
            + a * (y1 / h - h * m1 / 6.0)
            + b * (y2 / h - h * m2 / 6.0)
        )

    def _boundary_slope(self, left: bool) -> float:
        if left:
            h = self._h[0]
            return (self._fy[1] - self._fy[0]) / h - h * (2.0 * self._m[0] + self._m[1]) / 6.0
        h = self._h[-1]
        return (self._fy[-1] - self._fy[-2]) / h + h * (self._m[-2] + 2.0 * self._m[-1]) / 6.0


class LogCubicInterpolator(NaturalCubicInterpolator):
    """Natural cubic spline through log values; results stay strictly positive."""

    log_space = True


class CubicHermiteInterpolator(Interpolator):
    """Piecewise cubic Hermite interpolation from knot values and knot slopes.

    Subclasses supply the slopes through ``_knot_slopes``; each segment is
    the cubic matching both end values and both end slopes, so the result
    is C1 and reproduces the knots exactly.
    """

    def _fit(self) -> None:
        self._h = np.diff(self.xs)
        slopes = np.asarray(self._knot_slopes(), dtype=float)
        slopes.setflags(write=False)
        self._slopes = slopes

    def _knot_slopes(self) -> np.ndarray:
        raise NotImplementedError

    def _interpolate(self, x: float, i: int) -> float:
        h = self._h[i]
        t = (x - self.xs[i]) / h
        t2 = t * t
        t3 = t2 * t

        h00 = 2.0 * t3 - 3.0 * t2 + 1.0
        h10 = t3 - 2.0 * t2 + t
        h01 = -2.0 * t3 + 3.0 * t2
        h11 = t3 - t2
        return (
            h00 * self._fy[i]
            + h10 * h * self._slopes[i]
            + h01 * self._fy[i + 1]
            + h11 * h * self._slopes[i + 1]
        )

    def _boundary_slope(self, left: bool) -> float:
        return float(self._slopes[0] if left else self._slopes[-1])


class HermiteInterpolator(CubicHermiteInterpolator):
    """Cubic Hermite spline through caller-supplied (x, y, dy/dx) knots."""

    def __init__(
        self,
        xs: Sequence[float],
        ys: Sequence[float],
        slopes: Optional[Sequence[float]] = None,
        extrapolation: ExtrapolationPolicy = ExtrapolationPolicy.ERROR,
    ):
        if slopes is None:
            raise ValueError("HermiteInterpolator needs a slope at every knot")
        if len(slopes) != len(xs):
            raise ValueError("xs and slopes must have same length")
        given = np.asarray(slopes, dtype=float)
        if not np.all(np.isfinite(given)):
            raise ValueError("Knot slopes must be finite numbers")
        self._given_slopes = given
        super().__init__(xs, ys, extrapolation)

    def _knot_slopes(self) -> np.ndarray:
        return self._given_slopes


class CatmullRomInterpolator(CubicHermiteInterpolator):
    """Catmull-Rom spline on non-uniform knots.

    The slope at an interior knot is the chord through its two neighbours;
    the end knots take the slope of their adjacent segment.
    """

    min_points = 3

    def _knot_slopes(self) -> np.ndarray:
        xs, fy = self.xs, self._fy
        slopes = np.empty(len(xs))
        slopes[1:-1] = (fy[2:] - fy[:-2]) / (xs[2:] - xs[:-2])
        slopes[0] = (fy[1] - fy[0]) / (xs[1] - xs[0])
        slopes[-1] = (fy[-1] - fy[-2]) / (xs[-1] - xs[-2])
        return slopes


class MonotoneCubicInterpolator(CubicHermiteInterpolator):
    """Shape-preserving piecewise cubic Hermite interpolation (Fritsch-Carlson).

    Interior slopes are weighted harmonic means of the neighbouring secants
    and vanish at local extrema, so every segment stays within the range of
    its two knots. On positive discount factors the result is positive.
    """

    def _knot_slopes(self) -> np.ndarray:
        h = np.diff(self.xs)
        delta = np.diff(self._fy) / h
        n = len(self.xs)
        m = np.zeros(n)

        for k in range(1, n - 1):
            d0, d1 = delta[k - 1], delta[k]
            if d0 * d1 <= 0.0:
                continue
            w1 = 2.0 * h[k] + h[k - 1]
            w2 = h[k] + 2.0 * h[k - 1]
            m[k] = (w1 + w2) / (w1 / d0 + w2 / d1)

        if n == 2:
            m[0] = m[1] = delta[0]
        else:
            m[0] = self._edge_slope(h[0], h[1], delta[0], delta[1])
            m[-1] = self._edge_slope(h[-1], h[-2], delta[-1], delta[-2])
        return m

    @staticmethod
    def _edge_slope(h0: float, h1: float, d0: float, d1: float) -> float:
        # one-sided three-point estimate, clipped to keep the end segment monotone
        slope = ((2.0 * h0 + h1) * d0 - h0 * d1) / (h0 + h1)
        if np.sign(slope) != np.sign(d0):
            return 0.0
        if np.sign(d0) != np.sign(d1) and abs(slope) > 3.0 * abs(d0):
            return 3.0 * d0
        return float(slope)
