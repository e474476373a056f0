"""
Base classes for curve interpolation methods.
"""
import math
from abc import ABC, abstractmethod
from enum import Enum
from typing import Iterable, List, Sequence

import numpy as np

from curvelib.errors import (
    ExtrapolationError,
    InsufficientPointsError,
    PillarOrderError,
)


class ExtrapolationPolicy(Enum):
    """What an interpolator does outside its knot range."""

    ERROR = "ERROR"
    FLAT = "FLAT"
    LINEAR = "LINEAR"


class InterpolationSpace(Enum):
    """Quantity a discount curve interpolates between its pillars."""

    DISCOUNT_FACTOR = "DISCOUNT_FACTOR"
    ZERO_RATE = "ZERO_RATE"


class Interpolator(ABC):
    """Base class for 1-D interpolation methods.

    Subclasses work on ``self._fy`` (the knot values, logged when ``log_space``)
    and implement ``_interpolate`` for points strictly inside a segment.
    Knots are reproduced exactly, whatever the transform.
    """

    min_points = 2
    log_space = False

    def __init__(
        self,
        xs: Sequence[float],
        ys: Sequence[float],
        extrapolation: ExtrapolationPolicy = ExtrapolationPolicy.ERROR,
    ):
        """
        Initialize interpolator.

        Args:
            xs: Strictly increasing knot abscissae (e.g. year fractions)
            ys: Values at the knots
            extrapolation: Behaviour outside [xs[0], xs[-1]]
        """
        if len(xs) != len(ys):
            raise ValueError("xs and ys must have same length")
        if len(xs) < self.min_points:
            raise InsufficientPointsError(len(xs), self.min_points)

        xs_arr = np.asarray(xs, dtype=float)
        ys_arr = np.asarray(ys, dtype=float)
        if not np.all(np.isfinite(xs_arr)) or not np.all(np.isfinite(ys_arr)):
            raise ValueError("Knots must be finite numbers")
        if np.any(np.diff(xs_arr) <= 0):
            raise PillarOrderError("Interpolation knots must be strictly increasing")
        if self.log_space and np.any(ys_arr <= 0):
            raise ValueError(f"{type(self).__name__} requires strictly positive values")

        xs_arr.setflags(write=False)
        ys_arr.setflags(write=False)
        self.xs = xs_arr
        self.ys = ys_arr
        self.extrapolation = ExtrapolationPolicy(extrapolation)

        fy = np.log(ys_arr) if self.log_space else ys_arr.copy()
        fy.setflags(write=False)
        self._fy = fy
        self._fit()

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------
    def _fit(self) -> None:
        """Precompute coefficients (no-op for piecewise linear methods)."""

    @abstractmethod
    def _interpolate(self, x: float, i: int) -> float:
        """Transformed value at x with xs[i] < x < xs[i+1]."""

    def _boundary_slope(self, left: bool) -> float:
        """Slope used for linear extrapolation (boundary chord by default)."""
        if left:
            return (self._fy[1] - self._fy[0]) / (self.xs[1] - self.xs[0])
        return (self._fy[-1] - self._fy[-2]) / (self.xs[-1] - self.xs[-2])

    def _inverse(self, fy: float) -> float:
        return math.exp(fy) if self.log_space else float(fy)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def x_min(self) -> float:
        return float(self.xs[0])

    @property
    def x_max(self) -> float:
        return float(self.xs[-1])

    def in_range(self, x: float) -> bool:
        return self.x_min <= x <= self.x_max

    def value_at(self, x: float) -> float:
        """Interpolated value at x, applying the extrapolation policy outside the knots."""
        x = float(x)
        if not self.in_range(x):
            return self._extrapolate(x)

        i = int(np.searchsorted(self.xs, x, side="right")) - 1
        if self.xs[i] == x:
            return float(self.ys[i])
        return self._inverse(self._interpolate(x, i))

    def values_at(self, xs: Iterable[float]) -> List[float]:
        """Interpolate values at multiple points."""
        return [self.value_at(x) for x in xs]

    def __call__(self, x: float) -> float:
        return self.value_at(x)

    def _extrapolate(self, x: float) -> float:
        left = x < self.x_min
        if self.extrapolation == ExtrapolationPolicy.ERROR:
            raise ExtrapolationError(x, self.x_min, self.x_max)
        if self.extrapolation == ExtrapolationPolicy.FLAT:
            return float(self.ys[0] if left else self.ys[-1])

        x_edge = self.x_min if left else self.x_max
        fy_edge = self._fy[0] if left else self._fy[-1]
        return self._inverse(fy_edge + self._boundary_slope(left) * (x - x_edge))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(n={len(self.xs)}, "
            f"range=[{self.x_min:.6g}, {self.x_max:.6g}], "
            f"extrapolation={self.extrapolation.value})"
        )
