"""
Linear interpolation methods for yield curves.
"""
from .base import Interpolator


class LinearInterpolator(Interpolator):
    """Linear interpolation on the raw values.

    Simple and commonly used for zero-rate curves.
    Applied to discount factors it may produce kinked forward rates.
    """

    def _interpolate(self, x: float, i: int) -> float:
        x1, x2 = self.xs[i], self.xs[i + 1]
        y1, y2 = self._fy[i], self._fy[i + 1]

        weight = (x - x1) / (x2 - x1)
        return y1 + weight * (y2 - y1)


class LogLinearInterpolator(LinearInterpolator):
    """Linear interpolation on log values.

    On discount factors this is piecewise-constant continuously compounded
    forward rates between knots; values stay strictly positive.
    """

    log_space = True
