"""
Interpolation methods for discount curves.

Piecewise linear and cubic interpolators over strictly increasing knots,
with an explicit extrapolation policy outside the knot range.
"""

# Base classes
from .base import ExtrapolationPolicy, InterpolationSpace, Interpolator

# Factory
from .factory import (
    INTERPOLATORS,
    create_interpolator,
    get_interpolator_class,
    interpolator_name,
)

# Linear interpolation methods
from .linear import LinearInterpolator, LogLinearInterpolator

# Cubic interpolation methods
from .spline import (
    CatmullRomInterpolator,
    CubicHermiteInterpolator,
    HermiteInterpolator,
    LogCubicInterpolator,
    MonotoneCubicInterpolator,
    NaturalCubicInterpolator,
)

__all__ = [
    # Base classes
    'Interpolator',
    'ExtrapolationPolicy',
    'InterpolationSpace',

    # Linear interpolation methods
    'LinearInterpolator',
    'LogLinearInterpolator',

    # Cubic interpolation methods
    'NaturalCubicInterpolator',
    'LogCubicInterpolator',
    'CubicHermiteInterpolator',
    'HermiteInterpolator',
    'CatmullRomInterpolator',
    'MonotoneCubicInterpolator',

    # Factory
    'INTERPOLATORS',
    'create_interpolator',
    'get_interpolator_class',
    'interpolator_name',
]
