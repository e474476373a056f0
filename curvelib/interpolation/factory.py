"""
Factory functions for creating interpolators by name.
"""
from typing import Dict, Sequence, Type, Union

from curvelib.errors import UnknownConventionError

from .base import ExtrapolationPolicy, Interpolator
from .linear import LinearInterpolator, LogLinearInterpolator
from .spline import (
    CatmullRomInterpolator,
    HermiteInterpolator,
    LogCubicInterpolator,
    MonotoneCubicInterpolator,
    NaturalCubicInterpolator,
)

INTERPOLATORS: Dict[str, Type[Interpolator]] = {
    "LINEAR": LinearInterpolator,
    "LOG_LINEAR": LogLinearInterpolator,
    "LOGLINEAR": LogLinearInterpolator,
    "NATURAL_CUBIC": NaturalCubicInterpolator,
    "CUBIC": NaturalCubicInterpolator,
    "LOG_CUBIC": LogCubicInterpolator,
    "MONOTONE_CUBIC": MonotoneCubicInterpolator,
    "PCHIP": MonotoneCubicInterpolator,
    "CATMULL_ROM": CatmullRomInterpolator,
    "HERMITE": HermiteInterpolator,
}


def get_interpolator_class(method: Union[str, Type[Interpolator]]) -> Type[Interpolator]:
    """Resolve an interpolation method name (or class) to an Interpolator subclass."""
    if isinstance(method, type) and issubclass(method, Interpolator):
        return method
    key = str(method).upper().replace("-", "_")
    if key not in INTERPOLATORS:
        raise UnknownConventionError(
            f"Unknown interpolation method: {method}. "
            f"Available: LINEAR, LOG_LINEAR, NATURAL_CUBIC, LOG_CUBIC, MONOTONE_CUBIC, "
            f"CATMULL_ROM, HERMITE"
        )
    return INTERPOLATORS[key]


def interpolator_name(method: Union[str, Type[Interpolator]]) -> str:
    """Registry name of an interpolation method given by name or by class."""
    if isinstance(method, type):
        for name, cls in INTERPOLATORS.items():
            if cls is method:
                return name
        raise UnknownConventionError(f"Interpolator {method.__name__} is not registered")
    get_interpolator_class(method)
    return str(method).upper().replace("-", "_")


def create_interpolator(
    method: Union[str, Type[Interpolator]],
    xs: Sequence[float],
    ys: Sequence[float],
    extrapolation: Union[str, ExtrapolationPolicy] = ExtrapolationPolicy.ERROR,
    **kwargs,
) -> Interpolator:
    """
    Create an interpolator based on method name.

    Args:
        method: Interpolation method name
        xs: Knot abscissae
        ys: Values to interpolate
        extrapolation: Extrapolation policy or its name
        **kwargs: Extra constructor arguments (``slopes`` for HERMITE)

    Returns:
        Configured interpolator
    """
    if isinstance(extrapolation, str):
        extrapolation = ExtrapolationPolicy(extrapolation.upper())
    return get_interpolator_class(method)(xs, ys, extrapolation=extrapolation, **kwargs)
