"""
Helper functions for curve calculations and conversions.
"""

import math

from curvelib.conventions.types import Compounding, Frequency


def df_to_rate(
    df: float,
    time: float,
    compounding: Compounding = Compounding.CONTINUOUS,
    frequency: Frequency = Frequency.ANNUAL,
) -> float:
    """
    Convert a discount factor over ``time`` years into a rate.

    Args:
        df: Discount factor (strictly positive)
        time: Year fraction (strictly positive)
        compounding: SIMPLE, COMPOUNDED or CONTINUOUS
        frequency: Compounding frequency, used with COMPOUNDED only

    Returns:
        Rate in decimal
    """
    if df <= 0:
        raise ValueError("Discount factor must be positive")
    if time <= 0:
        raise ValueError("Time must be positive")

    if compounding == Compounding.CONTINUOUS:
        return -math.log(df) / time
    if compounding == Compounding.SIMPLE:
        return (1.0 / df - 1.0) / time
    if compounding == Compounding.COMPOUNDED:
        n = frequency.value
        return n * (df ** (-1.0 / (n * time)) - 1.0)
    raise ValueError(f"Unsupported compounding: {compounding}")


def rate_to_df(
    rate: float,
    time: float,
    compounding: Compounding = Compounding.CONTINUOUS,
    frequency: Frequency = Frequency.ANNUAL,
) -> float:
    """Convert a rate over ``time`` years into a discount factor."""
    if time < 0:
        raise ValueError("Time must be non-negative")
    if time == 0:
        return 1.0

    if compounding == Compounding.CONTINUOUS:
        return math.exp(-rate * time)
    if compounding == Compounding.SIMPLE:
        growth = 1.0 + rate * time
    elif compounding == Compounding.COMPOUNDED:
        n = frequency.value
        growth = (1.0 + rate / n) ** (n * time)
    else:
        raise ValueError(f"Unsupported compounding: {compounding}")

    if growth <= 0:
        raise ValueError(f"Rate {rate} over {time} years gives a non-positive discount factor")
    return 1.0 / growth
