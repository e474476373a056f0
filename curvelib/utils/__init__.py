"""Calendar-free date helpers, tenors and numerical utilities."""

from .date import (
    add_months,
    add_years,
    days_between,
    is_end_of_month,
    month_end,
    to_date,
)
from .rootfinding import RootResult, bisect, newton_with_bisect, solve
from .tenor import Tenor, TimeUnit

__all__ = [
    "to_date",
    "days_between",
    "add_months",
    "add_years",
    "is_end_of_month",
    "month_end",
    "Tenor",
    "TimeUnit",
    "RootResult",
    "solve",
    "bisect",
    "newton_with_bisect",
]
