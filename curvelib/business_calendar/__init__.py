"""Business-day rolling, spot dates and schedule generation."""

from .adjustments import DEFAULT_ADJUSTMENT_HORIZON, add_business_days, adjust_date
from .date_calculator import compute_maturity, generate_schedule, get_spot_date

__all__ = [
    "DEFAULT_ADJUSTMENT_HORIZON",
    "adjust_date",
    "add_business_days",
    "get_spot_date",
    "compute_maturity",
    "generate_schedule",
]
