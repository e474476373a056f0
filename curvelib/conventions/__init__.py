"""Market conventions: day counts, calendars and shared enums."""

from .calendars import (
    BusinessDayCalendar,
    Calendar,
    NULL_CALENDAR,
    TARGET,
    WEEKEND_ONLY,
    get_calendar,
)
from .daycount import (
    ACT_360,
    ACT_365F,
    ACT_ACT,
    THIRTY_360E,
    THIRTY_360S,
    THIRTY_360U,
    DayCountConvention,
    get_day_count_convention,
    year_fraction,
)
from .types import BusinessDayAdjustment, CalendarType, Compounding, Frequency

__all__ = [
    # Calendars
    "BusinessDayCalendar",
    "Calendar",
    "TARGET",
    "WEEKEND_ONLY",
    "NULL_CALENDAR",
    "get_calendar",
    # Day counts
    "DayCountConvention",
    "ACT_360",
    "ACT_365F",
    "ACT_ACT",
    "THIRTY_360E",
    "THIRTY_360U",
    "THIRTY_360S",
    "get_day_count_convention",
    "year_fraction",
    # Enums
    "BusinessDayAdjustment",
    "CalendarType",
    "Compounding",
    "Frequency",
]
