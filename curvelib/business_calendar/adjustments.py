"""
Business day adjustment rules.

Every search for a business day is bounded by a horizon so that a
pathological calendar (no business days at all) fails instead of looping.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Union

from curvelib.conventions.calendars import BusinessDayCalendar
from curvelib.conventions.types import BusinessDayAdjustment
from curvelib.errors import NoBusinessDayFound
from curvelib.utils.date import to_date

logger = logging.getLogger(__name__)

DEFAULT_ADJUSTMENT_HORIZON = 31


def _roll(
    dt: date, step_days: int, calendar: BusinessDayCalendar, max_search_days: int
) -> date:
    """Step one day at a time until a business day is reached."""
    current = dt
    for _ in range(max_search_days + 1):
        if calendar.is_business_day(current):
            return current
        current += timedelta(days=step_days)
    logger.debug(
        "No business day within %s days of %s (step %+d)", max_search_days, dt, step_days
    )
    raise NoBusinessDayFound(dt, max_search_days)


def adjust_date(
    dt: Union[date, datetime],
    adjustment: BusinessDayAdjustment,
    calendar: BusinessDayCalendar,
    max_search_days: int = DEFAULT_ADJUSTMENT_HORIZON,
) -> date:
    """Apply business day adjustment to a date.

    Raises
    ------
    NoBusinessDayFound
        If no business day exists within max_search_days of dt in the
        direction(s) the rule searches.
    """
    dt = to_date(dt)

    if adjustment == BusinessDayAdjustment.NO_ADJUSTMENT:
        return dt

    elif adjustment == BusinessDayAdjustment.FOLLOWING:
        return _roll(dt, 1, calendar, max_search_days)

    elif adjustment == BusinessDayAdjustment.PRECEDING:
        return _roll(dt, -1, calendar, max_search_days)

    elif adjustment == BusinessDayAdjustment.MODIFIED_FOLLOWING:
        try:
            adjusted = _roll(dt, 1, calendar, max_search_days)
        except NoBusinessDayFound:
            adjusted = None
        # If month changed, use preceding instead
        if adjusted is None or adjusted.month != dt.month:
            return _roll(dt, -1, calendar, max_search_days)
        return adjusted

    elif adjustment == BusinessDayAdjustment.MODIFIED_PRECEDING:
        try:
            adjusted = _roll(dt, -1, calendar, max_search_days)
        except NoBusinessDayFound:
            adjusted = None
        # If month changed, use following instead
        if adjusted is None or adjusted.month != dt.month:
            return _roll(dt, 1, calendar, max_search_days)
        return adjusted

    else:
        raise ValueError(f"Unknown business day adjustment: {adjustment}")


def add_business_days(
    dt: Union[date, datetime],
    days: int,
    calendar: BusinessDayCalendar,
    max_search_days: int = DEFAULT_ADJUSTMENT_HORIZON,
) -> date:
    """Move forward (or backward for negative days) by a number of business days."""
    current = to_date(dt)
    step = 1 if days >= 0 else -1
    for _ in range(abs(days)):
        current = _roll(current + timedelta(days=step), step, calendar, max_search_days)
    return current
