"""
QuantLib-backed calendar implementations.

The curve code only ever asks a calendar whether a date is a business day;
holiday data is owned by QuantLib and never copied.
"""

from datetime import date, datetime
from typing import Optional, Protocol, Union, runtime_checkable

import QuantLib as ql

from curvelib.conventions.types import BusinessDayAdjustment
from curvelib.errors import UnknownConventionError
from curvelib.utils.date import to_date


@runtime_checkable
class BusinessDayCalendar(Protocol):
    """Anything that can tell business days from holidays.

    Rolling a date on such a calendar is ``adjust_date`` from
    :mod:`curvelib.business_calendar.adjustments`; :meth:`Calendar.adjust`
    is the same bounded search bound to one calendar.
    """

    def is_business_day(self, dt: date) -> bool:
        ...


def _to_ql_date(dt: Union[date, datetime]) -> ql.Date:
    """Convert Python date/datetime to QuantLib Date."""
    dt = to_date(dt)
    return ql.Date(dt.day, dt.month, dt.year)


class Calendar:
    """Base calendar class for QuantLib-backed business day calculations."""

    def __init__(self, name: str, ql_calendar: ql.Calendar):
        self.name = name
        self._ql_calendar = ql_calendar

    def is_business_day(self, dt: Union[date, datetime]) -> bool:
        """Check if date is a business day (not weekend or holiday)."""
        return self._ql_calendar.isBusinessDay(_to_ql_date(dt))

    def is_holiday(self, dt: Union[date, datetime]) -> bool:
        """Check if date is a holiday."""
        return self._ql_calendar.isHoliday(_to_ql_date(dt))

    def adjust(
        self,
        dt: Union[date, datetime],
        adjustment: BusinessDayAdjustment = BusinessDayAdjustment.FOLLOWING,
        max_search_days: Optional[int] = None,
    ) -> date:
        """Roll a date to a business day under the given adjustment rule.

        Raises NoBusinessDayFound when no business day lies within
        ``max_search_days`` (31 by default) in the searched direction.
        """
        from curvelib.business_calendar.adjustments import (
            DEFAULT_ADJUSTMENT_HORIZON,
            adjust_date,
        )

        horizon = DEFAULT_ADJUSTMENT_HORIZON if max_search_days is None else max_search_days
        return adjust_date(dt, BusinessDayAdjustment(adjustment), self, horizon)

    def add_business_days(self, dt: Union[date, datetime], days: int) -> date:
        """Move ``days`` business days forward (or backward when negative)."""
        advanced = self._ql_calendar.advance(_to_ql_date(dt), days, ql.Days)
        return date(advanced.year(), advanced.month(), advanced.dayOfMonth())

    def business_days_between(
        self, start: Union[date, datetime], end: Union[date, datetime]
    ) -> int:
        """Count business days between two dates (exclusive of start, inclusive of end)."""
        ql_start = _to_ql_date(start)
        ql_end = _to_ql_date(end)
        if ql_start >= ql_end:
            return 0
        return self._ql_calendar.businessDaysBetween(ql_start, ql_end, False, True)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r})"


class TargetCalendar(Calendar):
    """TARGET (Trans-European Automated Real-time Gross settlement Express Transfer) calendar."""

    def __init__(self):
        super().__init__("TARGET", ql.TARGET())


class WeekendCalendar(Calendar):
    """Simple calendar that only considers weekends as non-business days."""

    def __init__(self):
        super().__init__("WEEKEND", ql.WeekendsOnly())


class NullCalendar(Calendar):
    """Every day is a business day."""

    def __init__(self):
        super().__init__("NULL", ql.NullCalendar())


class USGovernmentBondCalendar(Calendar):
    """US government bond market calendar."""

    def __init__(self):
        super().__init__("USNY", ql.UnitedStates(ql.UnitedStates.GovernmentBond))


class UKCalendar(Calendar):
    """United Kingdom settlement calendar."""

    def __init__(self):
        super().__init__("UK", ql.UnitedKingdom())


# Pre-defined calendar instances
TARGET = TargetCalendar()
WEEKEND_ONLY = WeekendCalendar()
NULL_CALENDAR = NullCalendar()
USNY = USGovernmentBondCalendar()
UK = UKCalendar()

# Calendar registry
CALENDARS = {
    "TARGET": TARGET,
    "EUR": TARGET,  # Alias
    "WEEKEND": WEEKEND_ONLY,
    "NULL": NULL_CALENDAR,
    "USNY": USNY,
    "UK": UK,
}


def get_calendar(name) -> Calendar:
    """Get a calendar by name or CalendarType (instances are passed through)."""
    if isinstance(name, (Calendar, BusinessDayCalendar)):
        return name
    key = name.value if hasattr(name, "value") else str(name)
    key = key.upper().strip()
    if key not in CALENDARS:
        raise UnknownConventionError(
            f"Unknown calendar: {name}. Available: {list(CALENDARS.keys())}"
        )
    return CALENDARS[key]
