from datetime import date, datetime, timedelta
from typing import Union

from dateutil.relativedelta import relativedelta
from pandas import Timestamp

DATE_FMT = "%Y-%m-%d"
COMPACT_FMT = "%Y%m%d"

DateLike = Union[str, date, datetime, Timestamp]


def to_date(date_like: DateLike) -> date:
    """
    Convert a string, datetime or pandas Timestamp to a plain date.
    Accepts 'YYYY-MM-DD' and 'YYYYMMDD' string formats.
    """
    if isinstance(date_like, Timestamp):
        return date_like.date()
    if isinstance(date_like, datetime):
        return date_like.date()
    if isinstance(date_like, date):
        return date_like
    if isinstance(date_like, str):
        for fmt in (DATE_FMT, COMPACT_FMT):
            try:
                return datetime.strptime(date_like, fmt).date()
            except ValueError:
                continue
        raise ValueError(f"Unsupported date string format: {date_like!r}")
    raise TypeError(f"Unsupported type for date: {type(date_like)}")


def datetime_to_str(datetime_date: DateLike) -> str:
    """
    Format a date-like into 'YYYY-MM-DD' string.
    """
    return to_date(datetime_date).strftime(DATE_FMT)


def days_between(start: DateLike, end: DateLike) -> int:
    """Signed number of calendar days from start to end."""
    return (to_date(end) - to_date(start)).days


def month_end(year: int, month: int) -> date:
    """Last calendar day of a given month."""
    return date(year, month, 1) + relativedelta(day=31)


def is_end_of_month(dt: DateLike) -> bool:
    """True if dt is the last calendar day of its month."""
    dt = to_date(dt)
    return dt == month_end(dt.year, dt.month)


def add_days(dt: DateLike, days: int) -> date:
    return to_date(dt) + timedelta(days=days)


def add_months(dt: DateLike, months: int, end_of_month: bool = False) -> date:
    """
    Add (or subtract) calendar months.

    The day is clamped to the target month's length (Jan 31 + 1M = Feb 28/29).
    With end_of_month=True a month-end start date always maps to a month-end.
    """
    dt = to_date(dt)
    shifted = dt + relativedelta(months=months)
    if end_of_month and is_end_of_month(dt):
        return month_end(shifted.year, shifted.month)
    return shifted


def add_years(dt: DateLike, years: int, end_of_month: bool = False) -> date:
    """Add calendar years; Feb 29 falls back to Feb 28 in non-leap years."""
    return add_months(dt, 12 * years, end_of_month)
