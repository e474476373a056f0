"""
Spot dates, tenor maturities and payment schedules.
"""

from datetime import date, datetime
from typing import List, Optional, Union

from curvelib.conventions.calendars import BusinessDayCalendar, get_calendar
from curvelib.conventions.types import BusinessDayAdjustment, Frequency
from curvelib.utils.date import add_months, to_date
from curvelib.utils.tenor import Tenor

from .adjustments import adjust_date, add_business_days


def get_spot_date(
    trade_date: Union[date, datetime],
    calendar: Optional[BusinessDayCalendar] = None,
    spot_lag: int = 2,
) -> date:
    """Get spot date from trade date (default: 2 business days + TARGET calendar)."""
    if calendar is None:
        calendar = get_calendar("TARGET")
    return add_business_days(trade_date, spot_lag, calendar)


def compute_maturity(
    start_date: Union[date, datetime],
    tenor: Union[str, Tenor],
    calendar: Optional[BusinessDayCalendar] = None,
    business_day_adjustment: BusinessDayAdjustment = BusinessDayAdjustment.MODIFIED_FOLLOWING,
    end_of_month_rule: bool = True,
) -> date:
    """Compute the adjusted maturity date reached by moving tenor forward from start_date.

    Day and week tenors use calendar-day arithmetic and are rolled FOLLOWING;
    month and year tenors use month arithmetic with the given adjustment.
    """
    if calendar is None:
        calendar = get_calendar("TARGET")
    if isinstance(tenor, str):
        tenor = Tenor.parse(tenor)

    unadjusted = tenor.add_to(start_date, end_of_month=end_of_month_rule)
    if tenor.is_short():
        return adjust_date(unadjusted, BusinessDayAdjustment.FOLLOWING, calendar)
    return adjust_date(unadjusted, business_day_adjustment, calendar)


def generate_schedule(
    start_date: Union[date, datetime],
    maturity_date: Union[date, datetime],
    frequency: Frequency,
    calendar: Optional[BusinessDayCalendar] = None,
    business_day_adjustment: BusinessDayAdjustment = BusinessDayAdjustment.MODIFIED_FOLLOWING,
    end_of_month_rule: bool = False,
) -> List[date]:
    """Generate [start, d1, ..., maturity] by rolling backward from maturity.

    Any irregular period ends up as a short stub at the front. Start and
    maturity are kept as given; intermediate dates are business-day adjusted.
    """
    start = to_date(start_date)
    maturity = to_date(maturity_date)
    if maturity <= start:
        raise ValueError(f"Maturity {maturity} must be after start {start}")
    if calendar is None:
        calendar = get_calendar("TARGET")

    step = frequency.months
    unadjusted: List[date] = []
    k = 1
    while True:
        candidate = add_months(maturity, -k * step, end_of_month_rule)
        if candidate <= start:
            break
        unadjusted.append(candidate)
        k += 1
    unadjusted.reverse()

    dates: List[date] = [start]
    for d in unadjusted:
        adjusted = adjust_date(d, business_day_adjustment, calendar)
        if start < adjusted < maturity and adjusted > dates[-1]:
            dates.append(adjusted)
    dates.append(maturity)
    return dates
