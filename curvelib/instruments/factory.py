"""Map market quotes onto calibrating instruments."""

from datetime import date
from typing import Optional, Union

from curvelib.conventions.calendars import BusinessDayCalendar
from curvelib.conventions.daycount import DayCountConvention, get_day_count_convention
from curvelib.conventions.types import BusinessDayAdjustment

from .base import Instrument
from .deposit import DepositInstrument
from .swap import FixedFloatSwapInstrument
from .zero_coupon import ZeroCouponBond


def create_instrument_from_quote(
    reference_date: date,
    quote,
    calendar: Optional[BusinessDayCalendar] = None,
    day_count: Union[str, DayCountConvention] = "ACT/365F",
    adjustment: BusinessDayAdjustment = BusinessDayAdjustment.MODIFIED_FOLLOWING,
) -> Instrument:
    """
    Create the instrument a quote calibrates against.

    Every instrument starts on the reference date. The quote's own day count
    wins over ``day_count``; an explicit quote maturity is kept unadjusted,
    a tenor maturity is rolled with ``adjustment`` on ``calendar``.

    Args:
        reference_date: Curve reference date
        quote: MarketInstrumentQuote
        calendar: Calendar for tenor maturities and swap schedules
        day_count: Accrual day count when the quote carries none
        adjustment: Business day adjustment rule

    Returns:
        Instrument whose present value is zero on the calibrated curve
    """
    from curvelib.curves.bootstrap.quotes import InstrumentKind

    maturity = quote.resolve_maturity(reference_date, calendar, adjustment)
    accrual = get_day_count_convention(quote.day_count or day_count)

    if quote.kind == InstrumentKind.DEPOSIT:
        return DepositInstrument(reference_date, maturity, quote.rate, accrual)
    if quote.kind == InstrumentKind.SWAP:
        return FixedFloatSwapInstrument(
            reference_date,
            maturity,
            quote.rate,
            frequency=quote.frequency,
            day_count=accrual,
            calendar=calendar,
            adjustment=adjustment,
        )
    if quote.kind in (InstrumentKind.ZERO_COUPON_BOND, InstrumentKind.DISCOUNT_FACTOR):
        return ZeroCouponBond(reference_date, maturity, quote.rate)
    raise ValueError(f"Unsupported instrument kind: {quote.kind}")
