"""Market quotes consumed by the bootstrap."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

from curvelib.business_calendar.date_calculator import compute_maturity
from curvelib.conventions.calendars import BusinessDayCalendar
from curvelib.conventions.types import BusinessDayAdjustment, Frequency
from curvelib.utils.date import to_date


class InstrumentKind(Enum):
    """How a quote's rate is to be read."""

    DEPOSIT = "DEPOSIT"
    SWAP = "SWAP"
    ZERO_COUPON_BOND = "ZERO_COUPON_BOND"
    DISCOUNT_FACTOR = "DISCOUNT_FACTOR"


@dataclass(frozen=True)
class MarketInstrumentQuote:
    """
    A single calibration input.

    ``rate`` is a simple money-market rate for DEPOSIT, the par fixed rate
    for SWAP, a price per unit notional for ZERO_COUPON_BOND and the pillar
    value itself for DISCOUNT_FACTOR. Either ``maturity`` or ``tenor`` must
    be given; an explicit maturity wins.
    """

    rate: float
    kind: InstrumentKind = InstrumentKind.SWAP
    maturity: Optional[date] = None
    tenor: Optional[str] = None
    frequency: Frequency = Frequency.ANNUAL
    day_count: Optional[str] = None

    def __post_init__(self):
        if self.maturity is None and self.tenor is None:
            raise ValueError("Quote needs a maturity date or a tenor")
        if self.maturity is not None:
            object.__setattr__(self, "maturity", to_date(self.maturity))
        object.__setattr__(self, "kind", InstrumentKind(self.kind))

    def resolve_maturity(
        self,
        reference_date: date,
        calendar: Optional[BusinessDayCalendar] = None,
        adjustment: BusinessDayAdjustment = BusinessDayAdjustment.MODIFIED_FOLLOWING,
    ) -> date:
        """Maturity date, computed from the tenor when none was given."""
        if self.maturity is not None:
            return self.maturity
        return compute_maturity(reference_date, self.tenor, calendar, adjustment)

    @property
    def label(self) -> str:
        return f"{self.kind.value} {self.tenor or self.maturity} @ {self.rate}"
