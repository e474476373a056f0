"""Plain vanilla fixed/float interest rate swap on a single curve."""

import math
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Union

from curvelib.business_calendar.date_calculator import generate_schedule
from curvelib.conventions.calendars import BusinessDayCalendar
from curvelib.conventions.daycount import DayCountConvention, get_day_count_convention
from curvelib.conventions.types import BusinessDayAdjustment, Frequency
from curvelib.utils.date import DateLike

from .base import Instrument
from .cashflow import CashFlow


@dataclass(frozen=True)
class FixedPeriod:
    """One accrual period of the fixed leg."""

    accrual_start: date
    accrual_end: date
    year_fraction: float


class FixedFloatSwapInstrument(Instrument):
    """
    Spot-starting fixed/float swap.

    With a single curve the floating leg is worth ``DF(start) - DF(maturity)``
    per unit notional, so the swap is represented by its equivalent par bond:
    pay the notional at start, receive fixed coupons and the notional back at
    maturity. At the par rate this schedule has zero value.
    """

    def __init__(
        self,
        start_date: DateLike,
        maturity_date: DateLike,
        fixed_rate: float,
        frequency: Frequency = Frequency.ANNUAL,
        day_count: Union[str, DayCountConvention] = "30/360",
        calendar: Optional[BusinessDayCalendar] = None,
        adjustment: BusinessDayAdjustment = BusinessDayAdjustment.MODIFIED_FOLLOWING,
        notional: float = 1.0,
    ):
        super().__init__(start_date, maturity_date)
        self.fixed_rate = float(fixed_rate)
        self.frequency = Frequency(frequency)
        self.day_count = get_day_count_convention(day_count)
        self.calendar = calendar
        self.adjustment = adjustment
        self.notional = float(notional)

        schedule = generate_schedule(
            self.start_date, self.maturity_date, self.frequency, calendar, adjustment
        )
        self.periods: List[FixedPeriod] = [
            FixedPeriod(s, e, self.day_count.year_fraction(s, e))
            for s, e in zip(schedule[:-1], schedule[1:])
        ]

    def _generate_cash_flows(self) -> List[CashFlow]:
        flows = [CashFlow(self.start_date, -self.notional)]
        for period in self.periods:
            flows.append(
                CashFlow(
                    period.accrual_end,
                    self.notional * self.fixed_rate * period.year_fraction,
                    accrual_start=period.accrual_start,
                    accrual_end=period.accrual_end,
                )
            )
        flows.append(CashFlow(self.maturity_date, self.notional))
        return flows

    def annuity(self, curve) -> float:
        """Sum of accrual fractions times discount factors at period ends."""
        return math.fsum(
            p.year_fraction * curve.discount_factor(p.accrual_end) for p in self.periods
        )

    def par_rate(self, curve) -> float:
        """Fixed rate that gives the swap zero value on ``curve``."""
        annuity = self.annuity(curve)
        if annuity <= 0.0:
            raise ValueError("Swap annuity must be positive")
        floating = curve.discount_factor(self.start_date) - curve.discount_factor(self.maturity_date)
        return floating / annuity

    def fixed_leg_pv(self, curve) -> float:
        return self.notional * self.fixed_rate * self.annuity(curve)

    def floating_leg_pv(self, curve) -> float:
        return self.notional * (
            curve.discount_factor(self.start_date) - curve.discount_factor(self.maturity_date)
        )
