"""
Fixed-rate coupon bond with irregular first and final periods.
"""

import logging
from datetime import date
from typing import List, Optional

from curvelib.business_calendar.adjustments import adjust_date
from curvelib.conventions.calendars import WEEKEND_ONLY, BusinessDayCalendar
from curvelib.conventions.types import BusinessDayAdjustment, Frequency
from curvelib.utils.date import DateLike, add_months, days_between, to_date

from .base import Instrument
from .cashflow import CashFlow, future_cash_flows

logger = logging.getLogger(__name__)


class FixedRateBond(Instrument):
    """
    Fixed coupon bond.

    Regular coupons fall every ``12 / frequency`` months from the first
    coupon date up to the penultimate coupon date. The first coupon is
    pro-rated when the issue date does not sit one regular period before it
    (short first period) or adds a pro-rated extra coupon when it sits
    further back (long first period); the final coupon is treated the same
    way against the maturity date. Coupon payment dates are rolled off
    non-business days; the redemption is paid on the maturity date.
    """

    def __init__(
        self,
        issue_date: DateLike,
        first_coupon_date: DateLike,
        penultimate_coupon_date: DateLike,
        maturity_date: DateLike,
        frequency: Frequency,
        coupon_rate: float,
        face_value: float = 100.0,
        calendar: BusinessDayCalendar = WEEKEND_ONLY,
        adjustment: BusinessDayAdjustment = BusinessDayAdjustment.MODIFIED_FOLLOWING,
        bond_id: str = "",
    ):
        super().__init__(issue_date, maturity_date)
        self.issue_date = self.start_date
        self.first_coupon_date = to_date(first_coupon_date)
        self.penultimate_coupon_date = to_date(penultimate_coupon_date)
        if not (
            self.issue_date < self.first_coupon_date
            <= self.penultimate_coupon_date < self.maturity_date
        ):
            raise ValueError(
                "Bond dates must satisfy issue < first coupon <= penultimate coupon < maturity, got "
                f"{self.issue_date}, {self.first_coupon_date}, "
                f"{self.penultimate_coupon_date}, {self.maturity_date}"
            )
        self.frequency = Frequency(frequency)
        self.coupon_rate = float(coupon_rate)
        self.face_value = float(face_value)
        self.calendar = calendar
        self.adjustment = adjustment
        self.bond_id = bond_id

    @property
    def regular_coupon(self) -> float:
        return self.coupon_rate * self.face_value / self.frequency.value

    def _months(self, dt: date, periods: int) -> date:
        return add_months(dt, periods * self.frequency.months)

    def _generate_cash_flows(self) -> List[CashFlow]:
        coupon = self.regular_coupon
        flows: List[CashFlow] = []

        previous = None
        due = self.first_coupon_date
        k = 0
        while due <= self.penultimate_coupon_date:
            flows.append(
                CashFlow(
                    payment_date=adjust_date(due, self.adjustment, self.calendar),
                    amount=coupon,
                    accrual_start=previous,
                    accrual_end=due,
                    due_date=due,
                )
            )
            previous = due
            k += 1
            due = self._months(self.first_coupon_date, k)

        first = flows[0]
        flows[0] = CashFlow(
            first.payment_date,
            self._first_coupon(coupon),
            accrual_start=self.issue_date,
            accrual_end=first.accrual_end,
            due_date=first.due_date,
        )
        flows.append(
            CashFlow(
                payment_date=self.maturity_date,
                amount=self.face_value + self._final_coupon(coupon),
                accrual_start=self.penultimate_coupon_date,
                accrual_end=self.maturity_date,
            )
        )
        return flows

    def _first_coupon(self, coupon: float) -> float:
        first_prior = self._months(self.first_coupon_date, -1)
        if first_prior < self.issue_date:
            fraction = days_between(self.issue_date, self.first_coupon_date) / days_between(
                first_prior, self.first_coupon_date
            )
            return coupon * fraction
        if first_prior > self.issue_date:
            second_prior = self._months(self.first_coupon_date, -2)
            fraction = days_between(self.issue_date, first_prior) / days_between(
                second_prior, first_prior
            )
            return coupon + coupon * fraction
        return coupon

    def _final_coupon(self, coupon: float) -> float:
        regular_maturity = self._months(self.penultimate_coupon_date, 1)
        if self.maturity_date < regular_maturity:
            fraction = days_between(self.penultimate_coupon_date, self.maturity_date) / days_between(
                self.penultimate_coupon_date, regular_maturity
            )
            return coupon * fraction
        if self.maturity_date > regular_maturity:
            next_regular = self._months(self.penultimate_coupon_date, 2)
            fraction = days_between(regular_maturity, self.maturity_date) / days_between(
                regular_maturity, next_regular
            )
            return coupon + coupon * fraction
        return coupon

    def accrued_interest(self, settlement_date: DateLike) -> float:
        """Straight-line accrual of the coupon running at settlement."""
        settle = to_date(settlement_date)
        for cf in future_cash_flows(settle, self.cash_flows()):
            start = cf.accrual_start or self.issue_date
            if settle <= start:
                return 0.0
            coupon = cf.amount - (self.face_value if cf.due_date == self.maturity_date else 0.0)
            return coupon * days_between(start, settle) / days_between(start, cf.due_date)
        return 0.0

    def dirty_price(self, curve, settlement_date: DateLike) -> float:
        """Present value at settlement per 100 face."""
        pv = self.present_value(curve, settlement_date)
        logger.debug("Bond %s PV at %s: %.10f", self.bond_id, settlement_date, pv)
        return pv / self.face_value * 100.0

    def clean_price(self, curve, settlement_date: DateLike) -> float:
        """Dirty price less accrued interest, per 100 face."""
        accrued = self.accrued_interest(settlement_date) / self.face_value * 100.0
        return self.dirty_price(curve, settlement_date) - accrued
