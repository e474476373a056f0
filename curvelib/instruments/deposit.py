"""Money-market deposit."""

from typing import List, Union

from curvelib.conventions.daycount import DayCountConvention, get_day_count_convention
from curvelib.utils.date import DateLike

from .base import Instrument
from .cashflow import CashFlow


class DepositInstrument(Instrument):
    """Simple-interest deposit: pay the notional at start, receive ``1 + r * tau`` at maturity."""

    def __init__(
        self,
        start_date: DateLike,
        maturity_date: DateLike,
        rate: float,
        day_count: Union[str, DayCountConvention] = "ACT/360",
        notional: float = 1.0,
    ):
        super().__init__(start_date, maturity_date)
        self.rate = float(rate)
        self.day_count = get_day_count_convention(day_count)
        self.notional = float(notional)
        self.accrual_factor = self.day_count.year_fraction(self.start_date, self.maturity_date)

    def _generate_cash_flows(self) -> List[CashFlow]:
        return [
            CashFlow(self.start_date, -self.notional),
            CashFlow(
                self.maturity_date,
                self.notional * (1.0 + self.rate * self.accrual_factor),
                accrual_start=self.start_date,
                accrual_end=self.maturity_date,
            ),
        ]

    def implied_discount_factor(self, curve) -> float:
        """Discount factor at maturity implied by the deposit rate."""
        growth = 1.0 + self.rate * self.accrual_factor
        if growth <= 0.0:
            raise ValueError(f"Deposit rate {self.rate} implies a non-positive discount factor")
        return curve.discount_factor(self.start_date) / growth
