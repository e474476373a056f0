"""
Base instrument: a cash-flow schedule valued against a discount curve.
"""

import math
from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional, Tuple

from curvelib.errors import InvalidRange
from curvelib.utils.date import DateLike, to_date

from .cashflow import CashFlow, future_cash_flows


class Instrument(ABC):
    """Base class for curve-priced instruments.

    An instrument owns its schedule and conventions, never a curve. Any
    object exposing ``discount_factor(date)`` can value it.
    """

    def __init__(self, start_date: DateLike, maturity_date: DateLike):
        self.start_date = to_date(start_date)
        self.maturity_date = to_date(maturity_date)
        if self.maturity_date <= self.start_date:
            raise InvalidRange(
                self.start_date,
                self.maturity_date,
                f"Maturity {self.maturity_date} must be after start {self.start_date}",
            )
        self._cash_flows: Optional[Tuple[CashFlow, ...]] = None

    @abstractmethod
    def _generate_cash_flows(self) -> List[CashFlow]:
        """Cash flows in payment-date order."""

    def cash_flows(self) -> Tuple[CashFlow, ...]:
        if self._cash_flows is None:
            self._cash_flows = tuple(self._generate_cash_flows())
        return self._cash_flows

    @property
    def payment_dates(self) -> List[date]:
        return sorted({cf.payment_date for cf in self.cash_flows()})

    @property
    def last_payment_date(self) -> date:
        return max(cf.payment_date for cf in self.cash_flows())

    def present_value(self, curve, settlement_date: Optional[DateLike] = None) -> float:
        """
        Sum of discounted cash flows.

        Without a settlement date every flow is discounted to the curve
        reference date. With one, only flows due strictly after settlement
        count and they are discounted to settlement, ``DF(pay) / DF(settle)``.
        """
        flows = self.cash_flows()
        if settlement_date is None:
            return math.fsum(cf.amount * curve.discount_factor(cf.payment_date) for cf in flows)

        settle = to_date(settlement_date)
        df_settle = curve.discount_factor(settle)
        return math.fsum(
            cf.amount * curve.discount_factor(cf.payment_date) / df_settle
            for cf in future_cash_flows(settle, flows)
        )

    def solve_final_discount_factor(self, curve) -> float:
        """Discount factor at the last payment date that sets the PV to zero.

        Every earlier flow is discounted on ``curve``; the final date itself
        is never queried.
        """
        final = self.last_payment_date
        tail = math.fsum(cf.amount for cf in self.cash_flows() if cf.payment_date == final)
        if tail == 0.0:
            raise ValueError(f"No net cash flow at final date {final}")
        head = math.fsum(
            cf.amount * curve.discount_factor(cf.payment_date)
            for cf in self.cash_flows()
            if cf.payment_date < final
        )
        return -head / tail

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.start_date} -> {self.maturity_date})"
