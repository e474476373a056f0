"""Zero-coupon bond."""

from typing import List

from curvelib.utils.date import DateLike

from .base import Instrument
from .cashflow import CashFlow


class ZeroCouponBond(Instrument):
    """Buy at ``price`` (per unit face) on start, receive the face value at maturity.

    A quoted discount factor is a zero-coupon bond price bought on the
    curve reference date.
    """

    def __init__(
        self,
        start_date: DateLike,
        maturity_date: DateLike,
        price: float,
        face_value: float = 1.0,
    ):
        super().__init__(start_date, maturity_date)
        if price <= 0.0:
            raise ValueError(f"Zero-coupon price must be positive, got {price}")
        self.price = float(price)
        self.face_value = float(face_value)

    def _generate_cash_flows(self) -> List[CashFlow]:
        return [
            CashFlow(self.start_date, -self.price * self.face_value),
            CashFlow(self.maturity_date, self.face_value),
        ]
