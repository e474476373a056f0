"""Curve-priced instruments: cash-flow schedules plus present value."""

from .base import Instrument
from .bond import FixedRateBond
from .cashflow import CashFlow, future_cash_flows
from .deposit import DepositInstrument
from .factory import create_instrument_from_quote
from .swap import FixedFloatSwapInstrument, FixedPeriod
from .zero_coupon import ZeroCouponBond

__all__ = [
    "CashFlow",
    "future_cash_flows",
    "Instrument",
    "DepositInstrument",
    "FixedFloatSwapInstrument",
    "FixedPeriod",
    "ZeroCouponBond",
    "FixedRateBond",
    "create_instrument_from_quote",
]
