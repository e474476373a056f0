"""Cash flow value type."""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence


@dataclass(frozen=True)
class CashFlow:
    """A dated amount.

    ``due_date`` is the contractual date (unadjusted) and decides whether a
    flow is still alive at settlement; ``payment_date`` is the date the flow
    is discounted from. They only differ for rolled payments.
    """

    payment_date: date
    amount: float
    accrual_start: Optional[date] = None
    accrual_end: Optional[date] = None
    due_date: Optional[date] = None

    def __post_init__(self):
        if self.due_date is None:
            object.__setattr__(self, "due_date", self.payment_date)


def future_cash_flows(settlement_date: date, flows: Sequence[CashFlow]) -> List[CashFlow]:
    """Filter cash flows due strictly after settlement."""
    return [cf for cf in flows if cf.due_date > settlement_date]
