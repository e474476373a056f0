"""Curve pillar value type."""

import math
from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class CurvePillar:
    """A calibrated (date, discount factor) point of a term structure.

    ``time`` is the year fraction from the owning curve's reference date;
    it is filled in by the curve and left as None on free-standing pillars.
    """

    date: date
    discount_factor: float
    time: Optional[float] = None

    def __post_init__(self):
        if not isinstance(self.date, date):
            raise TypeError(f"Pillar date must be a date, got {type(self.date).__name__}")
        if not math.isfinite(self.discount_factor) or self.discount_factor <= 0.0:
            raise ValueError(
                f"Discount factor at {self.date} must be strictly positive, "
                f"got {self.discount_factor}"
            )

    @property
    def zero_rate(self) -> Optional[float]:
        """Continuously compounded zero rate, when the pillar time is known."""
        if not self.time:
            return None
        return -math.log(self.discount_factor) / self.time
