"""
Tenor value type ("ON", "1W", "3M", "10Y", ...) and tenor arithmetic.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from .date import DateLike, add_days, add_months, to_date


class TimeUnit(Enum):
    """Units a tenor can be expressed in."""

    DAYS = "D"
    WEEKS = "W"
    MONTHS = "M"
    YEARS = "Y"


_SPECIAL_TENORS = {
    "ON": (1, TimeUnit.DAYS),
    "TN": (2, TimeUnit.DAYS),
    "SN": (3, TimeUnit.DAYS),
}


@dataclass(frozen=True)
class Tenor:
    """A length of time measured in a single calendar unit."""

    length: int
    unit: TimeUnit

    def __post_init__(self):
        if self.length < 0:
            raise ValueError(f"Tenor length must be non-negative: {self.length}")

    @classmethod
    def parse(cls, tenor: str) -> "Tenor":
        """Parse a tenor string such as '3M', '2Y', '1W' or 'ON'."""
        t = tenor.upper().strip()
        if t in _SPECIAL_TENORS:
            length, unit = _SPECIAL_TENORS[t]
            return cls(length, unit)
        if len(t) < 2:
            raise ValueError(f"Unsupported tenor format: {tenor}")
        try:
            unit = TimeUnit(t[-1])
            length = int(t[:-1])
        except ValueError as exc:
            raise ValueError(f"Unsupported tenor format: {tenor}") from exc
        return cls(length, unit)

    @property
    def months(self) -> int:
        """Length in months (only for month and year tenors)."""
        if self.unit == TimeUnit.MONTHS:
            return self.length
        if self.unit == TimeUnit.YEARS:
            return 12 * self.length
        raise ValueError(f"Tenor {self} cannot be expressed in months")

    @property
    def days(self) -> int:
        """Length in calendar days (only for day and week tenors)."""
        if self.unit == TimeUnit.DAYS:
            return self.length
        if self.unit == TimeUnit.WEEKS:
            return 7 * self.length
        raise ValueError(f"Tenor {self} cannot be expressed in days")

    def is_short(self) -> bool:
        """True for day/week tenors, which use calendar-day arithmetic."""
        return self.unit in (TimeUnit.DAYS, TimeUnit.WEEKS)

    def add_to(self, start: DateLike, end_of_month: bool = False) -> date:
        """Unadjusted date reached by moving this tenor forward from start."""
        start = to_date(start)
        if self.is_short():
            return add_days(start, self.days)
        return add_months(start, self.months, end_of_month)

    def subtract_from(self, end: DateLike, end_of_month: bool = False) -> date:
        """Unadjusted date reached by moving this tenor backward from end."""
        end = to_date(end)
        if self.is_short():
            return add_days(end, -self.days)
        return add_months(end, -self.months, end_of_month)

    def __str__(self) -> str:
        return f"{self.length}{self.unit.value}"
