"""
Basic types and enums used across the curve library.
"""

from enum import Enum


class Frequency(Enum):
    """Payment frequencies (value = payments per year)."""

    ANNUAL = 1
    SEMIANNUAL = 2
    QUARTERLY = 4
    MONTHLY = 12

    @property
    def months(self) -> int:
        return 12 // self.value


class BusinessDayAdjustment(Enum):
    """Business day adjustment rules."""

    NO_ADJUSTMENT = "NO_ADJUSTMENT"
    FOLLOWING = "FOLLOWING"
    MODIFIED_FOLLOWING = "MODIFIED_FOLLOWING"
    PRECEDING = "PRECEDING"
    MODIFIED_PRECEDING = "MODIFIED_PRECEDING"


class Compounding(Enum):
    """Rate compounding conventions."""

    SIMPLE = "SIMPLE"
    COMPOUNDED = "COMPOUNDED"
    CONTINUOUS = "CONTINUOUS"


class CalendarType(Enum):
    """Predefined calendars."""

    TARGET = "TARGET"
    USNY = "USNY"
    UK = "UK"
    WEEKEND = "WEEKEND"
    NULL = "NULL"
