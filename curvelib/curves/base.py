"""
Base curve class shared by term structures.
"""

import math
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Optional, Union

from curvelib.conventions.daycount import DayCountConvention
from curvelib.conventions.types import Compounding, Frequency
from curvelib.errors import DateBeforeReference, InvalidRange
from curvelib.utils.date import to_date

from .helpers import df_to_rate

DateInput = Union[date, datetime, str]


class BaseCurve(ABC):
    """Rate queries derived from a discount function.

    Subclasses provide ``reference_date``, ``day_count`` (the time axis),
    ``forward_compounding`` and ``_df_at_time``; everything else is algebra
    on discount factors.
    """

    reference_date: date
    day_count: DayCountConvention
    forward_compounding: Compounding

    def _to_year_fraction(self, dt: DateInput) -> float:
        """Convert a date to the curve's year fraction basis."""
        query = to_date(dt)
        if query < self.reference_date:
            raise DateBeforeReference(query, self.reference_date)
        return self.day_count.year_fraction(self.reference_date, query)

    @abstractmethod
    def _df_at_time(self, time: float) -> float:
        """Discount factor at a non-negative curve time."""

    def discount_factor(self, dt: DateInput) -> float:
        """Discount factor from the reference date to ``dt`` (1.0 at the reference date)."""
        t = self._to_year_fraction(dt)
        if t == 0.0:
            return 1.0
        return self._df_at_time(t)

    def df(self, dt: DateInput) -> float:
        return self.discount_factor(dt)

    def discount_factor_between(self, start: DateInput, end: DateInput) -> float:
        """Discount factor from ``start`` to ``end``, i.e. DF(end) / DF(start)."""
        start_date, end_date = to_date(start), to_date(end)
        if end_date < start_date:
            raise InvalidRange(start_date, end_date)
        return self.discount_factor(end_date) / self.discount_factor(start_date)

    def zero_rate(
        self,
        dt: DateInput,
        compounding: Compounding = Compounding.CONTINUOUS,
        frequency: Frequency = Frequency.ANNUAL,
    ) -> float:
        """Zero rate to ``dt``; at the reference date the short-end limit is returned."""
        t = self._to_year_fraction(dt)
        if t == 0.0:
            return self._short_rate(compounding, frequency)
        return df_to_rate(self._df_at_time(t), t, compounding, frequency)

    def forward_rate(
        self,
        start: DateInput,
        end: DateInput,
        compounding: Optional[Compounding] = None,
        frequency: Frequency = Frequency.ANNUAL,
    ) -> float:
        """Forward rate between two dates, accrued with the curve day count.

        Simple: ``(DF(s)/DF(e) - 1) / tau``; continuous: ``ln(DF(s)/DF(e)) / tau``.
        Defaults to the curve's ``forward_compounding``.
        """
        start_date, end_date = to_date(start), to_date(end)
        if end_date <= start_date:
            raise InvalidRange(
                start_date, end_date, "Forward period end must be after its start"
            )
        tau = self.day_count.year_fraction(start_date, end_date)
        if tau <= 0.0:
            raise InvalidRange(
                start_date, end_date, f"Zero accrual under {self.day_count.name}"
            )
        forward_df = self.discount_factor_between(start_date, end_date)
        return df_to_rate(
            forward_df, tau, compounding or self.forward_compounding, frequency
        )

    def _max_time(self) -> float:
        """Largest curve time the discount function can be evaluated at."""
        return math.inf

    def instantaneous_forward(self, dt: DateInput, bump: float = 1e-6) -> float:
        """Instantaneous forward rate -d ln DF / dt by central difference.

        The difference turns one-sided at the reference date and at the end
        of the evaluable range.
        """
        t = self._to_year_fraction(dt)
        lower = max(t - bump, 0.0)
        upper = t + bump
        limit = self._max_time()
        if t <= limit < upper:
            upper = limit
        df_lower = 1.0 if lower == 0.0 else self._df_at_time(lower)
        return (math.log(df_lower) - math.log(self._df_at_time(upper))) / (upper - lower)

    @abstractmethod
    def _short_rate(self, compounding: Compounding, frequency: Frequency) -> float:
        """Limit of the zero rate as the maturity approaches the reference date."""
