"""
QuantLib-backed day count convention implementations.

Every convention is a stateless strategy object converting a date interval
into a year fraction. Intervals with ``end < start`` are rejected.
"""

from datetime import date, datetime
from typing import Union

import QuantLib as ql

from curvelib.errors import InvalidRange, UnknownConventionError
from curvelib.utils.date import to_date


def _to_ql_date(dt: Union[date, datetime]) -> ql.Date:
    """Convert Python date/datetime to QuantLib Date."""
    py_date = to_date(dt)
    return ql.Date(py_date.day, py_date.month, py_date.year)


class DayCountConvention:
    """Base class for QuantLib-backed day count conventions."""

    def __init__(self, name: str, ql_daycount: ql.DayCounter):
        self.name = name
        self._ql_daycount = ql_daycount

    def _validated(self, start, end):
        start_date = to_date(start)
        end_date = to_date(end)
        if end_date < start_date:
            raise InvalidRange(start_date, end_date)
        return start_date, end_date

    def year_fraction(
        self, start: Union[date, datetime], end: Union[date, datetime]
    ) -> float:
        """Year fraction between two dates; exactly 0.0 when start == end."""
        start_date, end_date = self._validated(start, end)
        if start_date == end_date:
            return 0.0
        return self._ql_daycount.yearFraction(
            _to_ql_date(start_date), _to_ql_date(end_date)
        )

    def day_count(
        self, start: Union[date, datetime], end: Union[date, datetime]
    ) -> int:
        """Number of days between two dates under this convention."""
        start_date, end_date = self._validated(start, end)
        return self._ql_daycount.dayCount(
            _to_ql_date(start_date), _to_ql_date(end_date)
        )

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r})"


class Actual360(DayCountConvention):
    """ACT/360 day count convention.

    Used for:
    - Money market deposits
    - Floating legs
    """

    def __init__(self):
        super().__init__("ACT/360", ql.Actual360())


class Actual365Fixed(DayCountConvention):
    """ACT/365F (ACT/365 Fixed) day count convention.

    Default time axis for curves.
    """

    def __init__(self):
        super().__init__("ACT/365F", ql.Actual365Fixed())


class ActualActualISDA(DayCountConvention):
    """ACT/ACT ISDA day count convention."""

    def __init__(self):
        super().__init__("ACT/ACT", ql.ActualActual(ql.ActualActual.ISDA))


class Thirty360European(DayCountConvention):
    """30E/360 (30/360 European) day count convention."""

    def __init__(self):
        super().__init__("30E/360", ql.Thirty360(ql.Thirty360.European))


class Thirty360US(DayCountConvention):
    """30U/360 (30/360 US - Bond Basis) day count convention."""

    def __init__(self):
        super().__init__("30U/360", ql.Thirty360(ql.Thirty360.BondBasis))


class Thirty360Simple(DayCountConvention):
    """30/360 with both day-of-month values capped at 30.

    QuantLib has no direct equivalent, so the day count is computed here:
        days = 360*(Y2-Y1) + 30*(M2-M1) + min(D2,30) - min(D1,30)
    """

    def __init__(self):
        super().__init__("30/360S", ql.Thirty360(ql.Thirty360.BondBasis))

    def day_count(
        self, start: Union[date, datetime], end: Union[date, datetime]
    ) -> int:
        start_date, end_date = self._validated(start, end)
        d1 = min(start_date.day, 30)
        d2 = min(end_date.day, 30)
        return (
            360 * (end_date.year - start_date.year)
            + 30 * (end_date.month - start_date.month)
            + d2
            - d1
        )

    def year_fraction(
        self, start: Union[date, datetime], end: Union[date, datetime]
    ) -> float:
        return self.day_count(start, end) / 360.0


# Pre-defined day count convention instances
ACT_360 = Actual360()
ACT_365F = Actual365Fixed()
ACT_ACT = ActualActualISDA()
THIRTY_360E = Thirty360European()
THIRTY_360U = Thirty360US()
THIRTY_360S = Thirty360Simple()

# Registry
DAY_COUNT_CONVENTIONS = {
    "ACT/360": ACT_360,
    "ACTUAL/360": ACT_360,
    "ACT/365": ACT_365F,
    "ACT/365F": ACT_365F,
    "ACTUAL/365": ACT_365F,
    "ACTUAL/365F": ACT_365F,
    "ACT/ACT": ACT_ACT,
    "ACTUAL/ACTUAL": ACT_ACT,
    "ACT/ACT ISDA": ACT_ACT,
    "30E/360": THIRTY_360E,
    "30/360E": THIRTY_360E,
    "30/360 EUROPEAN": THIRTY_360E,
    "30U/360": THIRTY_360U,
    "30/360": THIRTY_360U,
    "30/360 US": THIRTY_360U,
    "30/360S": THIRTY_360S,
    "30/360 SIMPLE": THIRTY_360S,
}


def get_day_count_convention(name: Union[str, DayCountConvention]) -> DayCountConvention:
    """Get a day count convention by name (instances are passed through)."""
    if isinstance(name, DayCountConvention):
        return name
    name_upper = name.upper().strip()
    if name_upper not in DAY_COUNT_CONVENTIONS:
        raise UnknownConventionError(
            f"Unknown day count convention: {name}. "
            f"Available: {list(DAY_COUNT_CONVENTIONS.keys())}"
        )
    return DAY_COUNT_CONVENTIONS[name_upper]


def year_fraction(
    start: Union[date, datetime],
    end: Union[date, datetime],
    convention: Union[str, DayCountConvention] = ACT_365F,
) -> float:
    """Year fraction between start and end under the given convention."""
    return get_day_count_convention(convention).year_fraction(start, end)
