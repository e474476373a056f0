"""
Immutable discount term structure and its construction-time builder.
"""

import bisect
import logging
import math
from dataclasses import dataclass, field, replace
from datetime import date
from typing import List, Optional, Sequence, Tuple, Type, Union

import pandas as pd

from curvelib.conventions.daycount import (
    ACT_365F,
    DayCountConvention,
    get_day_count_convention,
)
from curvelib.conventions.types import Compounding, Frequency
from curvelib.errors import (
    ExtrapolationError,
    InsufficientPointsError,
    PillarOrderError,
)
from curvelib.interpolation import (
    ExtrapolationPolicy,
    InterpolationSpace,
    Interpolator,
    create_interpolator,
    get_interpolator_class,
    interpolator_name,
)
from curvelib.utils.date import to_date

from .base import BaseCurve, DateInput
from .helpers import df_to_rate, rate_to_df
from .pillar import CurvePillar

logger = logging.getLogger(__name__)

DEFAULT_INTERPOLATION = "LOG_LINEAR"


@dataclass(frozen=True)
class TermStructure(BaseCurve):
    """
    Immutable discount curve over strictly increasing pillars.

    By default discount factors are interpolated and the reference date is
    an implicit anchor with discount factor 1.0 at time 0, so the
    interpolator runs over ``[0, t_1, ..., t_n]`` and queries between the
    reference date and the first pillar interpolate.

    With ``interpolation_space=ZERO_RATE`` the interpolator runs over the
    pillars' continuously compounded zero rates instead and
    ``DF(t) = exp(-t * r(t))``. There is no anchor knot: the first pillar's
    zero rate is held flat back to the reference date.
    Pillar times are year fractions under ``day_count``.
    """

    reference_date: date
    pillars: Tuple[CurvePillar, ...]
    day_count: DayCountConvention = ACT_365F
    interpolation: str = DEFAULT_INTERPOLATION
    extrapolation: ExtrapolationPolicy = ExtrapolationPolicy.ERROR
    forward_compounding: Compounding = Compounding.SIMPLE
    name: str = ""
    interpolation_space: InterpolationSpace = InterpolationSpace.DISCOUNT_FACTOR
    _interpolator: Interpolator = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        reference_date = to_date(self.reference_date)
        day_count = get_day_count_convention(self.day_count)
        interpolation = interpolator_name(self.interpolation)
        space = InterpolationSpace(self.interpolation_space)

        if not self.pillars:
            raise InsufficientPointsError(0, 1)

        pillars: List[CurvePillar] = []
        previous = reference_date
        for pillar in self.pillars:
            if pillar.date <= previous:
                raise PillarOrderError(
                    f"Pillar {pillar.date} must be after {previous} "
                    f"(pillars strictly increasing after reference date {reference_date})"
                )
            t = day_count.year_fraction(reference_date, pillar.date)
            pillars.append(replace(pillar, time=t) if pillar.time != t else pillar)
            previous = pillar.date

        object.__setattr__(self, "reference_date", reference_date)
        object.__setattr__(self, "pillars", tuple(pillars))
        object.__setattr__(self, "day_count", day_count)
        object.__setattr__(self, "interpolation", interpolation)
        object.__setattr__(self, "extrapolation", ExtrapolationPolicy(self.extrapolation))
        object.__setattr__(self, "forward_compounding", Compounding(self.forward_compounding))
        object.__setattr__(self, "interpolation_space", space)
        if space is InterpolationSpace.ZERO_RATE:
            knots = ([p.time for p in pillars], [p.zero_rate for p in pillars])
        else:
            knots = (
                [0.0] + [p.time for p in pillars],
                [1.0] + [p.discount_factor for p in pillars],
            )
        object.__setattr__(
            self, "_interpolator", create_interpolator(interpolation, *knots, self.extrapolation)
        )

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------
    @classmethod
    def from_pillars(
        cls,
        reference_date: DateInput,
        dates: Sequence[DateInput],
        discount_factors: Sequence[float],
        day_count: Union[str, DayCountConvention] = ACT_365F,
        interpolation: Union[str, Type[Interpolator]] = DEFAULT_INTERPOLATION,
        extrapolation: ExtrapolationPolicy = ExtrapolationPolicy.ERROR,
        forward_compounding: Compounding = Compounding.SIMPLE,
        name: str = "",
        interpolation_space: InterpolationSpace = InterpolationSpace.DISCOUNT_FACTOR,
    ) -> "TermStructure":
        """Build a curve from parallel sequences of pillar dates and discount factors."""
        if len(dates) != len(discount_factors):
            raise ValueError("Pillar dates and discount factors must have same length")
        pillars = tuple(
            CurvePillar(to_date(d), float(df)) for d, df in zip(dates, discount_factors)
        )
        for pillar in pillars:
            if pillar.discount_factor > 1.0:
                logger.warning(
                    "Discount factor above one at %s (%.10f): negative rates implied",
                    pillar.date,
                    pillar.discount_factor,
                )
        return cls(
            reference_date=to_date(reference_date),
            pillars=pillars,
            day_count=day_count,
            interpolation=interpolation,
            extrapolation=extrapolation,
            forward_compounding=forward_compounding,
            name=name,
            interpolation_space=interpolation_space,
        )

    @classmethod
    def from_zero_rates(
        cls,
        reference_date: DateInput,
        dates: Sequence[DateInput],
        zero_rates: Sequence[float],
        compounding: Compounding = Compounding.CONTINUOUS,
        frequency: Frequency = Frequency.ANNUAL,
        day_count: Union[str, DayCountConvention] = ACT_365F,
        **kwargs,
    ) -> "TermStructure":
        """Build a curve from zero (spot) rates quoted at pillar dates."""
        if len(dates) != len(zero_rates):
            raise ValueError("Pillar dates and zero rates must have same length")
        reference = to_date(reference_date)
        day_count = get_day_count_convention(day_count)
        dfs = [
            rate_to_df(r, day_count.year_fraction(reference, to_date(d)), compounding, frequency)
            for d, r in zip(dates, zero_rates)
        ]
        return cls.from_pillars(reference, dates, dfs, day_count=day_count, **kwargs)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def _df_at_time(self, time: float) -> float:
        if self.interpolation_space is InterpolationSpace.ZERO_RATE:
            return math.exp(-time * self._interpolator.value_at(max(time, self.pillars[0].time)))
        return self._interpolator.value_at(time)

    def _max_time(self) -> float:
        if self.extrapolation == ExtrapolationPolicy.ERROR:
            return self.pillars[-1].time
        return math.inf

    def _short_rate(self, compounding: Compounding, frequency: Frequency) -> float:
        first = self.pillars[0]
        return df_to_rate(first.discount_factor, first.time, compounding, frequency)

    @property
    def pillar_dates(self) -> Tuple[date, ...]:
        return tuple(p.date for p in self.pillars)

    @property
    def discount_factors(self) -> Tuple[float, ...]:
        return tuple(p.discount_factor for p in self.pillars)

    @property
    def times(self) -> Tuple[float, ...]:
        return tuple(p.time for p in self.pillars)

    @property
    def max_date(self) -> date:
        return self.pillars[-1].date

    def __len__(self) -> int:
        return len(self.pillars)

    # ------------------------------------------------------------------
    # Derived curves
    # ------------------------------------------------------------------
    def with_pillar(self, pillar_date: DateInput, discount_factor: float) -> "TermStructure":
        """Return a new curve with an extra pillar inserted in date order."""
        pillar = CurvePillar(to_date(pillar_date), float(discount_factor))
        dates = list(self.pillar_dates)
        if pillar.date in dates:
            raise PillarOrderError(f"Duplicate pillar date {pillar.date}")
        pillars = list(self.pillars)
        pillars.insert(bisect.bisect_left(dates, pillar.date), pillar)
        return replace(self, pillars=tuple(pillars))

    def shifted(self, shift_bp: float) -> "TermStructure":
        """
        Create a parallel shifted version of the curve.

        Args:
            shift_bp: Parallel shift of continuously compounded zero rates in basis points

        Returns:
            New shifted curve
        """
        shift_decimal = shift_bp / 10000.0
        pillars = tuple(
            CurvePillar(p.date, p.discount_factor * math.exp(-shift_decimal * p.time))
            for p in self.pillars
        )
        name = f"{self.name}_shifted_{shift_bp}bp" if self.name else self.name
        return replace(self, pillars=pillars, name=name)

    def to_frame(self) -> pd.DataFrame:
        """Pillar table with date, time, discount factor and continuous zero rate."""
        return pd.DataFrame(
            {
                "date": [p.date for p in self.pillars],
                "time": [p.time for p in self.pillars],
                "discount_factor": [p.discount_factor for p in self.pillars],
                "zero_rate": [p.zero_rate for p in self.pillars],
            }
        )

    def __str__(self) -> str:
        label = self.name or "TermStructure"
        return (
            f"{label}({self.reference_date}, {len(self.pillars)} pillars, "
            f"{self.interpolation}, {self.day_count.name})"
        )


class TermStructureBuilder:
    """Mutable pillar accumulator used while a curve is being calibrated.

    Never shared; ``build()`` publishes an immutable :class:`TermStructure`.
    While fewer pillars exist than the interpolation method needs, interim
    queries fall back to log-linear interpolation.
    """

    def __init__(
        self,
        reference_date: DateInput,
        day_count: Union[str, DayCountConvention] = ACT_365F,
        interpolation: Union[str, Type[Interpolator]] = DEFAULT_INTERPOLATION,
        extrapolation: ExtrapolationPolicy = ExtrapolationPolicy.ERROR,
        forward_compounding: Compounding = Compounding.SIMPLE,
        name: str = "",
    ):
        self.reference_date = to_date(reference_date)
        self.day_count = get_day_count_convention(day_count)
        self.interpolation = interpolator_name(interpolation)
        self._min_knots = get_interpolator_class(self.interpolation).min_points
        self.extrapolation = ExtrapolationPolicy(extrapolation)
        self.forward_compounding = Compounding(forward_compounding)
        self.name = name
        self._pillars: List[CurvePillar] = []

    @property
    def pillars(self) -> Tuple[CurvePillar, ...]:
        return tuple(self._pillars)

    @property
    def last_date(self) -> date:
        """Date of the last pillar, or the reference date when empty."""
        return self._pillars[-1].date if self._pillars else self.reference_date

    def __len__(self) -> int:
        return len(self._pillars)

    def add_pillar(self, pillar_date: DateInput, discount_factor: float) -> CurvePillar:
        """Append a pillar; its date must be after every existing pillar."""
        pillar = CurvePillar(to_date(pillar_date), float(discount_factor))
        if pillar.date <= self.last_date:
            raise PillarOrderError(
                f"Pillar {pillar.date} must be after the last pillar date {self.last_date}"
            )
        if pillar.discount_factor > 1.0:
            logger.warning(
                "Discount factor above one at %s (%.10f): negative rates implied",
                pillar.date,
                pillar.discount_factor,
            )
        self._pillars.append(pillar)
        logger.debug("Added pillar %s df=%.12f", pillar.date, pillar.discount_factor)
        return pillar

    def insert_pillar(self, pillar_date: DateInput, discount_factor: float) -> CurvePillar:
        """Insert a pillar at its date position; duplicate dates are rejected."""
        pillar = CurvePillar(to_date(pillar_date), float(discount_factor))
        if pillar.date <= self.reference_date:
            raise PillarOrderError(
                f"Pillar {pillar.date} must be after reference date {self.reference_date}"
            )
        dates = [p.date for p in self._pillars]
        if pillar.date in dates:
            raise PillarOrderError(f"Duplicate pillar date {pillar.date}")
        self._pillars.insert(bisect.bisect_left(dates, pillar.date), pillar)
        return pillar

    def set_discount_factor(self, index: int, discount_factor: float) -> None:
        """Replace the discount factor of an existing pillar."""
        self._pillars[index] = CurvePillar(self._pillars[index].date, float(discount_factor))

    def curve(self, pillars: Optional[Sequence[CurvePillar]] = None) -> TermStructure:
        """Interim curve over ``pillars`` (defaults to the current ones)."""
        pillars = tuple(self._pillars if pillars is None else pillars)
        method = self.interpolation
        if len(pillars) + 1 < self._min_knots:
            logger.debug(
                "%d knots are too few for %s; using LOG_LINEAR for the interim curve",
                len(pillars) + 1,
                method,
            )
            method = DEFAULT_INTERPOLATION
        return self._make(pillars, method)

    def trial_curve(self, pillar_date: date, discount_factor: float) -> TermStructure:
        """Interim curve with one candidate pillar appended or replaced."""
        pillars = [p for p in self._pillars if p.date != pillar_date]
        pillars.append(CurvePillar(pillar_date, discount_factor))
        pillars.sort(key=lambda p: p.date)
        return self.curve(pillars)

    def discount_factor(self, dt: DateInput) -> float:
        """Discount factor on the interim curve."""
        query = to_date(dt)
        if not self._pillars:
            if query == self.reference_date:
                return 1.0
            t = self.day_count.year_fraction(self.reference_date, query)
            raise ExtrapolationError(t, 0.0, 0.0)
        return self.curve().discount_factor(query)

    def build(self) -> TermStructure:
        """Freeze the accumulated pillars into a :class:`TermStructure`."""
        if not self._pillars:
            raise InsufficientPointsError(0, 1)
        return self._make(tuple(self._pillars), self.interpolation)

    def _make(self, pillars: Tuple[CurvePillar, ...], method: str) -> TermStructure:
        return TermStructure(
            reference_date=self.reference_date,
            pillars=pillars,
            day_count=self.day_count,
            interpolation=method,
            extrapolation=self.extrapolation,
            forward_compounding=self.forward_compounding,
            name=self.name,
        )
