"""Numerical engine for sequential discount curve bootstrapping."""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from datetime import date
from typing import List, Optional, Sequence, Union

from curvelib.conventions.calendars import BusinessDayCalendar, get_calendar
from curvelib.conventions.daycount import DayCountConvention, get_day_count_convention
from curvelib.curves.term_structure import TermStructureBuilder
from curvelib.errors import BootstrapError, CurveLibError, UnsortedQuotes
from curvelib.instruments import Instrument, create_instrument_from_quote
from curvelib.interpolation import get_interpolator_class
from curvelib.interpolation.linear import LinearInterpolator
from curvelib.utils.date import DateLike, to_date
from curvelib.utils.rootfinding import solve

from .config import BootstrapConfig
from .quotes import MarketInstrumentQuote
from .results import BootstrapResult, BuildResult

logger = logging.getLogger(__name__)


class BootstrapEngine:
    """
    Calibrates one pillar per quote, in maturity order.

    Each quote becomes an instrument whose cash flows are worth zero on the
    calibrated curve. With every earlier pillar fixed, the unknown is the
    discount factor at the quote maturity. When all other cash flows fall on
    or before the last calibrated pillar the equation is linear and solved in
    closed form; otherwise the root finder searches the configured bracket.

    Interpolators whose segments depend on later knots (cubic splines) are
    followed by refinement passes that re-solve every pillar against the
    full curve until the pillars stop moving.
    """

    def __init__(
        self,
        reference_date: DateLike,
        quotes: Sequence[MarketInstrumentQuote],
        config: Optional[BootstrapConfig] = None,
    ):
        self.reference_date = to_date(reference_date)
        self.config = config or BootstrapConfig()
        self.quotes = list(quotes)

        self._day_count = get_day_count_convention(self.config.day_count_convention)
        self._calendar = get_calendar(self.config.calendar)
        self._results: List[BootstrapResult] = []
        self._builder = TermStructureBuilder(
            self.reference_date,
            day_count=self._day_count,
            interpolation=self.config.interpolation_method,
            extrapolation=self.config.extrapolation,
            forward_compounding=self.config.forward_compounding,
            name=self.config.name,
        )
        self._local = issubclass(
            get_interpolator_class(self.config.interpolation_method), LinearInterpolator
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def run(self) -> BuildResult:
        """Bootstrap every quote and return the frozen curve with per-pillar results."""
        if not self.quotes:
            raise BootstrapError(None, "Need at least one quote to bootstrap")

        instruments = self._instruments()
        logger.info(
            "Bootstrapping %d quotes from %s (%s, %s)",
            len(instruments),
            self.reference_date,
            self.config.interpolation_method,
            self._day_count.name,
        )

        results = []
        for quote, instrument in zip(self.quotes, instruments):
            results.append(self._calibrate(quote, instrument))

        if not self._local and len(instruments) > 1:
            results = self._refine(instruments, results)

        curve = self._builder.build()
        self._results = results
        logger.info(
            "Bootstrap finished: %d pillars up to %s", len(curve), curve.max_date
        )
        return BuildResult(curve=curve, results=list(results))

    def get_results(self) -> List[BootstrapResult]:
        return list(self._results)

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------
    def _instruments(self) -> List[Instrument]:
        """Instruments for every quote; maturities must strictly increase.

        Maturities are resolved and their order checked before any
        instrument is built.
        """
        adjustment = self.config.business_day_adjustment
        previous: Optional[date] = None
        for index, quote in enumerate(self.quotes):
            try:
                maturity = quote.resolve_maturity(self.reference_date, self._calendar, adjustment)
            except (CurveLibError, ValueError) as exc:
                logger.error("Cannot resolve maturity of %s: %s", quote.label, exc)
                raise BootstrapError(quote, f"Invalid quote {quote.label}: {exc}") from exc
            if previous is not None and maturity <= previous:
                raise UnsortedQuotes(index, previous, maturity)
            previous = maturity

        instruments: List[Instrument] = []
        for quote in self.quotes:
            try:
                instrument = create_instrument_from_quote(
                    self.reference_date,
                    quote,
                    calendar=self._calendar,
                    day_count=self._day_count,
                    adjustment=adjustment,
                )
            except (CurveLibError, ValueError) as exc:
                logger.error("Cannot build instrument for %s: %s", quote.label, exc)
                raise BootstrapError(quote, f"Invalid quote {quote.label}: {exc}") from exc
            instruments.append(instrument)
        return instruments

    # ------------------------------------------------------------------
    # Sequential pass
    # ------------------------------------------------------------------
    def _calibrate(
        self, quote: MarketInstrumentQuote, instrument: Instrument
    ) -> BootstrapResult:
        pillar_date = instrument.last_payment_date
        try:
            if self._has_closed_form(instrument):
                df = instrument.solve_final_discount_factor(self._builder)
                method, iterations, residual = "closed_form", 0, 0.0
                if not math.isfinite(df) or df <= 0.0:
                    raise ValueError(f"Implied discount factor {df} is not positive")
            else:
                root = self._solve_pillar(instrument, pillar_date, None)
                df, method = root.root, root.method
                iterations, residual = root.iterations, root.residual

            self._check_monotone(quote, pillar_date, df)
            self._builder.add_pillar(pillar_date, df)
        except BootstrapError:
            raise
        except (CurveLibError, ValueError, ArithmeticError) as exc:
            logger.error("Bootstrap failed at %s (%s): %s", pillar_date, quote.label, exc)
            raise BootstrapError(
                quote, f"Failed to calibrate {quote.label} at {pillar_date}: {exc}"
            ) from exc

        result = self._result(pillar_date, df, method, iterations, residual)
        log = logger.info if self.config.verbose else logger.debug
        log(
            "Pillar %s df=%.12f zero=%.8f via %s (%d iterations)",
            pillar_date,
            df,
            result.zero_rate,
            method,
            iterations,
        )
        return result

    def _has_closed_form(self, instrument: Instrument) -> bool:
        final = instrument.last_payment_date
        known = self._builder.last_date
        return all(
            cf.payment_date <= known for cf in instrument.cash_flows() if cf.payment_date != final
        )

    def _solve_pillar(self, instrument: Instrument, pillar_date: date, guess: Optional[float]):
        solver = self.config.solver

        def objective(df: float) -> float:
            return instrument.present_value(self._builder.trial_curve(pillar_date, df))

        return solve(
            objective,
            solver.bracket,
            method=solver.method,
            tol=solver.tolerance,
            max_iter=solver.max_iterations,
            initial_guess=guess,
        )

    def _check_monotone(self, quote: MarketInstrumentQuote, pillar_date: date, df: float) -> None:
        pillars = self._builder.pillars
        previous_df = pillars[-1].discount_factor if pillars else 1.0
        if df <= previous_df:
            return
        if self.config.enforce_monotone:
            logger.error(
                "Discount factor increases at %s: %.12f > %.12f",
                pillar_date,
                df,
                previous_df,
            )
            raise BootstrapError(
                quote,
                f"Discount factor increases at {pillar_date} "
                f"({df:.12f} > {previous_df:.12f}) for {quote.label}",
            )
        logger.warning(
            "Discount factor increasing at %s (increase = %.8f)",
            pillar_date,
            df - previous_df,
        )

    # ------------------------------------------------------------------
    # Refinement for non-local interpolation
    # ------------------------------------------------------------------
    def _refine(
        self, instruments: List[Instrument], results: List[BootstrapResult]
    ) -> List[BootstrapResult]:
        tolerance = self.config.solver.tolerance
        for sweep in range(1, self.config.max_refinement_passes + 1):
            max_change = 0.0
            for index, (quote, instrument) in enumerate(zip(self.quotes, instruments)):
                pillar = self._builder.pillars[index]
                try:
                    root = self._solve_pillar(instrument, pillar.date, pillar.discount_factor)
                except CurveLibError as exc:
                    logger.error("Refinement failed at %s (%s): %s", pillar.date, quote.label, exc)
                    raise BootstrapError(
                        quote, f"Failed to refine {quote.label} at {pillar.date}: {exc}"
                    ) from exc
                max_change = max(max_change, abs(root.root - pillar.discount_factor))
                self._builder.set_discount_factor(index, root.root)
                results[index] = self._result(
                    pillar.date, root.root, root.method, root.iterations, root.residual
                )

            logger.debug("Refinement sweep %d: max change %.3e", sweep, max_change)
            if max_change <= tolerance:
                self._check_sequence()
                return results

        raise BootstrapError(
            self.quotes[-1],
            f"Pillars did not settle after {self.config.max_refinement_passes} refinement passes",
        )

    def _check_sequence(self) -> None:
        previous_df = 1.0
        for quote, pillar in zip(self.quotes, self._builder.pillars):
            if pillar.discount_factor > previous_df:
                if self.config.enforce_monotone:
                    raise BootstrapError(
                        quote,
                        f"Discount factor increases at {pillar.date} after refinement",
                    )
                logger.warning("Discount factor increasing at %s after refinement", pillar.date)
            previous_df = pillar.discount_factor

    def _result(
        self, pillar_date: date, df: float, method: str, iterations: int, residual: float
    ) -> BootstrapResult:
        t = self._day_count.year_fraction(self.reference_date, pillar_date)
        return BootstrapResult(
            maturity=pillar_date,
            discount_factor=df,
            zero_rate=-math.log(df) / t,
            method=method,
            iterations=iterations,
            residual=residual,
        )


def bootstrap(
    reference_date: DateLike,
    quotes: Sequence[MarketInstrumentQuote],
    day_count: Union[str, DayCountConvention, None] = None,
    interpolation: Optional[str] = None,
    *,
    config: Optional[BootstrapConfig] = None,
    calendar: Union[str, BusinessDayCalendar, None] = None,
):
    """
    Build a term structure from quotes sorted by strictly increasing maturity.

    Args:
        reference_date: Curve valuation date (discount factor 1.0)
        quotes: Market quotes, one pillar each
        day_count: Time-axis day count (overrides ``config``)
        interpolation: Interpolation method name (overrides ``config``)
        config: Full bootstrap configuration
        calendar: Calendar for tenor maturities and schedules (overrides ``config``)

    Returns:
        The calibrated, immutable TermStructure

    Raises:
        UnsortedQuotes: If quote maturities are not strictly increasing
        BootstrapError: If any quote cannot be calibrated
    """
    config = _merged_config(config, day_count, interpolation, calendar)
    return BootstrapEngine(reference_date, quotes, config).run().curve


def _merged_config(
    config: Optional[BootstrapConfig],
    day_count,
    interpolation: Optional[str],
    calendar,
) -> BootstrapConfig:
    config = config or BootstrapConfig()
    overrides = {}
    if day_count is not None:
        overrides["day_count_convention"] = day_count
    if interpolation is not None:
        overrides["interpolation_method"] = interpolation
    if calendar is not None:
        overrides["calendar"] = calendar
    return replace(config, **overrides) if overrides else config
