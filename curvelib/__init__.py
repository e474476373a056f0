"""Interest Rate Term Structure Library.

This package builds discount curves from market quotes and prices
interest-rate instruments consistently against them.

Key modules:
- curves: TermStructure, its builder and the bootstrap engine
- interpolation: Linear, log-linear and cubic interpolators
- instruments: Deposits, swaps, zero-coupon and fixed-rate bonds
- conventions: Day counts, calendars and shared enums
- business_calendar: Business-day adjustment, spot dates and schedules
- utils: Dates, tenors and root finding
"""

from .conventions import (
    BusinessDayAdjustment,
    Compounding,
    Frequency,
    get_calendar,
    get_day_count_convention,
    year_fraction,
)
from .curves import (
    BootstrapConfig,
    BootstrapEngine,
    CurvePillar,
    InstrumentKind,
    MarketInstrumentQuote,
    SolverConfig,
    TermStructure,
    TermStructureBuilder,
    bootstrap,
)
from .errors import CurveLibError
from .interpolation import ExtrapolationPolicy, InterpolationSpace, create_interpolator
from .utils import Tenor

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "TermStructure",
    "TermStructureBuilder",
    "CurvePillar",
    "bootstrap",
    "BootstrapEngine",
    "BootstrapConfig",
    "SolverConfig",
    "MarketInstrumentQuote",
    "InstrumentKind",
    "ExtrapolationPolicy",
    "InterpolationSpace",
    "create_interpolator",
    "BusinessDayAdjustment",
    "Compounding",
    "Frequency",
    "get_calendar",
    "get_day_count_convention",
    "year_fraction",
    "Tenor",
    "CurveLibError",
]
