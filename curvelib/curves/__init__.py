"""
Curves package - discount term structures and their calibration.

Main APIs:
---------
    - TermStructure: immutable discount curve (DF, zero, forward queries)
    - TermStructureBuilder: mutable pillar accumulator used during calibration
    - bootstrap: one-call curve construction from market quotes
    - BootstrapEngine: bootstrap with per-pillar diagnostics
"""

from .base import BaseCurve
from .bootstrap import (
    BootstrapConfig,
    BootstrapEngine,
    BootstrapResult,
    BuildResult,
    InstrumentKind,
    MarketInstrumentQuote,
    SolverConfig,
    bootstrap,
)
from .helpers import df_to_rate, rate_to_df
from .pillar import CurvePillar
from .term_structure import TermStructure, TermStructureBuilder

__all__ = [
    # Curves
    "BaseCurve",
    "CurvePillar",
    "TermStructure",
    "TermStructureBuilder",
    # Bootstrap
    "BootstrapConfig",
    "SolverConfig",
    "BootstrapEngine",
    "BootstrapResult",
    "BuildResult",
    "InstrumentKind",
    "MarketInstrumentQuote",
    "bootstrap",
    # Helpers
    "df_to_rate",
    "rate_to_df",
]
