"""Bootstrap module for curve construction."""

from .config import DEFAULT_BRACKET, BootstrapConfig, SolverConfig
from .engine import BootstrapEngine, bootstrap
from .quotes import InstrumentKind, MarketInstrumentQuote
from .results import BootstrapResult, BuildResult

__all__ = [
    # Configuration
    "BootstrapConfig",
    "SolverConfig",
    "DEFAULT_BRACKET",
    # Inputs
    "MarketInstrumentQuote",
    "InstrumentKind",
    # Engine
    "BootstrapEngine",
    "bootstrap",
    # Results
    "BootstrapResult",
    "BuildResult",
]
