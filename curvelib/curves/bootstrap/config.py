"""Configuration objects for curve bootstrapping."""

from dataclasses import dataclass, field
from typing import Tuple, Union

from curvelib.conventions.calendars import Calendar
from curvelib.conventions.types import BusinessDayAdjustment, Compounding
from curvelib.interpolation import ExtrapolationPolicy
from curvelib.utils.rootfinding import DEFAULT_MAX_ITERATIONS, DEFAULT_TOLERANCE

DEFAULT_BRACKET = (1e-6, 1.5)


@dataclass
class SolverConfig:
    """Root-finder settings used when a pillar has no closed form."""

    method: str = "newton"
    tolerance: float = DEFAULT_TOLERANCE
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    bracket: Tuple[float, float] = DEFAULT_BRACKET

    def __post_init__(self):
        lower, upper = self.bracket
        if not 0.0 < lower < upper:
            raise ValueError(f"Invalid discount factor bracket {self.bracket}")
        if self.tolerance <= 0:
            raise ValueError("Solver tolerance must be positive")
        if self.max_iterations < 1:
            raise ValueError("Solver needs at least one iteration")


@dataclass
class BootstrapConfig:
    """Configuration for bootstrap process."""

    interpolation_method: str = "LOG_LINEAR"
    day_count_convention: str = "ACT/365F"
    calendar: Union[str, Calendar] = "TARGET"
    extrapolation: ExtrapolationPolicy = ExtrapolationPolicy.ERROR
    forward_compounding: Compounding = Compounding.SIMPLE
    business_day_adjustment: BusinessDayAdjustment = BusinessDayAdjustment.MODIFIED_FOLLOWING
    enforce_monotone: bool = True
    max_refinement_passes: int = 50
    solver: SolverConfig = field(default_factory=SolverConfig)
    name: str = ""
    verbose: bool = False
