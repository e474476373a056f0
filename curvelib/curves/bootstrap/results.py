"""Result dataclasses for the bootstrapping stack."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List

import pandas as pd

from curvelib.curves.term_structure import TermStructure


@dataclass(frozen=True)
class BootstrapResult:
    """Single pillar solved during the bootstrap."""

    maturity: date
    discount_factor: float
    zero_rate: float
    method: str
    iterations: int = 0
    residual: float = 0.0


@dataclass(frozen=True)
class BuildResult:
    """Aggregate output returned by :class:`BootstrapEngine`."""

    curve: TermStructure
    results: List[BootstrapResult]

    def __iter__(self):
        yield self.curve
        yield self.results

    def to_frame(self) -> pd.DataFrame:
        """Per-pillar calibration report."""
        return pd.DataFrame(
            [
                {
                    "maturity": r.maturity,
                    "discount_factor": r.discount_factor,
                    "zero_rate": r.zero_rate,
                    "method": r.method,
                    "iterations": r.iterations,
                    "residual": r.residual,
                }
                for r in self.results
            ]
        )
