"""Monte Carlo projection data models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Percentiles:
    """Wealth at the 10th, 50th and 90th percentile across paths."""

    p10: float
    p50: float
    p90: float


@dataclass(frozen=True)
class MonteCarloResult:
    """Projected wealth distribution at the end of one year.

    Attributes:
        year: Years from now (0 is the starting point).
        percentiles: Bad-case, median and good-case wealth.
    """

    year: int
    percentiles: Percentiles
