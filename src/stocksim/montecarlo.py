"""Monte Carlo wealth projection with geometric Brownian motion."""

from __future__ import annotations

import logging
from math import exp, sqrt

import numpy as np

from stocksim.config import SimulationSettings
from stocksim.errors import InvalidParameterError
from stocksim.models.projection import MonteCarloResult, Percentiles

LOGGER = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12
PERCENTILE_LEVELS = (0.10, 0.50, 0.90)


def box_muller(u1: np.ndarray, u2: np.ndarray) -> np.ndarray:
    """Standard normal samples from two arrays of uniform draws.

    ``u1`` must lie in (0, 1]; ``u2`` in [0, 1).
    """
    return np.sqrt(-2.0 * np.log(u1)) * np.cos(2.0 * np.pi * u2)


def percentiles_of(values: np.ndarray) -> Percentiles:
    """Read p10/p50/p90 from the sorted values at index floor(n * level)."""
    ordered = np.sort(values)
    n = len(ordered)
    p10, p50, p90 = (float(ordered[int(n * level)]) for level in PERCENTILE_LEVELS)
    return Percentiles(p10=p10, p50=p50, p90=p90)


class MonteCarloProjector:
    """Projects future wealth from a lump sum plus monthly contributions.

    Every path starts at ``initial_amount`` and moves in monthly steps::

        wealth = wealth * exp((mu - sigma**2 / 2) * dt + sigma * sqrt(dt) * Z)
                 + monthly_contribution

    with ``dt = 1/12`` and ``Z`` drawn by Box-Muller from the injected
    generator. All paths advance together as one numpy vector; at the end
    of each year only the three percentiles are kept.

    Args:
        num_paths: Number of simulated paths.
        rng: Random generator. Takes precedence over ``seed``.
        seed: Seed for a fresh ``numpy.random.default_rng``.
        settings: Source of default path count, drift and volatility.
    """

    def __init__(
        self,
        num_paths: int | None = None,
        rng: np.random.Generator | None = None,
        seed: int | None = None,
        settings: SimulationSettings | None = None,
    ) -> None:
        self.settings = settings or SimulationSettings()
        self.num_paths = self.settings.monte_carlo_paths if num_paths is None else num_paths
        if self.num_paths <= 0:
            raise InvalidParameterError(f"num_paths must be positive, got {self.num_paths}")
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def project(
        self,
        initial_amount: float,
        monthly_contribution: float,
        years: int,
        expected_return_rate: float | None = None,
        volatility: float | None = None,
    ) -> list[MonteCarloResult]:
        """Run the simulation and summarize each year.

        Args:
            initial_amount: Wealth at year 0.
            monthly_contribution: Added after every monthly step.
            years: Projection horizon in whole years (> 0).
            expected_return_rate: Annual drift (default 0.12).
            volatility: Annual volatility (default 0.20).

        Returns:
            ``years + 1`` results, for year 0 through ``years``.

        Raises:
            InvalidParameterError: If ``years`` is not a positive integer
                or ``volatility`` is negative.
        """
        if isinstance(years, bool) or not isinstance(years, (int, np.integer)) or years <= 0:
            raise InvalidParameterError(f"years must be a positive integer, got {years!r}")
        mu = self.settings.expected_return_rate if expected_return_rate is None else expected_return_rate
        sigma = self.settings.volatility if volatility is None else volatility
        if sigma < 0:
            raise InvalidParameterError(f"volatility must be >= 0, got {sigma}")

        dt = 1.0 / MONTHS_PER_YEAR
        drift = (mu - 0.5 * sigma * sigma) * dt
        diffusion = sigma * sqrt(dt)
        contribution = float(monthly_contribution)

        wealth = np.full(self.num_paths, float(initial_amount))
        results = [MonteCarloResult(year=0, percentiles=percentiles_of(wealth))]

        for step in range(1, int(years) * MONTHS_PER_YEAR + 1):
            u1 = 1.0 - self.rng.random(self.num_paths)
            u2 = self.rng.random(self.num_paths)
            z = box_muller(u1, u2)
            wealth = wealth * np.exp(drift + diffusion * z) + contribution
            if step % MONTHS_PER_YEAR == 0:
                results.append(MonteCarloResult(
                    year=step // MONTHS_PER_YEAR,
                    percentiles=percentiles_of(wealth),
                ))

        LOGGER.debug(
            "Projected %d paths over %d years (mu=%.4f, sigma=%.4f): median %.2f",
            self.num_paths, years, mu, sigma, results[-1].percentiles.p50,
        )
        return results


def deterministic_value(
    initial_amount: float,
    monthly_contribution: float,
    months: int,
    expected_return_rate: float,
) -> float:
    """Wealth after ``months`` steps of the zero-volatility model."""
    factor = exp(expected_return_rate / MONTHS_PER_YEAR)
    wealth = float(initial_amount)
    for _ in range(months):
        wealth = wealth * factor + monthly_contribution
    return wealth
