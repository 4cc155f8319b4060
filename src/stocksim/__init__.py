"""stocksim: investment simulation and projection engine.

Replays a buy-and-hold / cost-averaging policy over a daily price history
with cash and stock dividends, summarizes performance, and projects future
wealth with a Monte Carlo model.

Quick start::

    from stocksim import SimulationConfig, simulate
    config = SimulationConfig("FPT", 100_000_000, date(2020, 1, 2), date(2024, 12, 31))
    result = simulate(config, prices, dividends)
"""

from __future__ import annotations

from typing import Iterable

import numpy as np

from stocksim.adjust import unadjust
from stocksim.cache import HistoryCache, MemoryCache, NoCache
from stocksim.config import (
    HistoryConfig,
    SimulationSettings,
    history_config_from_env,
    settings_from_env,
)
from stocksim.dividends import compute_cagr
from stocksim.engine import SimulationEngine
from stocksim.errors import (
    FeedError,
    InvalidParameterError,
    LedgerInvariantError,
    NoPriceDataError,
    SimulationErrorCode,
    StockSimError,
)
from stocksim.feeds import BaseHistoryFeed, StaticFeed, parse_dividend_description
from stocksim.ledger import TimelineLedger
from stocksim.loader import HistoryLoader, create_loader
from stocksim.models import (
    DividendEvent,
    DividendGrowth,
    DividendType,
    DividendYear,
    MonteCarloResult,
    MonthlyPerformance,
    Percentiles,
    PricePoint,
    SimulationConfig,
    SimulationResult,
    TimelineEvent,
    TimelineEventType,
    YearlyPerformance,
)
from stocksim.montecarlo import MonteCarloProjector
from stocksim.timing import TimingAnalysis, analyze_optimal_timing

__version__ = "0.1.0"

__all__ = [
    # Entry points
    "simulate",
    "project_monte_carlo",
    "compute_dividend_cagr",
    "analyze_optimal_timing",
    # Components
    "SimulationEngine",
    "TimelineLedger",
    "MonteCarloProjector",
    "unadjust",
    # History boundary
    "HistoryLoader",
    "create_loader",
    "HistoryCache",
    "MemoryCache",
    "NoCache",
    "BaseHistoryFeed",
    "StaticFeed",
    "parse_dividend_description",
    # Config
    "SimulationSettings",
    "HistoryConfig",
    "settings_from_env",
    "history_config_from_env",
    # Errors
    "StockSimError",
    "SimulationErrorCode",
    "NoPriceDataError",
    "InvalidParameterError",
    "LedgerInvariantError",
    "FeedError",
    # Models
    "PricePoint",
    "DividendEvent",
    "DividendType",
    "SimulationConfig",
    "TimelineEvent",
    "TimelineEventType",
    "SimulationResult",
    "MonthlyPerformance",
    "YearlyPerformance",
    "MonteCarloResult",
    "Percentiles",
    "DividendGrowth",
    "DividendYear",
    "TimingAnalysis",
]


def simulate(
    config: SimulationConfig,
    prices: Iterable[PricePoint],
    dividends: Iterable[DividendEvent] = (),
    settings: SimulationSettings | None = None,
) -> SimulationResult:
    """Run one simulation with default (or given) market settings."""
    return SimulationEngine(settings).run(config, prices, dividends)


def project_monte_carlo(
    initial_amount: float,
    monthly_contribution: float,
    years: int,
    expected_return_rate: float = 0.12,
    volatility: float = 0.20,
    *,
    rng: np.random.Generator | None = None,
    seed: int | None = None,
) -> list[MonteCarloResult]:
    """Project wealth percentiles for years 0..``years``."""
    projector = MonteCarloProjector(rng=rng, seed=seed)
    return projector.project(
        initial_amount, monthly_contribution, years,
        expected_return_rate=expected_return_rate,
        volatility=volatility,
    )


def compute_dividend_cagr(dividends: Iterable[DividendEvent]) -> DividendGrowth:
    """Year-over-year cash dividend growth with 3- and 5-year CAGR."""
    return compute_cagr(dividends)
