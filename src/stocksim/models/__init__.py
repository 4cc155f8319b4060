"""Simulation data models."""

from stocksim.models.price import PricePoint
from stocksim.models.dividend import DividendEvent, DividendType
from stocksim.models.simulation import SimulationConfig
from stocksim.models.timeline import TimelineEvent, TimelineEventType
from stocksim.models.result import MonthlyPerformance, SimulationResult, YearlyPerformance
from stocksim.models.projection import MonteCarloResult, Percentiles
from stocksim.models.growth import DividendGrowth, DividendYear

__all__ = [
    "PricePoint",
    "DividendEvent",
    "DividendType",
    "SimulationConfig",
    "TimelineEvent",
    "TimelineEventType",
    "MonthlyPerformance",
    "YearlyPerformance",
    "SimulationResult",
    "MonteCarloResult",
    "Percentiles",
    "DividendGrowth",
    "DividendYear",
]
