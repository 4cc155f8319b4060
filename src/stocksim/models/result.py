"""Simulation result data models."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from stocksim.models.timeline import TimelineEvent


@dataclass(frozen=True)
class MonthlyPerformance:
    """Price performance of one calendar month.

    Attributes:
        month: Month key, ``YYYY-MM``.
        open: Open of the month's first trading day.
        close: Close of the month's last trading day.
        high: Highest high of the month.
        low: Lowest low of the month.
        return_pct: (close - open) / open in percent.
    """

    month: str
    open: Decimal
    close: Decimal
    high: Decimal
    low: Decimal
    return_pct: float


@dataclass(frozen=True)
class YearlyPerformance:
    """Price performance of one calendar year plus dividends received.

    Attributes:
        year: Calendar year.
        open: Open of the year's first trading day.
        close: Close of the year's last trading day.
        return_pct: (close - open) / open in percent.
        dividends: Net cash dividends credited during the year.
    """

    year: int
    open: Decimal
    close: Decimal
    return_pct: float
    dividends: Decimal


@dataclass(frozen=True)
class SimulationResult:
    """Outcome of one simulation run.

    Monetary fields are in currency units, ``*_return`` and
    ``max_drawdown`` are percentages.
    """

    symbol: str
    initial_investment: Decimal
    total_invested: Decimal
    current_value: Decimal
    cash_balance: Decimal
    total_shares: int
    average_cost_per_share: Decimal
    current_price: Decimal
    absolute_return: Decimal
    percentage_return: float
    annualized_return: float
    max_drawdown: float
    dividends_cash_received: Decimal
    dividends_stock_value: Decimal
    dividends_reinvested: Decimal
    timeline: tuple[TimelineEvent, ...]
    monthly_performance: tuple[MonthlyPerformance, ...]
    yearly_performance: tuple[YearlyPerformance, ...]
