"""Monthly/yearly rollups and drawdown derived from a finished simulation."""

from __future__ import annotations

from collections import defaultdict
from decimal import Decimal
from itertools import groupby
from typing import Iterable, Sequence

from stocksim.models.price import PricePoint
from stocksim.models.result import MonthlyPerformance, YearlyPerformance
from stocksim.models.timeline import TimelineEvent, TimelineEventType
from stocksim.money import HUNDRED, ZERO


def _return_pct(first_open: Decimal, last_close: Decimal) -> float:
    if first_open == 0:
        return 0.0
    return float((last_close - first_open) / first_open * HUNDRED)


def monthly_rollup(prices: Sequence[PricePoint]) -> list[MonthlyPerformance]:
    """Group daily prices by calendar month.

    Args:
        prices: Daily prices sorted ascending.

    Returns:
        One entry per month present in ``prices``, oldest first.
    """
    out: list[MonthlyPerformance] = []
    for (year, month), group in groupby(prices, key=lambda p: (p.date.year, p.date.month)):
        days = list(group)
        first, last = days[0], days[-1]
        out.append(MonthlyPerformance(
            month=f"{year:04d}-{month:02d}",
            open=first.open,
            close=last.close,
            high=max(p.high for p in days),
            low=min(p.low for p in days),
            return_pct=_return_pct(first.open, last.close),
        ))
    return out


def dividends_by_year(timeline: Iterable[TimelineEvent]) -> dict[int, Decimal]:
    """Net cash dividends credited to the investor per calendar year."""
    totals: dict[int, Decimal] = defaultdict(lambda: ZERO)
    for event in timeline:
        if event.type is TimelineEventType.DIVIDEND_CASH:
            totals[event.date.year] += event.cash_change
    return dict(totals)


def yearly_rollup(
    prices: Sequence[PricePoint],
    timeline: Iterable[TimelineEvent] = (),
) -> list[YearlyPerformance]:
    """Group daily prices by calendar year and attach dividends received.

    Args:
        prices: Daily prices sorted ascending.
        timeline: Ledger events of the same run.

    Returns:
        One entry per year present in ``prices``, oldest first.
    """
    dividends = dividends_by_year(timeline)
    out: list[YearlyPerformance] = []
    for year, group in groupby(prices, key=lambda p: p.date.year):
        days = list(group)
        first, last = days[0], days[-1]
        out.append(YearlyPerformance(
            year=year,
            open=first.open,
            close=last.close,
            return_pct=_return_pct(first.open, last.close),
            dividends=dividends.get(year, ZERO),
        ))
    return out


def max_drawdown(timeline: Iterable[TimelineEvent]) -> float:
    """Largest peak-to-trough fall of the portfolio value, in percent.

    Returns a negative number, or 0.0 if the value never fell below an
    earlier peak.
    """
    worst = ZERO
    peak = ZERO
    for event in timeline:
        value = event.portfolio_value_after
        if value > peak:
            peak = value
        if peak > 0:
            drawdown = (value - peak) / peak * HUNDRED
            if drawdown < worst:
                worst = drawdown
    return float(worst)
