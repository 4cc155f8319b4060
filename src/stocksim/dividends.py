"""Historical dividend growth analysis."""

from __future__ import annotations

from collections import defaultdict
from decimal import Decimal
from typing import Iterable, Sequence

from stocksim.models.dividend import DividendEvent
from stocksim.models.growth import DividendGrowth, DividendYear
from stocksim.money import HUNDRED, ZERO


def yearly_totals(dividends: Iterable[DividendEvent]) -> list[tuple[int, Decimal]]:
    """Sum cash dividends per calendar year of the ex-date, oldest first."""
    totals: dict[int, Decimal] = defaultdict(lambda: ZERO)
    for d in dividends:
        if d.is_cash:
            totals[d.ex_date.year] += d.value
    return sorted(totals.items())


def window_cagr(totals: Sequence[tuple[int, Decimal]], period: int) -> float:
    """Compound annual growth over the last ``period`` listed years.

    Returns 0.0 when fewer than ``period`` years are listed, when the
    starting total is not positive, or when the window spans no time.
    """
    if period <= 0 or len(totals) < period:
        return 0.0
    start_year, start = totals[-period]
    end_year, end = totals[-1]
    span = end_year - start_year
    if start <= 0 or span == 0:
        return 0.0
    return (float(end / start) ** (1 / span) - 1) * 100


def compute_cagr(dividends: Iterable[DividendEvent]) -> DividendGrowth:
    """Year-over-year growth and 3/5-year CAGR of cash dividends."""
    totals = yearly_totals(dividends)
    years: list[DividendYear] = []
    prev: Decimal | None = None
    for year, total in totals:
        growth = 0.0
        if prev is not None and prev > 0:
            growth = float((total - prev) / prev * HUNDRED)
        years.append(DividendYear(year=year, total_dividend=total, growth_pct=growth))
        prev = total

    return DividendGrowth(
        cagr_3_year=window_cagr(totals, 3),
        cagr_5_year=window_cagr(totals, 5),
        years=tuple(years),
    )
