"""Dividend growth data models."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class DividendYear:
    """Cash dividends paid per share during one calendar year.

    Attributes:
        year: Calendar year.
        total_dividend: Sum of cash dividends per share.
        growth_pct: Change versus the previous listed year, in percent.
    """

    year: int
    total_dividend: Decimal
    growth_pct: float


@dataclass(frozen=True)
class DividendGrowth:
    """Dividend growth trend.

    Attributes:
        cagr_3_year: Compound annual growth over the last 3 listed years.
        cagr_5_year: Compound annual growth over the last 5 listed years.
        years: Per-year totals, oldest first.
    """

    cagr_3_year: float
    cagr_5_year: float
    years: tuple[DividendYear, ...]
