"""Calendar seasonality of daily returns."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import pandas as pd

from stocksim.frames import prices_to_frame
from stocksim.models.price import PricePoint


@dataclass(frozen=True)
class TimingBucket:
    """Average daily close-to-close return, in percent, for one bucket."""

    key: int
    avg_return: float
    observations: int


@dataclass(frozen=True)
class TimingAnalysis:
    """Buckets sorted best first.

    Attributes:
        by_weekday: Keyed by weekday, Monday=0.
        by_day_of_month: Keyed by day of month, 1-31.
        by_quarter: Keyed by quarter, 1-4.
    """

    by_weekday: tuple[TimingBucket, ...]
    by_day_of_month: tuple[TimingBucket, ...]
    by_quarter: tuple[TimingBucket, ...]


def _ranked(returns: pd.Series, keys: pd.Index) -> tuple[TimingBucket, ...]:
    grouped = returns.groupby(keys).agg(["mean", "count"])
    grouped = grouped.sort_values("mean", ascending=False, kind="mergesort")
    return tuple(
        TimingBucket(key=int(k), avg_return=float(row["mean"]), observations=int(row["count"]))
        for k, row in grouped.iterrows()
    )


def analyze_optimal_timing(prices: Sequence[PricePoint]) -> TimingAnalysis:
    """Rank weekdays, days of month and quarters by average daily return.

    Each day's return is attributed to the day it ends on. Fewer than two
    prices yield empty rankings.
    """
    if len(prices) < 2:
        return TimingAnalysis(by_weekday=(), by_day_of_month=(), by_quarter=())
    df = prices_to_frame(prices)
    returns = (df["close"].pct_change() * 100).iloc[1:]
    index = returns.index
    return TimingAnalysis(
        by_weekday=_ranked(returns, pd.Index(index.dayofweek)),
        by_day_of_month=_ranked(returns, pd.Index(index.day)),
        by_quarter=_ranked(returns, pd.Index(index.quarter)),
    )
