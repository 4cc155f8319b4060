"""pandas conversions for feeds, charts and tables."""

from __future__ import annotations

from typing import Iterable, Sequence

import pandas as pd

from stocksim.models.price import PricePoint
from stocksim.models.projection import MonteCarloResult
from stocksim.models.timeline import TimelineEvent

PRICE_COLUMNS = ["open", "high", "low", "close", "volume", "adjusted_close"]


def prices_to_frame(prices: Sequence[PricePoint]) -> pd.DataFrame:
    """Daily prices as a float DataFrame indexed by date."""
    records = [
        {
            "date": pd.Timestamp(p.date),
            "open": float(p.open),
            "high": float(p.high),
            "low": float(p.low),
            "close": float(p.close),
            "volume": float(p.volume),
            "adjusted_close": float(p.adjusted_close),
        }
        for p in prices
    ]
    df = pd.DataFrame(records, columns=["date", *PRICE_COLUMNS])
    return df.set_index(pd.DatetimeIndex(df.pop("date"), name="date"))


def prices_from_frame(df: pd.DataFrame) -> list[PricePoint]:
    """Build price points from a DataFrame.

    The date comes from a ``date`` column or, failing that, the index.
    ``volume`` and ``adjusted_close`` are optional. Rows are returned in
    ascending date order.
    """
    if "date" in df.columns:
        dates = pd.to_datetime(df["date"])
    else:
        dates = pd.to_datetime(df.index.to_series())
    prices: list[PricePoint] = []
    for ts, (_, row) in zip(dates, df.iterrows()):
        volume = row.get("volume")
        adjusted = row.get("adjusted_close")
        prices.append(PricePoint(
            date=pd.Timestamp(ts).date(),
            open=float(row["open"]),
            high=float(row["high"]),
            low=float(row["low"]),
            close=float(row["close"]),
            volume=float(volume) if pd.notna(volume) else 0.0,
            adjusted_close=float(adjusted) if pd.notna(adjusted) else None,
        ))
    prices.sort(key=lambda p: p.date)
    return prices


def timeline_to_frame(events: Iterable[TimelineEvent]) -> pd.DataFrame:
    """One row per ledger event, money columns as floats."""
    records = [
        {
            "date": pd.Timestamp(e.date),
            "type": e.type.value,
            "description": e.description,
            "shares": e.shares,
            "price_per_share": float(e.price_per_share),
            "share_change": e.share_change,
            "cash_change": float(e.cash_change),
            "total_shares_after": e.total_shares_after,
            "cash_balance_after": float(e.cash_balance_after),
            "portfolio_value_after": float(e.portfolio_value_after),
        }
        for e in events
    ]
    return pd.DataFrame(records, columns=[
        "date", "type", "description", "shares", "price_per_share",
        "share_change", "cash_change", "total_shares_after",
        "cash_balance_after", "portfolio_value_after",
    ])


def projection_to_frame(results: Iterable[MonteCarloResult]) -> pd.DataFrame:
    """Percentile fan indexed by projection year."""
    df = pd.DataFrame(
        [
            {"year": r.year, "p10": r.percentiles.p10,
             "p50": r.percentiles.p50, "p90": r.percentiles.p90}
            for r in results
        ],
        columns=["year", "p10", "p50", "p90"],
    )
    return df.set_index("year")
