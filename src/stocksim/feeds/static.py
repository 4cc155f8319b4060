"""Static feed for tests, demos and offline use, no network required."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Iterable, Mapping

from stocksim.feeds.base import BaseHistoryFeed
from stocksim.feeds.parsing import dividend_from_record
from stocksim.models.dividend import DividendEvent
from stocksim.models.price import PricePoint


class StaticFeed(BaseHistoryFeed):
    """In-memory feed that returns pre-loaded or synthetic history.

    Use ``set_prices`` and ``set_dividends`` to pre-load data; symbols
    without pre-loaded prices get a deterministic synthetic weekday series.
    """

    name = "static"

    def __init__(self, synthetic: bool = True, base_price: int = 50_000) -> None:
        self.synthetic = synthetic
        self.base_price = base_price
        self._prices: dict[str, list[PricePoint]] = {}
        self._dividends: dict[str, list[DividendEvent]] = {}

    # --- Pre-load helpers ---

    def set_prices(self, symbol: str, prices: Iterable[PricePoint]) -> None:
        self._prices[symbol.upper()] = sorted(prices, key=lambda p: p.date)

    def set_dividends(self, symbol: str, events: Iterable[DividendEvent]) -> None:
        self._dividends[symbol.upper()] = sorted(events, key=lambda d: d.ex_date)

    def set_dividend_records(self, symbol: str, records: Iterable[Mapping[str, Any]]) -> int:
        """Load raw announcement rows; unparseable rows are skipped.

        Returns:
            Number of rows kept.
        """
        events = [
            e for e in (dividend_from_record(r, symbol.upper()) for r in records)
            if e is not None
        ]
        self.set_dividends(symbol, events)
        return len(events)

    # --- Feed implementation ---

    def get_prices(self, symbol: str, start: date, end: date) -> list[PricePoint]:
        key = symbol.upper()
        if key in self._prices:
            return [p for p in self._prices[key] if start <= p.date <= end]
        if not self.synthetic:
            return []
        return self._generate_prices(start, end)

    def get_dividends(self, symbol: str) -> list[DividendEvent]:
        return list(self._dividends.get(symbol.upper(), []))

    def capabilities(self) -> set[str]:
        return {"prices", "dividends"}

    # --- Synthetic data generation ---

    def _generate_prices(self, start: date, end: date) -> list[PricePoint]:
        """Weekday series with a gentle saw-tooth, whole currency units."""
        prices: list[PricePoint] = []
        current = start
        i = 0
        while current <= end:
            if current.weekday() >= 5:
                current += timedelta(days=1)
                continue
            o = self.base_price + (i % 20) * 100
            c = o + 50
            prices.append(PricePoint(
                date=current,
                open=o,
                high=c + 100,
                low=o - 100,
                close=c,
                volume=100_000 + i * 10,
            ))
            i += 1
            current += timedelta(days=1)
        return prices
