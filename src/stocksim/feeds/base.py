"""Abstract base class for price/dividend history feeds."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from stocksim.models.dividend import DividendEvent
from stocksim.models.price import PricePoint


class BaseHistoryFeed(ABC):
    """Abstract base for all history feeds.

    Subclasses must implement ``get_prices``. ``get_dividends`` defaults to
    ``NotImplementedError``; feeds advertise what they serve via
    ``capabilities()``. Network feeds live outside this package; they
    raise ``FeedError`` with ``retryable=True`` for transient failures so
    the loader can fall through to the next feed.
    """

    name: str = "feed"

    @abstractmethod
    def get_prices(self, symbol: str, start: date, end: date) -> list[PricePoint]:
        """Fetch daily prices.

        Args:
            symbol: Ticker symbol.
            start: Start date (inclusive).
            end: End date (inclusive).

        Returns:
            List of PricePoint ordered by date ascending.
        """
        ...

    def get_dividends(self, symbol: str) -> list[DividendEvent]:
        """Get the dividend history, ordered by ex-date ascending."""
        raise NotImplementedError

    def capabilities(self) -> set[str]:
        """Return the set of supported features: ``prices``, ``dividends``."""
        return {"prices"}
