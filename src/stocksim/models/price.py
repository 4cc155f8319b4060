"""Daily price point data model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from stocksim.money import to_decimal


@dataclass(frozen=True)
class PricePoint:
    """Single trading day (OHLCV + the feed's adjusted close).

    Attributes:
        date: Trading date.
        open: Opening price.
        high: High price.
        low: Low price.
        close: Closing price.
        volume: Traded volume.
        adjusted_close: Back-adjusted close as reported by the feed.
            Defaults to ``close``.
    """

    date: date
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: float = 0.0
    adjusted_close: Decimal | None = None

    def __post_init__(self) -> None:
        for name in ("open", "high", "low", "close"):
            object.__setattr__(self, name, to_decimal(getattr(self, name)))
        if self.adjusted_close is None:
            object.__setattr__(self, "adjusted_close", self.close)
        else:
            object.__setattr__(self, "adjusted_close", to_decimal(self.adjusted_close))
