"""Timeline event data model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum


class TimelineEventType(Enum):
    """Closed set of ledger event kinds."""

    BUY = "buy"
    SELL = "sell"
    DIVIDEND_CASH = "dividend_cash"
    DIVIDEND_STOCK = "dividend_stock"
    REINVEST = "reinvest"
    DEPOSIT = "deposit"


@dataclass(frozen=True)
class TimelineEvent:
    """One entry of the investor's ledger with the state right after it.

    ``shares`` and ``price_per_share`` are display values whose meaning
    depends on ``type``: traded shares and price for buy/sell/reinvest,
    shares held and net dividend per share for cash dividends, bonus
    shares and same-day close for stock dividends. ``share_change`` and
    ``cash_change`` are the event's own delta on the running state.

    Attributes:
        date: Date the event happened.
        type: Event kind.
        description: Human-readable summary.
        shares: Share count shown for the event.
        price_per_share: Per-share amount shown for the event.
        total_shares_after: Shares held after the event.
        portfolio_value_after: Shares at the day's close plus cash.
        cash_balance_after: Uninvested cash after the event.
        share_change: Change in shares held caused by the event.
        cash_change: Change in cash caused by the event.
    """

    date: date
    type: TimelineEventType
    description: str
    shares: int
    price_per_share: Decimal
    total_shares_after: int
    portfolio_value_after: Decimal
    cash_balance_after: Decimal
    share_change: int = 0
    cash_change: Decimal = Decimal(0)
