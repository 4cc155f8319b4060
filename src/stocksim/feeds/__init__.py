"""History feeds: the boundary to external market-data sources."""

from __future__ import annotations

from stocksim.feeds.base import BaseHistoryFeed
from stocksim.feeds.parsing import dividend_from_record, parse_dividend_description
from stocksim.feeds.static import StaticFeed

__all__ = [
    "BaseHistoryFeed",
    "StaticFeed",
    "dividend_from_record",
    "parse_dividend_description",
]
