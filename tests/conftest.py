"""Shared fixtures for stocksim tests."""

from __future__ import annotations

import sys
from datetime import date, timedelta
from pathlib import Path

import pytest

# Ensure src/ is on the path for editable-style imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from stocksim.feeds.static import StaticFeed
from stocksim.models.dividend import DividendEvent
from stocksim.models.price import PricePoint


def make_point(day: date, close, open_=None, high=None, low=None, volume: float = 1000.0) -> PricePoint:
    """Price point whose open/high/low default to the close."""
    open_ = close if open_ is None else open_
    return PricePoint(
        date=day,
        open=open_,
        high=max(open_, close) if high is None else high,
        low=min(open_, close) if low is None else low,
        close=close,
        volume=volume,
    )


def make_series(start: date, closes: list) -> list[PricePoint]:
    """One point per weekday starting at ``start`` with the given closes."""
    points = []
    day = start
    for close in closes:
        while day.weekday() >= 5:
            day += timedelta(days=1)
        points.append(make_point(day, close))
        day += timedelta(days=1)
    return points


@pytest.fixture
def static_feed() -> StaticFeed:
    return StaticFeed()


@pytest.fixture
def sample_prices() -> list[PricePoint]:
    """Two months of weekday prices, January and February 2024."""
    closes = [50_000 + (i % 7) * 500 - (i % 3) * 300 for i in range(42)]
    return make_series(date(2024, 1, 2), closes)


@pytest.fixture
def sample_dividends() -> list[DividendEvent]:
    return [
        DividendEvent(ex_date=date(2021, 6, 10), type="cash", value=1000),
        DividendEvent(ex_date=date(2022, 6, 10), type="cash", value=1100),
        DividendEvent(ex_date=date(2022, 7, 1), type="stock", value=20),
        DividendEvent(ex_date=date(2023, 6, 12), type="cash", value=1210),
    ]
