"""Reconstruction of real traded prices from a back-adjusted series."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import replace
from decimal import Decimal
from typing import Iterable

from stocksim.models.dividend import DividendEvent
from stocksim.models.price import PricePoint
from stocksim.money import CURRENCY_UNIT, HUNDRED, ONE, round_money


def adjustment_factors(
    stock_dividends: Iterable[DividendEvent],
) -> tuple[list, list[Decimal]]:
    """Build the ex-date index and suffix products used by ``unadjust``.

    Returns:
        ``(ex_dates, suffix)`` where ``ex_dates`` is sorted ascending and
        ``suffix[i]`` is the product of ``1 + ratio/100`` over the events at
        positions ``i`` and later. ``suffix[len(ex_dates)]`` is 1.
    """
    events = sorted(
        (d for d in stock_dividends if d.is_stock),
        key=lambda d: d.ex_date,
    )
    ex_dates = [d.ex_date for d in events]
    suffix = [ONE] * (len(events) + 1)
    for i in range(len(events) - 1, -1, -1):
        suffix[i] = suffix[i + 1] * (ONE + events[i].value / HUNDRED)
    return ex_dates, suffix


def unadjust(
    prices: Iterable[PricePoint],
    stock_dividends: Iterable[DividendEvent],
    unit: Decimal = CURRENCY_UNIT,
) -> list[PricePoint]:
    """Undo the feed's back-adjustment for stock dividends.

    A price dated *d* is multiplied by the product of ``1 + ratio/100``
    over every stock dividend whose ex-date is after *d*, then rounded to
    ``unit``. Points on or after the last ex-date are returned unchanged.
    Cash dividends in ``stock_dividends`` are ignored.

    Args:
        prices: Back-adjusted daily prices.
        stock_dividends: Dividend events; only stock dividends are used.
        unit: Currency rounding unit.

    Returns:
        Price points with real traded OHLC, in input order.
    """
    ex_dates, suffix = adjustment_factors(stock_dividends)
    out: list[PricePoint] = []
    for p in prices:
        factor = suffix[bisect_right(ex_dates, p.date)]
        if factor == ONE:
            out.append(p)
            continue
        out.append(replace(
            p,
            open=round_money(p.open * factor, unit),
            high=round_money(p.high * factor, unit),
            low=round_money(p.low * factor, unit),
            close=round_money(p.close * factor, unit),
            adjusted_close=p.adjusted_close,
        ))
    return out
