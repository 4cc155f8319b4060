"""Normalization of free-text dividend announcements.

Market-data sites often publish corporate actions only as prose, e.g.
``"Trả cổ tức bằng tiền tỷ lệ 10%"`` or
``"Phát hành cổ phiếu tăng vốn, tỷ lệ 20:3"``. Cash dividends quoted as a
percentage refer to the 10,000 par value, so 10% is 1,000 per share.
"""

from __future__ import annotations

import re
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from stocksim.models.dividend import DividendEvent, DividendType

PAR_VALUE = Decimal(10000)

_CASH = re.compile(r"tiền|\btm\b|\bcash\b", re.IGNORECASE)
_STOCK = re.compile(r"cổ phiếu|\bcp\b|thưởng|\bstock\b|\bbonus\b", re.IGNORECASE)
_RATIO = re.compile(r"(\d+)\s*:\s*(\d+)")
_PERCENT = re.compile(r"(\d+(?:\.\d+)?)\s*%")
_AMOUNT = re.compile(r"(\d{1,3}(?:,\d{3})+|\d+(?:\.\d+)?)\s*(?:đồng|đ\b|vnd)", re.IGNORECASE)
_NUMBER = re.compile(r"\d{1,3}(?:,\d{3})+|\d+(?:\.\d+)?")


def _number(text: str) -> Decimal:
    return Decimal(text.replace(",", ""))


def parse_dividend_description(text: str) -> tuple[DividendType, Decimal] | None:
    """Infer dividend type and value from an announcement.

    Returns:
        ``(type, value)`` with value in currency per share (cash) or bonus
        percent (stock), or None when nothing usable is found.
    """
    if not text:
        return None

    if _CASH.search(text):
        kind = DividendType.CASH
        percent = _PERCENT.search(text)
        amount = _AMOUNT.search(text)
        if amount:
            value = _number(amount.group(1))
        elif percent:
            value = _number(percent.group(1)) / 100 * PAR_VALUE
        else:
            numbers = _NUMBER.findall(text)
            if not numbers:
                return None
            value = _number(numbers[-1])
    elif _STOCK.search(text):
        kind = DividendType.STOCK
        ratio = _RATIO.search(text)
        percent = _PERCENT.search(text)
        if ratio and int(ratio.group(1)) > 0:
            value = Decimal(ratio.group(2)) / Decimal(ratio.group(1)) * 100
        elif percent:
            value = _number(percent.group(1))
        else:
            return None
    else:
        return None

    if value <= 0:
        return None
    return kind, value


def dividend_from_record(record: Mapping[str, Any], symbol: str | None = None) -> DividendEvent | None:
    """Build a DividendEvent from a feed row.

    Accepts ``exDate``/``ex_date`` (``date`` or ISO string), and either an
    explicit ``type`` + ``value`` or a ``description`` to parse.
    """
    raw_date = record.get("ex_date", record.get("exDate"))
    if raw_date is None:
        return None
    ex_date = raw_date if isinstance(raw_date, date) else date.fromisoformat(str(raw_date)[:10])
    description = str(record.get("description") or "")

    kind = record.get("type")
    value = record.get("value")
    if kind is None or value is None:
        parsed = parse_dividend_description(description)
        if parsed is None:
            return None
        kind, value = parsed
    try:
        event = DividendEvent(
            ex_date=ex_date, type=kind, value=value,
            description=description, symbol=symbol,
        )
    except (InvalidOperation, ValueError):
        return None
    if event.value <= 0:
        return None
    return event
