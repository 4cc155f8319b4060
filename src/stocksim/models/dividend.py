"""Dividend event data model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

from stocksim.money import to_decimal


class DividendType(Enum):
    """Cash pays currency per share; stock pays bonus shares."""

    CASH = "cash"
    STOCK = "stock"


@dataclass(frozen=True)
class DividendEvent:
    """Dividend distribution event.

    Attributes:
        ex_date: Ex-dividend date; triggers processing in the simulation.
        type: Cash or stock dividend.
        value: Currency per share for cash dividends, bonus percentage for
            stock dividends (20 means 20 new shares per 100 held).
        description: Free-text description from the data source.
        symbol: Ticker symbol, when known.
    """

    ex_date: date
    type: DividendType
    value: Decimal
    description: str = ""
    symbol: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", DividendType(self.type))
        object.__setattr__(self, "value", to_decimal(self.value))

    @property
    def is_cash(self) -> bool:
        return self.type is DividendType.CASH

    @property
    def is_stock(self) -> bool:
        return self.type is DividendType.STOCK
