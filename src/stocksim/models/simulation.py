"""Simulation input data model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from stocksim.errors import InvalidParameterError
from stocksim.money import to_decimal


@dataclass(frozen=True)
class SimulationConfig:
    """Deposit and reinvestment policy of a hypothetical investor.

    Attributes:
        symbol: Ticker symbol being simulated.
        initial_amount: Cash invested on the first trading day.
        start_date: First day of the simulated window.
        end_date: Last day of the simulated window (inclusive).
        monthly_investment: Amount deposited on the first trading day of
            every later month (dollar/dong-cost averaging).
        reinvest_dividends: Whether cash dividends buy more shares.
    """

    symbol: str
    initial_amount: Decimal
    start_date: date
    end_date: date
    monthly_investment: Decimal = Decimal(0)
    reinvest_dividends: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "initial_amount", to_decimal(self.initial_amount))
        object.__setattr__(self, "monthly_investment", to_decimal(self.monthly_investment))
        if self.initial_amount < 0:
            raise InvalidParameterError(
                f"initial_amount must be >= 0, got {self.initial_amount}"
            )
        if self.monthly_investment < 0:
            raise InvalidParameterError(
                f"monthly_investment must be >= 0, got {self.monthly_investment}"
            )
        if self.end_date < self.start_date:
            raise InvalidParameterError(
                f"end_date {self.end_date} is before start_date {self.start_date}"
            )
