"""Simulation and history-loading configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal

from stocksim.errors import InvalidParameterError


@dataclass(frozen=True)
class SimulationSettings:
    """Market rules and model defaults shared by the engine and projector.

    Attributes:
        transaction_fee_rate: Brokerage fee charged on every purchase (0.15%).
        dividend_tax_rate: Withholding tax on cash dividends (5%).
        currency_unit: Smallest monetary step; prices and cash round to it.
        monte_carlo_paths: Number of simulated paths per projection.
        expected_return_rate: Default annual drift for projections.
        volatility: Default annual volatility for projections.
    """

    transaction_fee_rate: Decimal = Decimal("0.0015")
    dividend_tax_rate: Decimal = Decimal("0.05")
    currency_unit: Decimal = Decimal("1")
    monte_carlo_paths: int = 1000
    expected_return_rate: float = 0.12
    volatility: float = 0.20

    def __post_init__(self) -> None:
        if not Decimal(0) <= self.transaction_fee_rate < Decimal(1):
            raise InvalidParameterError(
                f"transaction_fee_rate must be in [0, 1), got {self.transaction_fee_rate}"
            )
        if not Decimal(0) <= self.dividend_tax_rate <= Decimal(1):
            raise InvalidParameterError(
                f"dividend_tax_rate must be in [0, 1], got {self.dividend_tax_rate}"
            )
        if self.currency_unit <= 0:
            raise InvalidParameterError("currency_unit must be positive")
        if self.monte_carlo_paths <= 0:
            raise InvalidParameterError("monte_carlo_paths must be positive")


@dataclass
class HistoryConfig:
    """Configuration for HistoryLoader.

    Attributes:
        cache_backend: Cache type, "memory" or "none".
        cache_ttl_seconds: Age after which cached history is refetched.
        cache_max_entries: LRU bound for the in-memory cache.
        validate: Whether to run quality checks on fetched data.
    """

    cache_backend: str = "memory"
    cache_ttl_seconds: int = 1800
    cache_max_entries: int = 256
    validate: bool = True


def settings_from_env() -> SimulationSettings:
    """Build SimulationSettings from environment variables.

    Environment variables:
        STOCKSIM_FEE_RATE: Transaction fee rate (default: "0.0015").
        STOCKSIM_TAX_RATE: Cash dividend tax rate (default: "0.05").
        STOCKSIM_CURRENCY_UNIT: Currency rounding unit (default: "1").
        STOCKSIM_MC_PATHS: Monte Carlo path count (default: 1000).
        STOCKSIM_EXPECTED_RETURN: Default projection drift (default: 0.12).
        STOCKSIM_VOLATILITY: Default projection volatility (default: 0.20).
    """
    return SimulationSettings(
        transaction_fee_rate=Decimal(os.getenv("STOCKSIM_FEE_RATE", "0.0015")),
        dividend_tax_rate=Decimal(os.getenv("STOCKSIM_TAX_RATE", "0.05")),
        currency_unit=Decimal(os.getenv("STOCKSIM_CURRENCY_UNIT", "1")),
        monte_carlo_paths=int(os.getenv("STOCKSIM_MC_PATHS", "1000")),
        expected_return_rate=float(os.getenv("STOCKSIM_EXPECTED_RETURN", "0.12")),
        volatility=float(os.getenv("STOCKSIM_VOLATILITY", "0.20")),
    )


def history_config_from_env() -> HistoryConfig:
    """Build HistoryConfig from environment variables.

    Environment variables:
        STOCKSIM_CACHE: Cache backend, "memory" or "none" (default: "memory").
        STOCKSIM_CACHE_TTL: Cache TTL in seconds (default: 1800).
        STOCKSIM_CACHE_MAX_ENTRIES: In-memory cache bound (default: 256).
        STOCKSIM_VALIDATE: "0"/"false" disables quality checks.
    """
    return HistoryConfig(
        cache_backend=os.getenv("STOCKSIM_CACHE", "memory"),
        cache_ttl_seconds=int(os.getenv("STOCKSIM_CACHE_TTL", "1800")),
        cache_max_entries=int(os.getenv("STOCKSIM_CACHE_MAX_ENTRIES", "256")),
        validate=os.getenv("STOCKSIM_VALIDATE", "1").strip().lower() not in ("0", "false", "no"),
    )
