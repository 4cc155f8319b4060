"""Simulation error types."""

from __future__ import annotations

from enum import Enum


class SimulationErrorCode(Enum):
    """Error classification codes."""

    NO_PRICE_DATA = "no_price_data"
    INVALID_PARAMETER = "invalid_parameter"
    LEDGER_INVARIANT = "ledger_invariant"
    VALIDATION_FAILED = "validation_failed"
    FEED_ERROR = "feed_error"
    NO_DATA = "no_data"


class StockSimError(Exception):
    """Base exception with error code and retryable flag.

    Attributes:
        message: Human-readable error description.
        code: Structured error code for programmatic handling.
        retryable: Whether the caller should retry with another feed.
    """

    default_code = SimulationErrorCode.INVALID_PARAMETER

    def __init__(
        self,
        message: str,
        code: SimulationErrorCode | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.retryable = retryable


class NoPriceDataError(StockSimError):
    """No price point exists inside the simulated window."""

    default_code = SimulationErrorCode.NO_PRICE_DATA


class InvalidParameterError(StockSimError, ValueError):
    """A caller-supplied parameter is out of range."""

    default_code = SimulationErrorCode.INVALID_PARAMETER


class LedgerInvariantError(StockSimError):
    """An event would break a timeline invariant (negative cash, time travel...)."""

    default_code = SimulationErrorCode.LEDGER_INVARIANT


class FeedError(StockSimError):
    """A history feed failed to deliver data."""

    default_code = SimulationErrorCode.FEED_ERROR
