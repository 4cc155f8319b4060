"""Data quality validation for price and dividend series."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

from stocksim.models.dividend import DividendEvent
from stocksim.models.price import PricePoint


@dataclass
class ValidationCheck:
    """Single validation check result."""

    name: str
    passed: bool
    message: str = ""


@dataclass
class ValidationResult:
    """Aggregate validation result."""

    checks: list[ValidationCheck] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(c.passed for c in self.checks)

    @property
    def failed_checks(self) -> list[ValidationCheck]:
        return [c for c in self.checks if not c.passed]

    def add(self, name: str, failures: int, message: str) -> None:
        if failures:
            self.checks.append(ValidationCheck(name, False, f"{failures} {message}"))
        else:
            self.checks.append(ValidationCheck(name, True))


def validate_prices(prices: Sequence[PricePoint]) -> ValidationResult:
    """Run all quality checks on a daily price series.

    Checks:
        1. Not empty
        2. Prices finite and positive
        3. Volume sanity (finite, non-negative)
        4. Date ordering (strictly ascending, one point per day)
        5. OHLC consistency (high >= low, high >= open/close, low <= open/close)
    """
    result = ValidationResult()

    # 1. Not empty
    if not prices:
        result.checks.append(ValidationCheck("not_empty", False, "No prices provided"))
        return result
    result.checks.append(ValidationCheck("not_empty", True, f"{len(prices)} prices"))

    # 2. Finite, positive prices
    bad_prices = 0
    for p in prices:
        for val in (p.open, p.high, p.low, p.close):
            if not val.is_finite() or val <= 0:
                bad_prices += 1
    result.add("positive_prices", bad_prices, "non-positive or non-finite prices")

    # 3. Volume sanity
    bad_volume = sum(
        1 for p in prices if math.isnan(p.volume) or math.isinf(p.volume) or p.volume < 0
    )
    result.add("volume_sanity", bad_volume, "points with invalid volume")

    # 4. Date ordering
    out_of_order = sum(
        1 for i in range(1, len(prices)) if prices[i].date <= prices[i - 1].date
    )
    result.add("date_order", out_of_order, "out of order or duplicated")

    # 5. OHLC consistency
    inconsistent = 0
    for p in prices:
        # Decimal NaN refuses ordering; already counted under positive_prices
        if not all(v.is_finite() for v in (p.open, p.high, p.low, p.close)):
            continue
        if p.high < p.low:
            inconsistent += 1
        elif p.high < p.open or p.high < p.close:
            inconsistent += 1
        elif p.low > p.open or p.low > p.close:
            inconsistent += 1
    result.add("ohlc_consistency", inconsistent, "points with H<L or H<O/C")

    return result


def validate_dividends(dividends: Sequence[DividendEvent]) -> ValidationResult:
    """Check dividend values are positive and ex-dates ascending.

    An empty history is valid.
    """
    result = ValidationResult()
    non_positive = sum(1 for d in dividends if not d.value.is_finite() or d.value <= 0)
    result.add("positive_values", non_positive, "dividends with non-positive value")
    out_of_order = sum(
        1 for i in range(1, len(dividends))
        if dividends[i].ex_date < dividends[i - 1].ex_date
    )
    result.add("date_order", out_of_order, "dividends out of order")
    return result
