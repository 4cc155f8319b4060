"""HistoryLoader: cache + feed fallback in front of the simulation engine."""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Sequence, TypeVar

from stocksim.cache import HistoryCache, MemoryCache, NoCache, cache_key
from stocksim.config import HistoryConfig
from stocksim.errors import FeedError, InvalidParameterError, SimulationErrorCode
from stocksim.feeds.base import BaseHistoryFeed
from stocksim.models.dividend import DividendEvent
from stocksim.models.price import PricePoint
from stocksim.models.simulation import SimulationConfig
from stocksim.quality import ValidationResult, validate_dividends, validate_prices

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


class HistoryLoader:
    """Central orchestrator: cache -> feeds -> validate -> fallback.

    Usage::

        loader = HistoryLoader([StaticFeed()], cache=MemoryCache(ttl_seconds=1800))
        prices, dividends = loader.load(config)
        result = SimulationEngine().run(config, prices, dividends)

    Args:
        feeds: Feeds ordered by priority.
        cache: Cache instance; defaults to no caching.
        validate: Whether to run quality checks on fetched data.
    """

    def __init__(
        self,
        feeds: Sequence[BaseHistoryFeed],
        cache: HistoryCache | None = None,
        validate: bool = True,
    ) -> None:
        self.feeds = list(feeds)
        self.cache = cache if cache is not None else NoCache()
        self.validate = validate

    # --------------------------------------------------------------- prices

    def get_prices(self, symbol: str, start: date, end: date) -> list[PricePoint]:
        """Get daily prices: cache -> feed chain -> validate -> store.

        Tries each feed in order. Retryable errors fall through to the next
        feed; non-retryable errors are raised immediately.
        """
        return self.cache.get_or_fetch(
            cache_key("prices", symbol, start, end),
            lambda: self._from_feeds(
                "prices",
                lambda feed: feed.get_prices(symbol, start, end),
                validate_prices,
            ),
        )

    # ------------------------------------------------------------ dividends

    def get_dividends(self, symbol: str) -> list[DividendEvent]:
        """Get the dividend history from the first capable feed."""
        return self.cache.get_or_fetch(
            cache_key("dividends", symbol),
            lambda: self._from_feeds(
                "dividends",
                lambda feed: feed.get_dividends(symbol),
                validate_dividends,
            ),
        )

    def load(self, config: SimulationConfig) -> tuple[list[PricePoint], list[DividendEvent]]:
        """Fetch everything ``SimulationEngine.run`` needs for ``config``."""
        prices = self.get_prices(config.symbol, config.start_date, config.end_date)
        dividends = self.get_dividends(config.symbol)
        return prices, dividends

    # --------------------------------------------------------------- cache

    def clear_cache(self, symbol: str) -> None:
        self.cache.clear(symbol)

    def clear_all_cache(self) -> None:
        self.cache.clear_all()

    # ------------------------------------------------------------ internal

    def _from_feeds(
        self,
        capability: str,
        fetch: Callable[[BaseHistoryFeed], list[T]],
        check: Callable[[list[T]], ValidationResult],
    ) -> list[T]:
        last_error: FeedError | None = None
        for feed in self.feeds:
            if capability not in feed.capabilities():
                continue
            try:
                data = fetch(feed)
                if self.validate:
                    result = check(data)
                    if not result.passed:
                        msgs = "; ".join(c.message for c in result.failed_checks)
                        raise FeedError(
                            f"Validation failed: {msgs}",
                            code=SimulationErrorCode.VALIDATION_FAILED,
                            retryable=True,
                        )
                LOGGER.info("Loaded %d %s from %s", len(data), capability, feed.name)
                return data
            except FeedError as e:
                if not e.retryable:
                    raise
                LOGGER.warning("Feed %s failed for %s: %s", feed.name, capability, e)
                last_error = e
                continue
            except NotImplementedError:
                continue

        raise last_error or FeedError(
            f"No feed supports '{capability}'",
            code=SimulationErrorCode.NO_DATA,
        )


def create_loader(
    feeds: Sequence[BaseHistoryFeed],
    config: HistoryConfig | None = None,
) -> HistoryLoader:
    """Build a HistoryLoader whose cache follows ``config``."""
    config = config or HistoryConfig()
    cache: HistoryCache
    if config.cache_backend == "memory":
        cache = MemoryCache(
            ttl_seconds=config.cache_ttl_seconds,
            max_entries=config.cache_max_entries,
        )
    elif config.cache_backend == "none":
        cache = NoCache()
    else:
        raise InvalidParameterError(f"Unknown cache backend {config.cache_backend!r}")
    return HistoryLoader(feeds, cache=cache, validate=config.validate)
