"""Tests for HistoryLoader: feed fallback chain, cache, validation."""

from datetime import date

import pytest

from conftest import make_point
from stocksim.cache import MemoryCache, NoCache
from stocksim.config import HistoryConfig
from stocksim.errors import FeedError, InvalidParameterError, SimulationErrorCode
from stocksim.feeds.base import BaseHistoryFeed
from stocksim.feeds.static import StaticFeed
from stocksim.loader import HistoryLoader, create_loader
from stocksim.models.simulation import SimulationConfig

START = date(2024, 1, 1)
END = date(2024, 1, 31)


class CountingFeed(StaticFeed):
    name = "counting"

    def __init__(self) -> None:
        super().__init__()
        self.calls = 0

    def get_prices(self, symbol, start, end):
        self.calls += 1
        return super().get_prices(symbol, start, end)


class FailingFeed(BaseHistoryFeed):
    name = "failing"

    def __init__(self, retryable: bool = True) -> None:
        self.retryable = retryable

    def get_prices(self, symbol, start, end):
        raise FeedError("boom", retryable=self.retryable)


class PricesOnlyFeed(BaseHistoryFeed):
    name = "prices-only"

    def get_prices(self, symbol, start, end):
        return [make_point(START, 100)]


class TestLoaderPrices:
    def test_get_prices(self, static_feed):
        loader = HistoryLoader([static_feed])
        prices = loader.get_prices("VNM", START, END)
        assert len(prices) == 23
        assert prices[0].date == date(2024, 1, 1)

    def test_cache_hit(self):
        feed = CountingFeed()
        loader = HistoryLoader([feed], cache=MemoryCache())
        first = loader.get_prices("VNM", START, END)
        second = loader.get_prices("vnm", START, END)
        assert first == second
        assert feed.calls == 1

    def test_no_cache_refetches(self):
        feed = CountingFeed()
        loader = HistoryLoader([feed], cache=NoCache())
        loader.get_prices("VNM", START, END)
        loader.get_prices("VNM", START, END)
        assert feed.calls == 2

    def test_clear_cache(self):
        feed = CountingFeed()
        loader = HistoryLoader([feed], cache=MemoryCache())
        loader.get_prices("VNM", START, END)
        loader.clear_cache("VNM")
        loader.get_prices("VNM", START, END)
        loader.clear_all_cache()
        loader.get_prices("VNM", START, END)
        assert feed.calls == 3


class TestLoaderFallback:
    def test_fallback_on_retryable_error(self, static_feed):
        loader = HistoryLoader([FailingFeed(), static_feed])
        assert len(loader.get_prices("VNM", START, END)) > 0

    def test_non_retryable_raises(self, static_feed):
        loader = HistoryLoader([FailingFeed(retryable=False), static_feed])
        with pytest.raises(FeedError) as exc_info:
            loader.get_prices("VNM", START, END)
        assert not exc_info.value.retryable

    def test_all_fail_raises_last_error(self):
        loader = HistoryLoader([FailingFeed(), FailingFeed()])
        with pytest.raises(FeedError) as exc_info:
            loader.get_prices("VNM", START, END)
        assert exc_info.value.message == "boom"

    def test_validation_failure_falls_through(self, static_feed):
        empty = StaticFeed(synthetic=False)
        loader = HistoryLoader([empty, static_feed])
        assert len(loader.get_prices("VNM", START, END)) > 0

    def test_validation_failure_everywhere(self):
        loader = HistoryLoader([StaticFeed(synthetic=False)])
        with pytest.raises(FeedError) as exc_info:
            loader.get_prices("VNM", START, END)
        assert exc_info.value.code == SimulationErrorCode.VALIDATION_FAILED

    def test_validation_disabled(self):
        loader = HistoryLoader([StaticFeed(synthetic=False)], validate=False)
        assert loader.get_prices("VNM", START, END) == []


class TestLoaderDividends:
    def test_get_dividends(self, static_feed, sample_dividends):
        static_feed.set_dividends("VNM", sample_dividends)
        loader = HistoryLoader([static_feed])
        assert loader.get_dividends("VNM") == sample_dividends

    def test_skips_feeds_without_capability(self, static_feed, sample_dividends):
        static_feed.set_dividends("VNM", sample_dividends)
        loader = HistoryLoader([PricesOnlyFeed(), static_feed])
        assert len(loader.get_dividends("VNM")) == 4

    def test_no_capable_feed(self):
        loader = HistoryLoader([PricesOnlyFeed()])
        with pytest.raises(FeedError) as exc_info:
            loader.get_dividends("VNM")
        assert exc_info.value.code == SimulationErrorCode.NO_DATA

    def test_load(self, static_feed, sample_dividends):
        static_feed.set_dividends("VNM", sample_dividends)
        loader = HistoryLoader([static_feed])
        config = SimulationConfig("VNM", 1_000_000, START, END)
        prices, dividends = loader.load(config)
        assert prices[-1].date == END
        assert len(dividends) == 4


class TestCreateLoader:
    def test_memory_backend(self, static_feed):
        loader = create_loader([static_feed], HistoryConfig(cache_ttl_seconds=60, cache_max_entries=4))
        assert isinstance(loader.cache, MemoryCache)
        assert loader.cache.ttl == 60
        assert loader.cache.max_entries == 4

    def test_none_backend(self, static_feed):
        loader = create_loader([static_feed], HistoryConfig(cache_backend="none", validate=False))
        assert isinstance(loader.cache, NoCache)
        assert loader.validate is False

    def test_unknown_backend(self, static_feed):
        with pytest.raises(InvalidParameterError):
            create_loader([static_feed], HistoryConfig(cache_backend="redis"))
