"""Tests for dividend growth analysis."""

from datetime import date
from decimal import Decimal

import pytest

from stocksim import compute_dividend_cagr
from stocksim.dividends import compute_cagr, window_cagr, yearly_totals
from stocksim.models.dividend import DividendEvent


def _cash(year: int, value, month: int = 6) -> DividendEvent:
    return DividendEvent(ex_date=date(year, month, 10), type="cash", value=value)


class TestYearlyTotals:
    def test_sums_per_year(self):
        totals = yearly_totals([_cash(2023, 500, 3), _cash(2022, 900), _cash(2023, 700, 9)])
        assert totals == [(2022, Decimal(900)), (2023, Decimal(1200))]

    def test_stock_dividends_ignored(self):
        stock = DividendEvent(ex_date=date(2023, 7, 1), type="stock", value=20)
        assert yearly_totals([stock]) == []


class TestComputeCagr:
    def test_growth_series(self):
        growth = compute_cagr([_cash(2021, 1000), _cash(2022, 1100), _cash(2023, 1210)])
        assert [y.year for y in growth.years] == [2021, 2022, 2023]
        assert [y.growth_pct for y in growth.years] == pytest.approx([0.0, 10.0, 10.0])
        assert growth.cagr_3_year == pytest.approx(10.0)
        assert growth.cagr_5_year == 0.0

    def test_five_year_window(self):
        values = [1000, 1100, 1210, 1331, 1464.1]
        growth = compute_cagr([_cash(2019 + i, v) for i, v in enumerate(values)])
        assert growth.cagr_3_year == pytest.approx(10.0)
        assert growth.cagr_5_year == pytest.approx(10.0)

    def test_fixture_ignores_stock(self, sample_dividends):
        growth = compute_dividend_cagr(sample_dividends)
        assert [y.total_dividend for y in growth.years] == [1000, 1100, 1210]
        assert growth.cagr_3_year == pytest.approx(10.0)

    def test_empty(self):
        growth = compute_cagr([])
        assert growth.years == ()
        assert growth.cagr_3_year == 0.0
        assert growth.cagr_5_year == 0.0

    def test_zero_previous_year(self):
        growth = compute_cagr([_cash(2021, 0), _cash(2022, 500), _cash(2023, 600)])
        assert growth.years[1].growth_pct == 0.0
        assert growth.cagr_3_year == 0.0


class TestWindowCagr:
    def test_same_year_window(self):
        assert window_cagr([(2023, Decimal(10))], 1) == 0.0

    def test_uses_last_years(self):
        totals = [(2019, Decimal(1)), (2020, Decimal(100)), (2022, Decimal(400))]
        # 100 -> 400 over two years
        assert window_cagr(totals, 2) == pytest.approx(100.0)
