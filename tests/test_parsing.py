"""Tests for dividend announcement parsing."""

from datetime import date
from decimal import Decimal

import pytest

from stocksim.feeds.parsing import dividend_from_record, parse_dividend_description
from stocksim.models.dividend import DividendType


class TestParseDescription:
    @pytest.mark.parametrize(
        "text, kind, value",
        [
            ("Trả cổ tức bằng tiền tỷ lệ 10%", DividendType.CASH, 1000),
            ("Cổ tức bằng tiền 1,500 đồng/cp", DividendType.CASH, 1500),
            ("Cash dividend 800", DividendType.CASH, 800),
            ("Phát hành cổ phiếu tăng vốn, tỷ lệ 20:3", DividendType.STOCK, 15),
            ("Thưởng cổ phiếu 10%", DividendType.STOCK, 10),
            ("Stock dividend 25%", DividendType.STOCK, 25),
        ],
    )
    def test_recognized(self, text, kind, value):
        assert parse_dividend_description(text) == (kind, Decimal(value))

    @pytest.mark.parametrize(
        "text",
        ["", "Annual general meeting", "Cash dividend", "Stock dividend", "Cash dividend 0"],
    )
    def test_unrecognized(self, text):
        assert parse_dividend_description(text) is None


class TestDividendFromRecord:
    def test_from_description(self):
        event = dividend_from_record(
            {"exDate": "2023-06-12T00:00:00", "description": "Trả cổ tức bằng tiền tỷ lệ 12%"},
            symbol="VNM",
        )
        assert event is not None
        assert event.ex_date == date(2023, 6, 12)
        assert event.is_cash
        assert event.value == 1200
        assert event.symbol == "VNM"

    def test_explicit_fields_win(self):
        event = dividend_from_record(
            {"ex_date": date(2022, 7, 1), "type": "stock", "value": 20, "description": "Cash 5%"},
        )
        assert event.is_stock
        assert event.value == 20

    @pytest.mark.parametrize(
        "record",
        [
            {"description": "Cash dividend 800"},
            {"ex_date": "2023-06-12", "description": "AGM"},
            {"ex_date": "2023-06-12", "type": "rights", "value": 1},
            {"ex_date": "2023-06-12", "type": "cash", "value": "abc"},
            {"ex_date": "2023-06-12", "type": "cash", "value": 0},
        ],
    )
    def test_rejected(self, record):
        assert dividend_from_record(record) is None


class TestStaticFeedRecords:
    def test_keeps_parseable_rows(self, static_feed):
        kept = static_feed.set_dividend_records("vnm", [
            {"exDate": "2023-06-12", "description": "Trả cổ tức bằng tiền tỷ lệ 10%"},
            {"exDate": "2022-07-01", "description": "Phát hành cổ phiếu, tỷ lệ 100:20"},
            {"exDate": "2021-05-05", "description": "Đại hội cổ đông"},
        ])
        assert kept == 2
        events = static_feed.get_dividends("VNM")
        assert [e.ex_date for e in events] == [date(2022, 7, 1), date(2023, 6, 12)]
        assert events[0].value == 20
        assert events[1].symbol == "VNM"
