"""Tests for the append-only TimelineLedger."""

from datetime import date

import pytest

from stocksim.errors import LedgerInvariantError, SimulationErrorCode
from stocksim.ledger import TimelineLedger
from stocksim.models.timeline import TimelineEventType

D1 = date(2024, 1, 2)
D2 = date(2024, 1, 3)


def _buy(ledger: TimelineLedger, when=D1, shares=10, price=1000, cost=10_015):
    return ledger.record(
        when, TimelineEventType.BUY, "buy",
        mark_price=price, shares=shares, price_per_share=price,
        share_change=shares, cash_change=-cost,
    )


class TestRecord:
    def test_buy_updates_state(self):
        ledger = TimelineLedger(opening_cash=100_000)
        event = _buy(ledger)
        assert ledger.shares == 10
        assert ledger.cash == 89_985
        assert event.total_shares_after == 10
        assert event.cash_balance_after == 89_985
        assert event.portfolio_value_after == 10 * 1000 + 89_985

    def test_value_uses_mark_price(self):
        ledger = TimelineLedger(opening_cash=100_000)
        _buy(ledger)
        event = ledger.record(
            D2, TimelineEventType.DEPOSIT, "deposit", mark_price=2000, cash_change=5000,
        )
        assert event.portfolio_value_after == 10 * 2000 + 94_985

    def test_cash_change_rounded(self):
        ledger = TimelineLedger(opening_cash=100)
        event = ledger.record(
            D1, TimelineEventType.DIVIDEND_CASH, "div", mark_price=0, cash_change="10.5",
        )
        assert event.cash_change == 10
        assert ledger.cash == 110

    def test_sell(self):
        ledger = TimelineLedger(opening_cash=100_000)
        _buy(ledger)
        ledger.record(
            D2, TimelineEventType.SELL, "sell", mark_price=1000,
            shares=4, price_per_share=1000, share_change=-4, cash_change=3990,
        )
        assert ledger.shares == 6
        assert ledger.cash == 89_985 + 3990

    def test_events_are_snapshots(self):
        ledger = TimelineLedger(opening_cash=100_000)
        _buy(ledger)
        events = ledger.events
        _buy(ledger, when=D2)
        assert len(events) == 1
        assert len(ledger) == 2
        assert [e.date for e in ledger] == [D1, D2]


class TestInvariants:
    def test_negative_cash_rejected(self):
        ledger = TimelineLedger(opening_cash=1000)
        with pytest.raises(LedgerInvariantError) as exc_info:
            _buy(ledger)
        assert exc_info.value.code == SimulationErrorCode.LEDGER_INVARIANT
        assert len(ledger) == 0
        assert ledger.cash == 1000

    def test_negative_shares_rejected(self):
        ledger = TimelineLedger(opening_cash=100_000)
        with pytest.raises(LedgerInvariantError):
            ledger.record(
                D1, TimelineEventType.SELL, "sell", mark_price=1000,
                share_change=-1, cash_change=1000,
            )

    def test_date_going_backwards_rejected(self):
        ledger = TimelineLedger(opening_cash=100_000)
        _buy(ledger, when=D2)
        with pytest.raises(LedgerInvariantError):
            _buy(ledger, when=D1)

    def test_same_date_allowed(self):
        ledger = TimelineLedger(opening_cash=100_000)
        _buy(ledger)
        _buy(ledger)
        assert ledger.shares == 20

    def test_variant_shape_enforced(self):
        ledger = TimelineLedger(opening_cash=100_000)
        with pytest.raises(LedgerInvariantError):
            ledger.record(
                D1, TimelineEventType.DEPOSIT, "deposit", mark_price=1000,
                share_change=5, cash_change=1000,
            )
        with pytest.raises(LedgerInvariantError):
            ledger.record(
                D1, TimelineEventType.DIVIDEND_STOCK, "bonus", mark_price=1000,
                share_change=5, cash_change=-1,
            )

    def test_negative_opening_cash_rejected(self):
        with pytest.raises(LedgerInvariantError):
            TimelineLedger(opening_cash=-1)

    def test_verify(self):
        ledger = TimelineLedger(opening_cash=100_000)
        _buy(ledger)
        ledger.record(D2, TimelineEventType.DIVIDEND_STOCK, "bonus", mark_price=1000, share_change=2)
        ledger.verify()
        assert ledger.last_date == D2
