"""Append-only investor ledger with a running state snapshot per event."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Callable, Iterator

from stocksim.errors import LedgerInvariantError
from stocksim.models.timeline import TimelineEvent, TimelineEventType
from stocksim.money import CURRENCY_UNIT, ZERO, Number, round_money, to_decimal

# Allowed (share_change, cash_change) signs per event kind.
_VARIANT_RULES: dict[TimelineEventType, Callable[[int, Decimal], bool]] = {
    TimelineEventType.BUY: lambda ds, dc: ds > 0 and dc <= 0,
    TimelineEventType.REINVEST: lambda ds, dc: ds > 0 and dc <= 0,
    TimelineEventType.SELL: lambda ds, dc: ds < 0 and dc >= 0,
    TimelineEventType.DEPOSIT: lambda ds, dc: ds == 0 and dc > 0,
    TimelineEventType.DIVIDEND_CASH: lambda ds, dc: ds == 0 and dc >= 0,
    TimelineEventType.DIVIDEND_STOCK: lambda ds, dc: ds >= 0 and dc == 0,
}


class TimelineLedger:
    """Chronological event log owning the investor's shares and cash.

    Every state change goes through ``record``, which applies the event's
    delta, checks the invariants and appends an immutable snapshot:

    * dates never go backwards,
    * shares and cash never go negative,
    * ``portfolio_value_after == total_shares_after * mark_price + cash``.

    Args:
        opening_cash: Cash available before the first event.
        unit: Currency rounding unit.
    """

    def __init__(self, opening_cash: Number = ZERO, unit: Decimal = CURRENCY_UNIT) -> None:
        self.unit = unit
        self.opening_cash = round_money(opening_cash, unit)
        if self.opening_cash < 0:
            raise LedgerInvariantError("Opening cash cannot be negative")
        self._shares = 0
        self._cash = self.opening_cash
        self._events: list[TimelineEvent] = []

    # ---------------------------------------------------------------- state

    @property
    def shares(self) -> int:
        return self._shares

    @property
    def cash(self) -> Decimal:
        return self._cash

    @property
    def events(self) -> tuple[TimelineEvent, ...]:
        return tuple(self._events)

    @property
    def last_date(self) -> date | None:
        return self._events[-1].date if self._events else None

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[TimelineEvent]:
        return iter(self._events)

    # -------------------------------------------------------------- writing

    def record(
        self,
        when: date,
        event_type: TimelineEventType,
        description: str,
        *,
        mark_price: Number,
        shares: int = 0,
        price_per_share: Number = ZERO,
        share_change: int = 0,
        cash_change: Number = ZERO,
    ) -> TimelineEvent:
        """Apply an event's delta and append its snapshot.

        Args:
            when: Event date; must not precede the previous event.
            event_type: Event kind; constrains the sign of the deltas.
            description: Human-readable summary.
            mark_price: Close of the day, used to value the holdings.
            shares: Share count shown for the event.
            price_per_share: Per-share amount shown for the event.
            share_change: Shares added (or removed, for sells).
            cash_change: Cash added (negative for purchases).

        Raises:
            LedgerInvariantError: If the event would break an invariant.
        """
        cash_change = round_money(cash_change, self.unit)
        rule = _VARIANT_RULES.get(event_type)
        if rule is None:
            raise LedgerInvariantError(f"Unknown event type {event_type!r}")
        if not rule(share_change, cash_change):
            raise LedgerInvariantError(
                f"{event_type.value} event cannot change shares by {share_change} "
                f"and cash by {cash_change}"
            )

        last = self.last_date
        if last is not None and when < last:
            raise LedgerInvariantError(f"Event on {when} recorded after {last}")

        shares_after = self._shares + share_change
        cash_after = self._cash + cash_change
        if shares_after < 0:
            raise LedgerInvariantError(f"Shares would go negative on {when}")
        if cash_after < 0:
            raise LedgerInvariantError(f"Cash would go negative on {when}: {cash_after}")

        event = TimelineEvent(
            date=when,
            type=event_type,
            description=description,
            shares=shares,
            price_per_share=to_decimal(price_per_share),
            total_shares_after=shares_after,
            portfolio_value_after=round_money(
                shares_after * to_decimal(mark_price) + cash_after, self.unit
            ),
            cash_balance_after=cash_after,
            share_change=share_change,
            cash_change=cash_change,
        )
        self._events.append(event)
        self._shares = shares_after
        self._cash = cash_after
        return event

    # ------------------------------------------------------------- checking

    def verify(self) -> None:
        """Re-derive every snapshot from the opening state and the deltas.

        Raises:
            LedgerInvariantError: On the first inconsistent event.
        """
        shares, cash = 0, self.opening_cash
        prev: date | None = None
        for event in self._events:
            shares += event.share_change
            cash += event.cash_change
            if (shares, cash) != (event.total_shares_after, event.cash_balance_after):
                raise LedgerInvariantError(f"Snapshot mismatch at {event.date}")
            if prev is not None and event.date < prev:
                raise LedgerInvariantError(f"Out-of-order event at {event.date}")
            prev = event.date
