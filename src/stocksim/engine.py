"""SimulationEngine: day-by-day replay of an investment policy."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable

from stocksim.adjust import unadjust
from stocksim.config import SimulationSettings
from stocksim.errors import NoPriceDataError
from stocksim.ledger import TimelineLedger
from stocksim.models.dividend import DividendEvent
from stocksim.models.price import PricePoint
from stocksim.models.result import SimulationResult
from stocksim.models.simulation import SimulationConfig
from stocksim.models.timeline import TimelineEvent, TimelineEventType
from stocksim.money import HUNDRED, ONE, ZERO, floor_shares, round_money
from stocksim.performance import max_drawdown, monthly_rollup, yearly_rollup

LOGGER = logging.getLogger(__name__)


class SimulationEngine:
    """Replays deposits, purchases and dividends over a price history.

    Usage::

        engine = SimulationEngine()
        result = engine.run(config, prices, dividends)

    Prices may be back-adjusted for stock dividends; the engine restores
    real traded prices once before the walk and credits bonus shares on
    each stock dividend's ex-date.
    """

    def __init__(self, settings: SimulationSettings | None = None) -> None:
        self.settings = settings or SimulationSettings()

    def run(
        self,
        config: SimulationConfig,
        prices: Iterable[PricePoint],
        dividends: Iterable[DividendEvent] = (),
    ) -> SimulationResult:
        """Simulate ``config`` over ``prices`` and ``dividends``.

        Args:
            config: Investor policy and simulated window.
            prices: Daily prices, ascending by date.
            dividends: Dividend events, ascending by ex-date.

        Returns:
            The finished SimulationResult.

        Raises:
            NoPriceDataError: If no price point falls inside the window
                [start_date, end_date], including when the first point on
                or after start_date is already past end_date.
        """
        return _SimulationRun(self.settings, config, prices, dividends).execute()


class _SimulationRun:
    """Mutable state of a single ``SimulationEngine.run`` call."""

    def __init__(
        self,
        settings: SimulationSettings,
        config: SimulationConfig,
        prices: Iterable[PricePoint],
        dividends: Iterable[DividendEvent],
    ) -> None:
        self.settings = settings
        self.config = config
        self.unit = settings.currency_unit
        self.fee_rate = settings.transaction_fee_rate

        ordered_dividends = sorted(dividends, key=lambda d: d.ex_date)
        self.prices = unadjust(
            sorted(prices, key=lambda p: p.date),
            [d for d in ordered_dividends if d.is_stock],
            self.unit,
        )
        # One dividend per ex-date: the first in ex-date order wins.
        self.dividends_on: dict[date, DividendEvent] = {}
        for d in ordered_dividends:
            self.dividends_on.setdefault(d.ex_date, d)

        self.ledger = TimelineLedger(config.initial_amount, self.unit)
        self.total_invested = self.ledger.opening_cash
        self.dividends_cash_received = ZERO
        self.dividends_stock_value = ZERO
        self.dividends_reinvested = ZERO

    # ------------------------------------------------------------------ run

    def execute(self) -> SimulationResult:
        config = self.config
        window = [
            p for p in self.prices
            if config.start_date <= p.date <= config.end_date
        ]
        if not window:
            raise NoPriceDataError(
                f"No price data for {config.symbol} inside the window "
                f"{config.start_date} to {config.end_date}"
            )

        first = window[0]
        self.buy_shares(first, self.ledger.cash, "Initial purchase", TimelineEventType.BUY)

        prev_month: tuple[int, int] | None = None
        for point in window:
            month = (point.date.year, point.date.month)
            if (
                config.monthly_investment > 0
                and prev_month is not None
                and month != prev_month
            ):
                self.deposit(point)
            prev_month = month

            if self.ledger.shares > 0:
                dividend = self.dividends_on.get(point.date)
                if dividend is not None and dividend.is_cash:
                    self.cash_dividend(point, dividend)
                elif dividend is not None:
                    self.stock_dividend(point, dividend)

        result = self.summarize(window)
        LOGGER.debug(
            "Simulated %s from %s to %s: %d events, value %s on %s invested",
            config.symbol, window[0].date, window[-1].date,
            len(self.ledger), result.current_value, result.total_invested,
        )
        return result

    # --------------------------------------------------------------- events

    def buy_shares(
        self,
        point: PricePoint,
        amount: Decimal,
        label: str,
        event_type: TimelineEventType,
    ) -> TimelineEvent | None:
        """Spend up to ``amount`` on whole shares at the day's close.

        Returns None when the amount cannot pay for one share after fees
        or when the cash balance cannot cover the cost.
        """
        price = point.close
        if price <= 0 or amount <= 0:
            return None
        fee = amount * self.fee_rate
        net_amount = amount - fee
        if net_amount < price:
            return None

        shares = floor_shares(net_amount / price)
        cost = shares * price
        total_cost = round_money(cost * (ONE + self.fee_rate), self.unit)
        if shares <= 0 or self.ledger.cash < total_cost:
            return None

        event = self.ledger.record(
            point.date,
            event_type,
            f"{label} ({shares:,} shares @ {price:,})",
            mark_price=price,
            shares=shares,
            price_per_share=price,
            share_change=shares,
            cash_change=-total_cost,
        )
        if event_type is TimelineEventType.REINVEST:
            self.dividends_reinvested += cost
        return event

    def deposit(self, point: PricePoint) -> None:
        amount = round_money(self.config.monthly_investment, self.unit)
        if amount <= 0:
            return
        self.total_invested += amount
        self.ledger.record(
            point.date,
            TimelineEventType.DEPOSIT,
            f"Monthly deposit: {amount:,}",
            mark_price=point.close,
            cash_change=amount,
        )
        self.buy_shares(point, self.ledger.cash, "Monthly purchase", TimelineEventType.BUY)

    def cash_dividend(self, point: PricePoint, dividend: DividendEvent) -> None:
        held = self.ledger.shares
        keep = ONE - self.settings.dividend_tax_rate
        net = round_money(held * dividend.value * keep, self.unit)
        self.dividends_cash_received += net
        self.ledger.record(
            point.date,
            TimelineEventType.DIVIDEND_CASH,
            f"Cash dividend {dividend.value:,}/share on {held:,} shares: {net:,} after tax",
            mark_price=point.close,
            shares=held,
            price_per_share=round_money(dividend.value * keep, self.unit),
            cash_change=net,
        )
        if self.config.reinvest_dividends:
            self.buy_shares(point, net, "Dividend reinvestment", TimelineEventType.REINVEST)

    def stock_dividend(self, point: PricePoint, dividend: DividendEvent) -> None:
        bonus = floor_shares(self.ledger.shares * dividend.value / HUNDRED)
        self.dividends_stock_value += bonus * point.close
        self.ledger.record(
            point.date,
            TimelineEventType.DIVIDEND_STOCK,
            f"Stock dividend {dividend.value}%: {bonus:,} bonus shares",
            mark_price=point.close,
            shares=bonus,
            price_per_share=point.close,
            share_change=bonus,
        )

    # -------------------------------------------------------------- summary

    def summarize(self, window: list[PricePoint]) -> SimulationResult:
        config = self.config
        last = window[-1]
        shares = self.ledger.shares
        cash = self.ledger.cash
        invested = self.total_invested

        current_value = round_money(shares * last.close + cash, self.unit)
        absolute_return = current_value - invested

        if invested > 0:
            percentage_return = float(absolute_return / invested * HUNDRED)
            elapsed_years = max(0.5, (config.end_date - config.start_date).days / 365)
            growth = float(current_value / invested)
            annualized_return = (growth ** (1 / elapsed_years) - 1) * 100
        else:
            percentage_return = 0.0
            annualized_return = 0.0

        average_cost = round_money(invested / shares, self.unit) if shares > 0 else ZERO
        timeline = self.ledger.events

        return SimulationResult(
            symbol=config.symbol,
            initial_investment=self.ledger.opening_cash,
            total_invested=invested,
            current_value=current_value,
            cash_balance=cash,
            total_shares=shares,
            average_cost_per_share=average_cost,
            current_price=last.close,
            absolute_return=absolute_return,
            percentage_return=percentage_return,
            annualized_return=annualized_return,
            max_drawdown=max_drawdown(timeline),
            dividends_cash_received=self.dividends_cash_received,
            dividends_stock_value=round_money(self.dividends_stock_value, self.unit),
            dividends_reinvested=self.dividends_reinvested,
            timeline=timeline,
            monthly_performance=tuple(monthly_rollup(window)),
            yearly_performance=tuple(yearly_rollup(window, timeline)),
        )
