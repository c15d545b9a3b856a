"""Tests for the in-memory portfolio aggregate."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from stockfolio.portfolio.models import Portfolio, Position, Transaction, TransactionType

if TYPE_CHECKING:
    from collections.abc import Callable

ON = datetime(2024, 3, 1, tzinfo=UTC)


class TestTransaction:
    def test_buy_stores_positive_shares(self) -> None:
        transaction = Transaction.buy(-5, 10.0, ON)
        assert transaction.shares == 5
        assert transaction.type is TransactionType.BUY

    def test_sell_stores_negative_shares(self) -> None:
        transaction = Transaction.sell(5, 10.0, ON)
        assert transaction.shares == -5
        assert transaction.type is TransactionType.SELL

    def test_ids_are_unique(self) -> None:
        assert Transaction.buy(1, 1.0, ON).id != Transaction.buy(1, 1.0, ON).id


class TestPosition:
    def test_remove_transaction(self, make_position: Callable[..., Position]) -> None:
        position = make_position(trades=[(10, 100.0), (5, 110.0)])
        first = position.transactions[0]

        assert position.remove_transaction(first.id) is first
        assert position.total_shares == 5

    def test_remove_unknown_transaction(self, make_position: Callable[..., Position]) -> None:
        position = make_position()
        assert position.remove_transaction(Transaction.buy(1, 1.0, ON).id) is None
        assert position.total_shares == 10

    def test_apply_quote(self, make_position: Callable[..., Position]) -> None:
        position = make_position(current_price=1.0)
        position.apply_quote(42.0, at=ON)
        assert position.current_price == 42.0
        assert position.last_updated == ON

    def test_transactions_newest_first(self) -> None:
        position = Position(symbol="AAPL", company_name="Apple")
        older = Transaction.buy(1, 1.0, datetime(2024, 1, 1, tzinfo=UTC))
        newer = Transaction.buy(1, 1.0, datetime(2024, 2, 1, tzinfo=UTC))
        position.add_transaction(older)
        position.add_transaction(newer)

        assert position.transactions_newest_first() == [newer, older]


class TestPortfolio:
    def test_find_position_is_case_insensitive(
        self, make_position: Callable[..., Position]
    ) -> None:
        position = make_position("AAPL")
        portfolio = Portfolio(name="Main", positions=[position])

        assert portfolio.find_position("aapl") is position
        assert portfolio.find_position(" AAPL ") is position
        assert portfolio.find_position("MSFT") is None

    def test_remove_position(self, make_position: Callable[..., Position]) -> None:
        position = make_position("AAPL")
        portfolio = Portfolio(name="Main", positions=[position])

        assert portfolio.remove_position(position.id) is position
        assert portfolio.positions == []
