"""In-memory portfolio model (Transaction, Position, Portfolio).

These are plain dataclasses. Derived figures are never stored; they are recomputed
from the transaction history by `stockfolio.portfolio.valuation` on every access.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum

from stockfolio.portfolio import valuation


def utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(UTC)


class TransactionType(str, Enum):
    """Kind of a recorded trade."""

    BUY = "buy"
    SELL = "sell"


@dataclass(frozen=True)
class Transaction:
    """One buy or sell event. Sells carry a negative share count."""

    shares: int
    price_per_share: float
    date: datetime
    type: TransactionType
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @classmethod
    def buy(cls, shares: int, price_per_share: float, date: datetime) -> Transaction:
        """Record a purchase of `shares` (stored positive)."""
        return cls(abs(shares), price_per_share, date, TransactionType.BUY)

    @classmethod
    def sell(cls, shares: int, price_per_share: float, date: datetime) -> Transaction:
        """Record a sale of `shares` (stored negative)."""
        return cls(-abs(shares), price_per_share, date, TransactionType.SELL)


@dataclass
class Position:
    """Holding of a single ticker within a portfolio."""

    symbol: str
    company_name: str
    transactions: list[Transaction] = field(default_factory=list)
    current_price: float = 0.0
    last_updated: datetime = field(default_factory=utc_now)
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @property
    def total_shares(self) -> int:
        return valuation.total_shares(self)

    @property
    def average_cost(self) -> float:
        return valuation.average_cost(self)

    @property
    def current_value(self) -> float:
        return valuation.current_value(self)

    @property
    def gain_loss_percent(self) -> float:
        return valuation.gain_loss_percent(self)

    @property
    def gain_loss_amount(self) -> float:
        return valuation.gain_loss_amount(self)

    def add_transaction(self, transaction: Transaction) -> None:
        self.transactions.append(transaction)

    def remove_transaction(self, transaction_id: uuid.UUID) -> Transaction | None:
        """Remove a transaction by id. Returns the removed transaction, if any."""
        for index, transaction in enumerate(self.transactions):
            if transaction.id == transaction_id:
                return self.transactions.pop(index)
        return None

    def apply_quote(self, price: float, at: datetime | None = None) -> None:
        """Record a refreshed market price."""
        self.current_price = price
        self.last_updated = at or utc_now()

    def transactions_newest_first(self) -> list[Transaction]:
        return sorted(self.transactions, key=lambda t: t.date, reverse=True)


@dataclass
class Portfolio:
    """A named collection of positions."""

    name: str
    positions: list[Position] = field(default_factory=list)
    created_at: datetime = field(default_factory=utc_now)
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @property
    def total_value(self) -> float:
        return valuation.portfolio_total_value(self)

    def composition(self) -> dict[str, int]:
        return valuation.portfolio_composition(self)

    def value_distribution(self) -> dict[str, float]:
        return valuation.portfolio_value_distribution(self)

    def find_position(self, symbol: str) -> Position | None:
        """Find a position by symbol (case-insensitive)."""
        wanted = symbol.strip().upper()
        for position in self.positions:
            if position.symbol.upper() == wanted:
                return position
        return None

    def add_position(self, position: Position) -> None:
        self.positions.append(position)

    def remove_position(self, position_id: uuid.UUID) -> Position | None:
        """Remove a position (and with it, its transactions) by id."""
        for index, position in enumerate(self.positions):
            if position.id == position_id:
                return self.positions.pop(index)
        return None
