"""Conversion helpers between domain dataclasses and database records."""

from __future__ import annotations

from datetime import UTC, datetime

from stockfolio.data.models import PortfolioRecord, PositionRecord, TransactionRecord
from stockfolio.portfolio.models import Portfolio, Position, Transaction, TransactionType


def as_utc(value: datetime) -> datetime:
    """Normalize a datetime to aware UTC. SQLite hands back naive values."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def transaction_to_record(transaction: Transaction, sort_order: int = 0) -> TransactionRecord:
    """Convert a domain transaction to a database record."""
    return TransactionRecord(
        id=transaction.id,
        shares=transaction.shares,
        price_per_share=transaction.price_per_share,
        executed_at=as_utc(transaction.date),
        type=transaction.type.value,
        sort_order=sort_order,
    )


def position_to_record(position: Position, sort_order: int = 0) -> PositionRecord:
    """Convert a domain position (with its transactions) to a database record."""
    return PositionRecord(
        id=position.id,
        symbol=position.symbol,
        company_name=position.company_name,
        current_price=position.current_price,
        last_updated=as_utc(position.last_updated),
        sort_order=sort_order,
        transactions=[
            transaction_to_record(t, i) for i, t in enumerate(position.transactions)
        ],
    )


def portfolio_to_record(portfolio: Portfolio) -> PortfolioRecord:
    """Convert a domain portfolio (full aggregate) to a database record."""
    return PortfolioRecord(
        id=portfolio.id,
        name=portfolio.name,
        created_at=as_utc(portfolio.created_at),
        positions=[position_to_record(p, i) for i, p in enumerate(portfolio.positions)],
    )


def record_to_transaction(record: TransactionRecord) -> Transaction:
    """Convert a database record to a domain transaction."""
    return Transaction(
        shares=record.shares,
        price_per_share=record.price_per_share,
        date=as_utc(record.executed_at),
        type=TransactionType(record.type),
        id=record.id,
    )


def record_to_position(record: PositionRecord) -> Position:
    """Convert a database record (transactions loaded) to a domain position."""
    return Position(
        symbol=record.symbol,
        company_name=record.company_name,
        transactions=[record_to_transaction(t) for t in record.transactions],
        current_price=record.current_price,
        last_updated=as_utc(record.last_updated),
        id=record.id,
    )


def record_to_portfolio(record: PortfolioRecord) -> Portfolio:
    """Convert a database record (positions and transactions loaded) to a domain portfolio."""
    return Portfolio(
        name=record.name,
        positions=[record_to_position(p) for p in record.positions],
        created_at=as_utc(record.created_at),
        id=record.id,
    )


def sync_position_record(record: PositionRecord, position: Position, sort_order: int) -> None:
    """Bring an existing position record in line with the domain position."""
    record.symbol = position.symbol
    record.company_name = position.company_name
    record.current_price = position.current_price
    record.last_updated = as_utc(position.last_updated)
    record.sort_order = sort_order

    existing = {t.id: t for t in record.transactions}
    wanted_ids = {t.id for t in position.transactions}
    for stale in [t for t in record.transactions if t.id not in wanted_ids]:
        record.transactions.remove(stale)
    for index, transaction in enumerate(position.transactions):
        transaction_record = existing.get(transaction.id)
        if transaction_record is None:
            record.transactions.append(transaction_to_record(transaction, index))
        else:
            # Transactions are immutable; only their ordering can change.
            transaction_record.sort_order = index


def sync_portfolio_record(record: PortfolioRecord, portfolio: Portfolio) -> None:
    """Bring an existing portfolio record in line with the domain aggregate."""
    record.name = portfolio.name

    existing = {p.id: p for p in record.positions}
    wanted_ids = {p.id for p in portfolio.positions}
    for stale in [p for p in record.positions if p.id not in wanted_ids]:
        record.positions.remove(stale)
    for index, position in enumerate(portfolio.positions):
        position_record = existing.get(position.id)
        if position_record is None:
            record.positions.append(position_to_record(position, index))
        else:
            sync_position_record(position_record, position, index)
