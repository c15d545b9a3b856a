"""Portfolio repository and session-per-call store."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from sqlalchemy import select, update
from sqlalchemy.orm import selectinload

from stockfolio.data._converters import (
    as_utc,
    portfolio_to_record,
    record_to_portfolio,
    sync_portfolio_record,
)
from stockfolio.data.models import PortfolioRecord, PositionRecord, TransactionRecord

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession

    from stockfolio.data.database import PortfolioDatabase
    from stockfolio.portfolio.models import Portfolio, Position

logger = structlog.get_logger()

_AGGREGATE = selectinload(PortfolioRecord.positions).selectinload(PositionRecord.transactions)


class PortfolioRepository:
    """
    Session-bound access to stored portfolios.

    Returns and accepts domain dataclasses; ORM records never leave this class.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with a database session."""
        self._session = session

    async def _load(self, portfolio_id: uuid.UUID) -> PortfolioRecord | None:
        stmt = (
            select(PortfolioRecord)
            .where(PortfolioRecord.id == portfolio_id)
            .options(_AGGREGATE)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_portfolios(self) -> list[Portfolio]:
        """All stored portfolios, oldest first."""
        stmt = select(PortfolioRecord).options(_AGGREGATE).order_by(PortfolioRecord.created_at)
        result = await self._session.execute(stmt)
        return [record_to_portfolio(r) for r in result.scalars().all()]

    async def get_portfolio(self, portfolio_id: uuid.UUID) -> Portfolio | None:
        """Get a portfolio aggregate by id."""
        record = await self._load(portfolio_id)
        return record_to_portfolio(record) if record is not None else None

    async def get_portfolio_by_name(self, name: str) -> Portfolio | None:
        """Get a portfolio aggregate by its display name."""
        stmt = select(PortfolioRecord).where(PortfolioRecord.name == name).options(_AGGREGATE)
        result = await self._session.execute(stmt)
        record = result.scalar_one_or_none()
        return record_to_portfolio(record) if record is not None else None

    async def save_portfolio(self, portfolio: Portfolio) -> None:
        """Insert or update the full portfolio aggregate."""
        record = await self._load(portfolio.id)
        if record is None:
            self._session.add(portfolio_to_record(portfolio))
        else:
            sync_portfolio_record(record, portfolio)
        await self._session.flush()

    async def save_position_quote(self, position: Position) -> bool:
        """Persist only a position's quoted price and timestamp. Returns False if not stored."""
        stmt = (
            update(PositionRecord)
            .where(PositionRecord.id == position.id)
            .values(
                current_price=position.current_price,
                last_updated=as_utc(position.last_updated),
            )
        )
        result = await self._session.execute(stmt)
        return bool(result.rowcount)

    async def delete_portfolio(self, portfolio_id: uuid.UUID) -> bool:
        """Delete a portfolio with its positions and transactions."""
        record = await self._load(portfolio_id)
        if record is None:
            return False
        await self._session.delete(record)
        await self._session.flush()
        return True

    async def delete_position(self, position_id: uuid.UUID) -> bool:
        """Delete a position and its transactions."""
        record = await self._session.get(
            PositionRecord, position_id, options=[selectinload(PositionRecord.transactions)]
        )
        if record is None:
            return False
        await self._session.delete(record)
        await self._session.flush()
        return True

    async def delete_transaction(self, transaction_id: uuid.UUID) -> bool:
        """Delete a single transaction."""
        record = await self._session.get(TransactionRecord, transaction_id)
        if record is None:
            return False
        await self._session.delete(record)
        await self._session.flush()
        return True


class SqlPortfolioStore:
    """
    Portfolio storage for the service and the CLI.

    Every write runs in its own transaction, so concurrent per-position updates
    commit independently of one another.
    """

    def __init__(self, db: PortfolioDatabase) -> None:
        self._db = db

    async def list_portfolios(self) -> list[Portfolio]:
        async with self._db.read() as session:
            return await PortfolioRepository(session).list_portfolios()

    async def find_portfolio(self, name: str | None = None) -> Portfolio | None:
        """Portfolio with the given name, or the oldest one when `name` is None."""
        async with self._db.read() as session:
            repo = PortfolioRepository(session)
            if name is not None:
                return await repo.get_portfolio_by_name(name)
            portfolios = await repo.list_portfolios()
        return portfolios[0] if portfolios else None

    async def save_portfolio(self, portfolio: Portfolio) -> None:
        async with self._db.transaction() as session:
            await PortfolioRepository(session).save_portfolio(portfolio)

    async def save_position_quote(self, position: Position) -> None:
        async with self._db.transaction() as session:
            stored = await PortfolioRepository(session).save_position_quote(position)
        if not stored:
            logger.warning("Quote update for unknown position", symbol=position.symbol)

    async def delete_position(self, position: Position) -> None:
        async with self._db.transaction() as session:
            await PortfolioRepository(session).delete_position(position.id)

    async def delete_transaction(self, transaction_id: uuid.UUID) -> None:
        async with self._db.transaction() as session:
            await PortfolioRepository(session).delete_transaction(transaction_id)
