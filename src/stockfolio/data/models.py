"""SQLAlchemy ORM models for portfolio storage."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import DateTime, Float, ForeignKey, Index, Integer, String, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class PortfolioRecord(Base):
    """Stored portfolio."""

    __tablename__ = "portfolios"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)

    positions: Mapped[list[PositionRecord]] = relationship(
        back_populates="portfolio",
        cascade="all, delete-orphan",
        order_by="PositionRecord.sort_order",
    )


class PositionRecord(Base):
    """Stored holding of one ticker."""

    __tablename__ = "positions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    portfolio_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("portfolios.id", ondelete="CASCADE"), nullable=False
    )
    symbol: Mapped[str] = mapped_column(String(24), nullable=False)
    company_name: Mapped[str] = mapped_column(String(200), nullable=False)
    current_price: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    last_updated: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    # Preserves the portfolio's ordering of positions
    sort_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    portfolio: Mapped[PortfolioRecord] = relationship(back_populates="positions")
    transactions: Mapped[list[TransactionRecord]] = relationship(
        back_populates="position",
        cascade="all, delete-orphan",
        order_by="TransactionRecord.sort_order",
    )

    __table_args__ = (
        Index("idx_positions_portfolio", "portfolio_id"),
        Index("idx_positions_symbol", "symbol"),
    )


class TransactionRecord(Base):
    """Stored buy/sell event."""

    __tablename__ = "transactions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    position_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("positions.id", ondelete="CASCADE"), nullable=False
    )
    shares: Mapped[int] = mapped_column(Integer, nullable=False)  # negative for sells
    price_per_share: Mapped[float] = mapped_column(Float, nullable=False)
    executed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    type: Mapped[str] = mapped_column(String(10), nullable=False)  # "buy" or "sell"
    sort_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    position: Mapped[PositionRecord] = relationship(back_populates="transactions")

    __table_args__ = (
        Index("idx_transactions_position", "position_id"),
        Index("idx_transactions_executed", "executed_at"),
    )
