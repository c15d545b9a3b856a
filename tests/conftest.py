"""
Shared test fixtures.

PHILOSOPHY: Use REAL objects wherever possible. Only mock at system boundaries.
- Real dataclasses and Pydantic models (not dicts pretending to be models)
- Real SQLite (temporary file) for repository tests
- respx ONLY for HTTP boundary
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

import pytest

from stockfolio.api.config import APIConfig, set_config
from stockfolio.portfolio.models import Portfolio, Position, Transaction, TransactionType

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Callable, Generator, Sequence
    from pathlib import Path

    from stockfolio.data import PortfolioDatabase


# ============================================================================
# API Configuration
# ============================================================================
@pytest.fixture(autouse=True)
def api_config() -> Generator[APIConfig, None, None]:
    """Pin the global quote configuration to a fixed test key."""
    config = APIConfig(api_key="test-key")
    set_config(config)
    yield config
    set_config(None)


# ============================================================================
# Database Fixtures (REAL SQLite, not mocks)
# ============================================================================
@pytest.fixture
async def db(tmp_path: Path) -> AsyncGenerator[PortfolioDatabase, None]:
    """Real portfolio database on a temporary SQLite file with schema created."""
    from stockfolio.data import PortfolioDatabase

    async with PortfolioDatabase(tmp_path / "stockfolio.db") as database:
        yield database


# ============================================================================
# Domain Object Builders (create REAL objects, not dicts)
# ============================================================================
TRADE_DATE = datetime(2024, 3, 1, tzinfo=UTC)


@pytest.fixture
def make_position() -> Callable[..., Position]:
    """Factory for positions built from (shares, price) trades."""

    def _make(
        symbol: str = "AAPL",
        current_price: float = 150.0,
        trades: Sequence[tuple[int, float]] = ((10, 100.0),),
        company_name: str | None = None,
    ) -> Position:
        position = Position(
            symbol=symbol,
            company_name=company_name or f"{symbol} Inc.",
            current_price=current_price,
        )
        for shares, price in trades:
            kind = TransactionType.BUY if shares >= 0 else TransactionType.SELL
            position.add_transaction(Transaction(shares, price, TRADE_DATE, kind))
        return position

    return _make


@pytest.fixture
def make_portfolio() -> Callable[..., Portfolio]:
    """Factory for portfolios holding the given positions."""

    def _make(name: str = "Test", positions: Sequence[Position] = ()) -> Portfolio:
        return Portfolio(name=name, positions=list(positions))

    return _make
