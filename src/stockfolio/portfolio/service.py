"""Portfolio actions: buying, selling, refreshing quotes and removing holdings.

The service mutates the in-memory aggregate and hands every mutation to a store
collaborator for persistence. Quote failures abort a single user action
(`PortfolioActionError`) but never a bulk refresh.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

import structlog

from stockfolio.api.exceptions import QuoteError
from stockfolio.portfolio.models import Portfolio, Position, Transaction, utc_now

if TYPE_CHECKING:
    import uuid
    from datetime import date, datetime

logger = structlog.get_logger()


class QuoteProvider(Protocol):
    """Quote operations the service depends on (implemented by `QuoteClient`)."""

    async def fetch_current_price(self, symbol: str) -> float: ...

    async def fetch_company_name(self, symbol: str) -> str: ...

    async def fetch_historical_close(self, symbol: str, on: date | datetime) -> float: ...


class PortfolioStore(Protocol):
    """Persistence collaborator (implemented by `SqlPortfolioStore`)."""

    async def save_portfolio(self, portfolio: Portfolio) -> None: ...

    async def save_position_quote(self, position: Position) -> None: ...

    async def delete_position(self, position: Position) -> None: ...

    async def delete_transaction(self, transaction_id: uuid.UUID) -> None: ...


class PortfolioActionError(Exception):
    """A user action (buy, sell, removal) could not be completed."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


@dataclass
class RefreshResult:
    """Outcome of a bulk quote refresh. Partial success is expected, not an error."""

    updated: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def complete(self) -> bool:
        return not self.failed


class PortfolioService:
    """Application operations over a portfolio aggregate."""

    def __init__(self, store: PortfolioStore, quotes: QuoteProvider | None = None) -> None:
        self._store = store
        self._quotes = quotes

    @property
    def quotes(self) -> QuoteProvider:
        """The quote provider. Creating and removing holdings work without one."""
        if self._quotes is None:
            raise RuntimeError("PortfolioService was created without a quote provider")
        return self._quotes

    async def create_portfolio(self, name: str) -> Portfolio:
        """Create and persist an empty portfolio."""
        cleaned = name.strip()
        if not cleaned:
            raise PortfolioActionError("Portfolio name must not be empty")
        portfolio = Portfolio(name=cleaned)
        await self._store.save_portfolio(portfolio)
        logger.info("Created portfolio", name=cleaned, portfolio_id=str(portfolio.id))
        return portfolio

    async def buy(
        self,
        portfolio: Portfolio,
        symbol: str,
        shares: int,
        on: datetime,
    ) -> Position:
        """
        Record a purchase of `shares` of `symbol` executed on `on`.

        The execution price is the provider's close for that day; the position's
        quote is refreshed afterwards.

        Raises:
            PortfolioActionError: If the share count is invalid or a quote cannot be fetched.
        """
        if shares <= 0:
            raise PortfolioActionError("Invalid number of shares")
        ticker = symbol.strip().upper()

        try:
            company_name = await self.quotes.fetch_company_name(ticker)
            purchase_price = await self.quotes.fetch_historical_close(ticker, on)
            current_price = await self.quotes.fetch_current_price(ticker)
        except QuoteError as e:
            logger.warning("Buy aborted", symbol=ticker, error=str(e))
            raise PortfolioActionError(f"Failed to add stock: {e}") from e

        position = portfolio.find_position(ticker)
        if position is None:
            position = Position(symbol=ticker, company_name=company_name)
            portfolio.add_position(position)

        position.add_transaction(Transaction.buy(shares, purchase_price, on))
        position.apply_quote(current_price)
        await self._store.save_portfolio(portfolio)

        logger.info(
            "Recorded buy",
            symbol=ticker,
            shares=shares,
            price=purchase_price,
            total_shares=position.total_shares,
        )
        return position

    async def sell(
        self,
        portfolio: Portfolio,
        symbol: str,
        shares: int,
        on: datetime,
    ) -> Position:
        """
        Record a sale of `shares` of `symbol` executed on `on`.

        Raises:
            PortfolioActionError: If the position is unknown, the share count is invalid
                or exceeds the held shares, or the sale price cannot be fetched.
        """
        position = portfolio.find_position(symbol)
        if position is None:
            raise PortfolioActionError("Stock not found")
        if shares <= 0:
            raise PortfolioActionError("Invalid number of shares")
        if shares > position.total_shares:
            raise PortfolioActionError("Not enough shares to sell")

        try:
            sale_price = await self.quotes.fetch_historical_close(position.symbol, on)
        except QuoteError as e:
            logger.warning("Sell aborted", symbol=position.symbol, error=str(e))
            raise PortfolioActionError(f"Failed to sell stock: {e}") from e

        position.add_transaction(Transaction.sell(shares, sale_price, on))
        await self._store.save_portfolio(portfolio)
        logger.info("Recorded sell", symbol=position.symbol, shares=shares, price=sale_price)

        # The sale is already recorded; a failed quote refresh only leaves the old price.
        try:
            current_price = await self.quotes.fetch_current_price(position.symbol)
        except QuoteError as e:
            logger.warning("Price refresh after sell failed", symbol=position.symbol, error=str(e))
            return position
        position.apply_quote(current_price)
        await self._store.save_position_quote(position)
        return position

    async def refresh_position(self, position: Position) -> float:
        """Fetch and persist the latest price for one position."""
        price = await self.quotes.fetch_current_price(position.symbol)
        position.apply_quote(price)
        await self._store.save_position_quote(position)
        return price

    async def refresh_prices(self, portfolio: Portfolio) -> RefreshResult:
        """
        Refresh every position concurrently (one task per position).

        Each update is committed on its own; failures are logged and skipped.
        """
        result = RefreshResult()
        if not portfolio.positions:
            return result

        positions = list(portfolio.positions)
        outcomes = await asyncio.gather(
            *(self.refresh_position(p) for p in positions),
            return_exceptions=True,
        )
        for position, outcome in zip(positions, outcomes, strict=True):
            if isinstance(outcome, QuoteError):
                logger.warning("Failed to refresh", symbol=position.symbol, error=str(outcome))
                result.failed[position.symbol] = str(outcome)
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                result.updated.append(position.symbol)

        logger.info(
            "Refreshed prices",
            updated=len(result.updated),
            failed=len(result.failed),
            at=utc_now().isoformat(),
        )
        return result

    async def remove_position(self, portfolio: Portfolio, symbol: str) -> Position:
        """Delete a holding and all of its transactions."""
        position = portfolio.find_position(symbol)
        if position is None:
            raise PortfolioActionError("Stock not found")
        portfolio.remove_position(position.id)
        await self._store.delete_position(position)
        logger.info("Removed position", symbol=position.symbol)
        return position

    async def remove_transaction(self, position: Position, transaction_id: uuid.UUID) -> None:
        """Delete a single transaction from a position."""
        if position.remove_transaction(transaction_id) is None:
            raise PortfolioActionError("Transaction not found")
        await self._store.delete_transaction(transaction_id)
