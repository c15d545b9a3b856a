"""Buy and sell commands."""

from __future__ import annotations

from pathlib import Path  # noqa: TC003 - Required at runtime for Typer introspection
from typing import Annotated

import typer

from stockfolio.cli.portfolio._helpers import load_portfolio, open_store
from stockfolio.cli.utils import (
    console,
    exit_with_error,
    format_currency,
    parse_trade_date,
    run_async,
)
from stockfolio.paths import DEFAULT_DB_PATH

DateOption = Annotated[
    str | None,
    typer.Option("--date", help="Trade date (YYYY-MM-DD). Defaults to today."),
]


def portfolio_buy(
    symbol: Annotated[str, typer.Argument(help="Ticker symbol, e.g. AAPL.")],
    shares: Annotated[int, typer.Argument(help="Number of shares bought.")],
    trade_date: DateOption = None,
    name: Annotated[
        str | None, typer.Option("--name", "-n", help="Portfolio name.")
    ] = None,
    db_path: Annotated[
        Path, typer.Option("--db", "-d", help="Path to SQLite database file.")
    ] = DEFAULT_DB_PATH,
) -> None:
    """Record a purchase at the day's closing price."""
    from stockfolio.api import QuoteClient
    from stockfolio.portfolio import PortfolioActionError, PortfolioService

    on = parse_trade_date(trade_date)

    async def _buy() -> None:
        async with open_store(db_path) as store, QuoteClient() as quotes:
            portfolio = await load_portfolio(store, name)
            service = PortfolioService(store, quotes)
            try:
                position = await service.buy(portfolio, symbol, shares, on)
            except PortfolioActionError as e:
                raise exit_with_error(e.message) from None

        bought = position.transactions[-1]
        console.print(
            f"[green]✓[/green] Bought {shares} {position.symbol} @ "
            f"{format_currency(bought.price_per_share)} "
            f"(now {position.total_shares} shares, {format_currency(position.current_value)})"
        )

    run_async(_buy())


def portfolio_sell(
    symbol: Annotated[str, typer.Argument(help="Ticker symbol, e.g. AAPL.")],
    shares: Annotated[int, typer.Argument(help="Number of shares sold.")],
    trade_date: DateOption = None,
    name: Annotated[
        str | None, typer.Option("--name", "-n", help="Portfolio name.")
    ] = None,
    db_path: Annotated[
        Path, typer.Option("--db", "-d", help="Path to SQLite database file.")
    ] = DEFAULT_DB_PATH,
) -> None:
    """Record a sale at the day's closing price."""
    from stockfolio.api import QuoteClient
    from stockfolio.portfolio import PortfolioActionError, PortfolioService

    on = parse_trade_date(trade_date)

    async def _sell() -> None:
        async with open_store(db_path) as store, QuoteClient() as quotes:
            portfolio = await load_portfolio(store, name)
            service = PortfolioService(store, quotes)
            try:
                position = await service.sell(portfolio, symbol, shares, on)
            except PortfolioActionError as e:
                raise exit_with_error(e.message) from None

        sold = position.transactions[-1]
        console.print(
            f"[green]✓[/green] Sold {shares} {position.symbol} @ "
            f"{format_currency(sold.price_per_share)} "
            f"({position.total_shares} shares remaining)"
        )

    run_async(_sell())
