"""Portfolio refresh command - update quotes for every position."""

from __future__ import annotations

from pathlib import Path  # noqa: TC003 - Required at runtime for Typer introspection
from typing import Annotated

import typer

from stockfolio.cli.portfolio._helpers import load_portfolio, open_store, positions_table
from stockfolio.cli.utils import console, format_currency, run_async
from stockfolio.paths import DEFAULT_DB_PATH


def portfolio_refresh(
    name: Annotated[
        str | None, typer.Option("--name", "-n", help="Portfolio name.")
    ] = None,
    db_path: Annotated[
        Path, typer.Option("--db", "-d", help="Path to SQLite database file.")
    ] = DEFAULT_DB_PATH,
) -> None:
    """Fetch current prices for all positions. Failed symbols are reported and skipped."""
    from stockfolio.api import QuoteClient
    from stockfolio.portfolio import PortfolioService

    async def _refresh() -> None:
        async with open_store(db_path) as store, QuoteClient() as quotes:
            portfolio = await load_portfolio(store, name)
            service = PortfolioService(store, quotes)
            with console.status("[bold blue]Refreshing prices...[/bold blue]"):
                result = await service.refresh_prices(portfolio)

        if portfolio.positions:
            console.print(positions_table(portfolio))
        console.print(
            f"\n[green]✓[/green] Updated {len(result.updated)} position(s). "
            f"Total Value: {format_currency(portfolio.total_value)}"
        )
        for symbol, reason in result.failed.items():
            console.print(f"[yellow]Skipped {symbol}:[/yellow] {reason}")

    run_async(_refresh())
