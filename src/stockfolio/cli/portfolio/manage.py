"""Portfolio management commands - create, list, show, remove."""

from __future__ import annotations

import json
from pathlib import Path  # noqa: TC003 - Required at runtime for Typer introspection
from typing import Annotated

import typer
from rich.table import Table

from stockfolio.cli.portfolio._helpers import (
    PORTFOLIO_CREATE_TIP,
    load_portfolio,
    open_store,
    positions_table,
)
from stockfolio.cli.utils import console, exit_with_error, format_currency, run_async
from stockfolio.paths import DEFAULT_DB_PATH

DbOption = Annotated[
    Path,
    typer.Option("--db", "-d", help="Path to SQLite database file."),
]
NameOption = Annotated[
    str | None,
    typer.Option("--name", "-n", help="Portfolio name (defaults to the first portfolio)."),
]


def portfolio_create(
    name: Annotated[str, typer.Argument(help="Display name for the new portfolio.")],
    db_path: DbOption = DEFAULT_DB_PATH,
) -> None:
    """Create an empty portfolio."""
    from sqlalchemy.exc import IntegrityError

    from stockfolio.portfolio import PortfolioActionError, PortfolioService

    async def _create() -> None:
        async with open_store(db_path) as store:
            service = PortfolioService(store)
            try:
                portfolio = await service.create_portfolio(name)
            except PortfolioActionError as e:
                raise exit_with_error(e.message) from None
            except IntegrityError:
                raise exit_with_error(f"Portfolio '{name}' already exists.") from None
        console.print(f"[green]✓[/green] Created portfolio [bold]{portfolio.name}[/bold]")

    run_async(_create())


def portfolio_list(db_path: DbOption = DEFAULT_DB_PATH) -> None:
    """List portfolios with their total values."""
    async def _list() -> None:
        async with open_store(db_path) as store:
            portfolios = await store.list_portfolios()

        if not portfolios:
            console.print("[yellow]No portfolios found[/yellow]")
            console.print(PORTFOLIO_CREATE_TIP)
            return

        table = Table(title="Portfolios")
        table.add_column("Name", style="cyan")
        table.add_column("Positions", justify="right")
        table.add_column("Total Value", justify="right")
        table.add_column("Created", style="dim")
        for portfolio in portfolios:
            table.add_row(
                portfolio.name,
                str(len(portfolio.positions)),
                format_currency(portfolio.total_value),
                portfolio.created_at.strftime("%Y-%m-%d"),
            )
        console.print(table)

    run_async(_list())


def portfolio_show(
    name: NameOption = None,
    db_path: DbOption = DEFAULT_DB_PATH,
    output_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show positions, total value, composition and value distribution."""
    async def _show() -> None:
        async with open_store(db_path) as store:
            portfolio = await load_portfolio(store, name)

        if output_json:
            payload = {
                "name": portfolio.name,
                "total_value": portfolio.total_value,
                "composition": portfolio.composition(),
                "value_distribution": portfolio.value_distribution(),
                "positions": [
                    {
                        "symbol": p.symbol,
                        "company_name": p.company_name,
                        "total_shares": p.total_shares,
                        "average_cost": p.average_cost,
                        "current_price": p.current_price,
                        "current_value": p.current_value,
                        "gain_loss_percent": p.gain_loss_percent,
                        "last_updated": p.last_updated.isoformat(),
                    }
                    for p in portfolio.positions
                ],
            }
            typer.echo(json.dumps(payload, indent=2, default=str))
            return

        if not portfolio.positions:
            console.print(f"[yellow]{portfolio.name} has no positions[/yellow]")
            return
        console.print(positions_table(portfolio))
        console.print(f"\nTotal Value: {format_currency(portfolio.total_value)}")

    run_async(_show())


def portfolio_remove(
    symbol: Annotated[str, typer.Argument(help="Ticker symbol to remove.")],
    name: NameOption = None,
    db_path: DbOption = DEFAULT_DB_PATH,
) -> None:
    """Remove a holding and all of its transactions."""
    from stockfolio.portfolio import PortfolioActionError, PortfolioService

    async def _remove() -> None:
        async with open_store(db_path) as store:
            portfolio = await load_portfolio(store, name)
            service = PortfolioService(store)
            try:
                position = await service.remove_position(portfolio, symbol)
            except PortfolioActionError as e:
                raise exit_with_error(e.message) from None
        console.print(f"[green]✓[/green] Removed {position.symbol}")

    run_async(_remove())
