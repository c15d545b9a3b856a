"""Shared helper functions for portfolio CLI commands."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from rich.table import Table

from stockfolio.cli.utils import exit_with_error, format_currency, format_signed_percent
from stockfolio.data import PortfolioDatabase, SqlPortfolioStore

if TYPE_CHECKING:
    from collections.abc import AsyncIterator
    from pathlib import Path

    from stockfolio.portfolio import Portfolio

PORTFOLIO_CREATE_TIP = "[dim]Tip: run `stockfolio portfolio create NAME` to start one.[/dim]"


@asynccontextmanager
async def open_store(db_path: Path) -> AsyncIterator[SqlPortfolioStore]:
    """Open the portfolio file (tables are created on first use) and yield its store."""
    async with PortfolioDatabase(db_path) as db:
        yield SqlPortfolioStore(db)


async def load_portfolio(store: SqlPortfolioStore, name: str | None) -> Portfolio:
    """Load a portfolio by name, or the oldest one when no name is given.

    Raises:
        typer.Exit: If no matching portfolio exists.
    """
    portfolio = await store.find_portfolio(name)
    if portfolio is not None:
        return portfolio
    if name is not None:
        raise exit_with_error(f"Portfolio '{name}' not found.")
    raise exit_with_error("No portfolio found.")


def positions_table(portfolio: Portfolio) -> Table:
    """Render a portfolio's positions as a Rich table."""
    table = Table(title=f"{portfolio.name} - Positions", show_header=True)
    table.add_column("Symbol", style="cyan", no_wrap=True)
    table.add_column("Company")
    table.add_column("Shares", justify="right")
    table.add_column("Avg Cost", justify="right")
    table.add_column("Price", justify="right")
    table.add_column("Value", justify="right")
    table.add_column("Gain/Loss", justify="right")
    table.add_column("Updated", style="dim")

    for position in portfolio.positions:
        table.add_row(
            position.symbol,
            position.company_name,
            str(position.total_shares),
            format_currency(position.average_cost) if position.average_cost > 0 else "-",
            format_currency(position.current_price),
            format_currency(position.current_value),
            format_signed_percent(position.gain_loss_percent),
            position.last_updated.strftime("%Y-%m-%d %H:%M"),
        )
    return table
