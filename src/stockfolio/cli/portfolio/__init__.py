"""Typer CLI commands for portfolio tracking.

This package provides portfolio commands for the stockfolio CLI:
- create / list / show / remove: manage portfolios and holdings
- buy / sell: record trades at the day's closing price
- refresh: update current prices for every position
"""

import typer

from stockfolio.cli.portfolio.manage import (
    portfolio_create,
    portfolio_list,
    portfolio_remove,
    portfolio_show,
)
from stockfolio.cli.portfolio.refresh import portfolio_refresh
from stockfolio.cli.portfolio.trade import portfolio_buy, portfolio_sell

app = typer.Typer(help="Portfolio tracking commands.")

app.command("create")(portfolio_create)
app.command("list")(portfolio_list)
app.command("show")(portfolio_show)
app.command("buy")(portfolio_buy)
app.command("sell")(portfolio_sell)
app.command("refresh")(portfolio_refresh)
app.command("remove")(portfolio_remove)

__all__ = [
    "app",
    "portfolio_buy",
    "portfolio_create",
    "portfolio_list",
    "portfolio_refresh",
    "portfolio_remove",
    "portfolio_sell",
    "portfolio_show",
]
