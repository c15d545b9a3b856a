"""
CLI application for stockfolio.

Provides commands for portfolio tracking, quotes, charts and scene layout.
"""

from __future__ import annotations

from typing import Annotated

import typer
from dotenv import find_dotenv, load_dotenv

from stockfolio.cli.chart import chart
from stockfolio.cli.portfolio import app as portfolio_app
from stockfolio.cli.quote import quote
from stockfolio.cli.scene import scene
from stockfolio.cli.utils import console

app = typer.Typer(
    name="stockfolio",
    help="stockfolio CLI - track a stock portfolio and its performance.",
    add_completion=False,
)

app.add_typer(portfolio_app, name="portfolio")
app.command("quote")(quote)
app.command("chart")(chart)
app.command("scene")(scene)


@app.callback()
def main(
    api_key: Annotated[
        str | None,
        typer.Option(
            "--api-key",
            help="Alpha Vantage API key. Defaults to ALPHAVANTAGE_API_KEY.",
            show_default=False,
        ),
    ] = None,
) -> None:
    """stockfolio CLI."""
    from stockfolio.api.config import APIConfig, set_config

    load_dotenv(find_dotenv(usecwd=True))

    # Rebuild from the (possibly .env-updated) environment; the flag wins.
    config = APIConfig()
    if api_key:
        config = config.model_copy(update={"api_key": api_key.strip()})
    set_config(config)


@app.command()
def version() -> None:
    """Show version information."""
    from stockfolio import __version__

    console.print(f"stockfolio v{__version__}")
