"""Chart command - sampled price series for a held position."""

from __future__ import annotations

import json
from pathlib import Path  # noqa: TC003 - Required at runtime for Typer introspection
from typing import TYPE_CHECKING, Annotated

import typer
from rich.table import Table

from stockfolio.cli.utils import console, exit_with_error, format_currency, run_async
from stockfolio.paths import DEFAULT_DB_PATH

if TYPE_CHECKING:
    from stockfolio.charts import ChartSeries


def chart(
    symbol: Annotated[str, typer.Argument(help="Ticker symbol of a held position.")],
    timeframe: Annotated[
        str,
        typer.Option("--timeframe", "-t", help="One of 1D, 1W, 1M, 3M, 1Y, ALL."),
    ] = "1M",
    name: Annotated[
        str | None, typer.Option("--name", "-n", help="Portfolio name.")
    ] = None,
    db_path: Annotated[
        Path, typer.Option("--db", "-d", help="Path to SQLite database file.")
    ] = DEFAULT_DB_PATH,
    output_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Build a price series for a position (synthetic points fill provider gaps)."""
    from stockfolio.api import QuoteClient
    from stockfolio.charts import ChartSeriesBuilder, ChartTimeframe
    from stockfolio.cli.portfolio._helpers import load_portfolio, open_store

    try:
        frame = ChartTimeframe.parse(timeframe)
    except ValueError as e:
        raise exit_with_error(str(e)) from None

    async def _build() -> ChartSeries:
        async with open_store(db_path) as store:
            portfolio = await load_portfolio(store, name)
        position = portfolio.find_position(symbol)
        if position is None:
            raise exit_with_error(f"{symbol.upper()} is not held in {portfolio.name}.")

        async with QuoteClient() as client:
            with console.status(f"[bold blue]Loading {frame.value} chart...[/bold blue]"):
                return await ChartSeriesBuilder(client).build(position, frame)

    series = run_async(_build())

    if output_json:
        payload = {
            "symbol": series.symbol,
            "timeframe": series.timeframe.value,
            "points": [
                {"date": p.date.isoformat(), "price": p.price, "synthetic": p.synthetic}
                for p in series.points
            ],
        }
        typer.echo(json.dumps(payload, indent=2))
        return

    table = Table(title=f"{series.symbol} - {series.timeframe.value}")
    table.add_column("Date", style="cyan")
    table.add_column("Price", justify="right")
    table.add_column("Source", style="dim")
    for point in series.points:
        table.add_row(
            point.date.strftime("%Y-%m-%d %H:%M"),
            format_currency(point.price),
            "synthetic" if point.synthetic else "provider",
        )
    console.print(table)

    change = series.price_change
    color = "green" if change >= 0 else "red"
    console.print(f"\nChange: [{color}]{format_currency(change)}[/{color}]")
    if series.synthetic_count:
        console.print(
            f"[yellow]{series.synthetic_count} of {len(series)} point(s) are synthetic "
            "(provider unavailable or rate-limited).[/yellow]"
        )
