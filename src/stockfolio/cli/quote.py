"""Quote command - latest price for a symbol."""

from __future__ import annotations

import json
from typing import Annotated

import typer
from rich.table import Table

from stockfolio.cli.utils import console, exit_with_error, run_async


def quote(
    symbol: Annotated[str, typer.Argument(help="Ticker symbol, e.g. AAPL.")],
    output_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show the latest quote for a symbol."""
    from stockfolio.api import QuoteClient, QuoteError

    async def _fetch() -> tuple[str, dict[str, str | None]]:
        async with QuoteClient() as client:
            try:
                record = await client.fetch_quote(symbol.upper())
            except QuoteError as e:
                raise exit_with_error(str(e)) from None
            company = await client.fetch_company_name(symbol.upper())
        return company, record.model_dump(exclude_none=True)

    company, fields = run_async(_fetch())
    if "price" not in fields:
        raise exit_with_error("No price data available for this symbol")

    if output_json:
        typer.echo(json.dumps({"company_name": company, **fields}, indent=2))
        return

    table = Table(title=f"{symbol.upper()} - {company}")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    for key, value in fields.items():
        table.add_row(key, str(value))
    console.print(table)
