"""Scene command - bar layout for the 3D portfolio view."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path  # noqa: TC003 - Required at runtime for Typer introspection
from typing import TYPE_CHECKING, Annotated

import typer
from rich.table import Table

from stockfolio.cli.utils import console, run_async
from stockfolio.paths import DEFAULT_DB_PATH

if TYPE_CHECKING:
    from stockfolio.portfolio import Portfolio


def scene(
    name: Annotated[
        str | None, typer.Option("--name", "-n", help="Portfolio name.")
    ] = None,
    db_path: Annotated[
        Path, typer.Option("--db", "-d", help="Path to SQLite database file.")
    ] = DEFAULT_DB_PATH,
    output_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Print the bar layout a 3D renderer would place for the portfolio."""
    from stockfolio.cli.portfolio._helpers import load_portfolio, open_store
    from stockfolio.scene import layout_bars

    async def _load() -> Portfolio:
        async with open_store(db_path) as store:
            return await load_portfolio(store, name)

    portfolio = run_async(_load())
    bars = layout_bars(portfolio.positions)

    if output_json:
        payload = [
            {**asdict(bar), "tone": bar.tone.value, "y": bar.y, "label_y": bar.label_y}
            for bar in bars
        ]
        typer.echo(json.dumps(payload, indent=2))
        return

    table = Table(title=f"{portfolio.name} - Scene Layout")
    table.add_column("Symbol", style="cyan")
    table.add_column("x", justify="right")
    table.add_column("z", justify="right")
    table.add_column("Height", justify="right")
    table.add_column("Weight", justify="right")
    table.add_column("Tone")
    for bar in bars:
        table.add_row(
            bar.symbol,
            f"{bar.x:.3f}",
            f"{bar.z:.3f}",
            f"{bar.height:.3f}",
            f"{bar.weight:.1%}",
            bar.tone.value,
        )
    console.print(table)
