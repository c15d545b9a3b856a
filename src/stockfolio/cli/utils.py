"""Shared utilities for CLI commands (console output, async helpers, formatting)."""

from __future__ import annotations

import asyncio
from datetime import date, datetime
from typing import TYPE_CHECKING, TypeVar

import pytz
import typer
from rich.console import Console

from stockfolio.constants import PROVIDER_TIMEZONE

if TYPE_CHECKING:
    from collections.abc import Coroutine

console = Console()

T = TypeVar("T")


def run_async(coro: Coroutine[object, object, T]) -> T:
    """Run a coroutine from a sync CLI command.

    Raises:
        typer.Exit: With code 130 on KeyboardInterrupt (standard SIGINT exit code).
    """
    try:
        return asyncio.run(coro)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")
        raise typer.Exit(130) from None


def exit_with_error(message: str) -> typer.Exit:
    """Print a standardized error line and return the Exit to raise."""
    console.print(f"[red]Error:[/red] {message}")
    return typer.Exit(1)


def parse_trade_date(raw: str | None) -> datetime:
    """Parse a `YYYY-MM-DD` option into exchange-local midnight (today when omitted).

    Raises:
        typer.Exit: If the value is not a valid date.
    """
    exchange_tz = pytz.timezone(PROVIDER_TIMEZONE)
    if raw is None:
        day = datetime.now(exchange_tz).date()
    else:
        try:
            day = date.fromisoformat(raw.strip())
        except ValueError:
            raise exit_with_error(f"Invalid date '{raw}'. Expected YYYY-MM-DD.") from None
    return exchange_tz.localize(datetime(day.year, day.month, day.day))


def format_currency(value: float) -> str:
    """Format a dollar amount (negative values keep their sign)."""
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_signed_percent(value: float) -> str:
    """Format a percentage with colour: green for gains, red for losses."""
    text = f"{value:+.2f}%"
    if value > 0:
        return f"[green]{text}[/green]"
    if value < 0:
        return f"[red]{text}[/red]"
    return text
