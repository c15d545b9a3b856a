"""Pydantic models for Alpha Vantage responses.

Every field is optional: a missing or malformed field means "no data", never a
validation failure. Numeric values arrive as strings and are parsed on demand.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field


def parse_price(raw: str | None) -> float | None:
    """Parse a provider numeric string. Returns None for missing or non-numeric values."""
    if raw is None:
        return None
    try:
        value = float(raw.strip())
    except (AttributeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return value


class _ProviderModel(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True, extra="ignore", frozen=True, coerce_numbers_to_str=True
    )


class ProviderNotice(_ProviderModel):
    """Informational keys Alpha Vantage returns instead of data (throttling, bad calls)."""

    note: str | None = Field(default=None, alias="Note")
    information: str | None = Field(default=None, alias="Information")
    error_message: str | None = Field(default=None, alias="Error Message")

    @property
    def rate_limit_message(self) -> str | None:
        """Throttling notice, if the body carries one."""
        return self.note or self.information


class GlobalQuote(_ProviderModel):
    """Latest quote for a symbol (GLOBAL_QUOTE)."""

    symbol: str | None = Field(default=None, alias="01. symbol")
    open: str | None = Field(default=None, alias="02. open")
    high: str | None = Field(default=None, alias="03. high")
    low: str | None = Field(default=None, alias="04. low")
    price: str | None = Field(default=None, alias="05. price")
    volume: str | None = Field(default=None, alias="06. volume")
    latest_trading_day: str | None = Field(default=None, alias="07. latest trading day")
    previous_close: str | None = Field(default=None, alias="08. previous close")
    change: str | None = Field(default=None, alias="09. change")
    change_percent: str | None = Field(default=None, alias="10. change percent")

    @property
    def price_value(self) -> float | None:
        """Parsed last price."""
        return parse_price(self.price)


class QuoteResponse(_ProviderModel):
    """Envelope for GLOBAL_QUOTE."""

    global_quote: GlobalQuote = Field(alias="Global Quote")


class CompanyOverview(_ProviderModel):
    """Subset of the OVERVIEW response."""

    symbol: str | None = Field(default=None, alias="Symbol")
    name: str | None = Field(default=None, alias="Name")
    exchange: str | None = Field(default=None, alias="Exchange")
    currency: str | None = Field(default=None, alias="Currency")
    sector: str | None = Field(default=None, alias="Sector")


class DailyBar(_ProviderModel):
    """One day of TIME_SERIES_DAILY."""

    open: str | None = Field(default=None, alias="1. open")
    high: str | None = Field(default=None, alias="2. high")
    low: str | None = Field(default=None, alias="3. low")
    close: str | None = Field(default=None, alias="4. close")
    volume: str | None = Field(default=None, alias="5. volume")

    @property
    def close_value(self) -> float | None:
        """Parsed closing price."""
        return parse_price(self.close)


class TimeSeriesResponse(_ProviderModel):
    """Envelope for TIME_SERIES_DAILY, keyed by `YYYY-MM-DD`."""

    time_series: dict[str, DailyBar] = Field(alias="Time Series (Daily)")

    def close_on(self, day: str) -> float | None:
        """Closing price for a provider date key, or None if absent/unparseable."""
        bar = self.time_series.get(day)
        if bar is None:
            return None
        return bar.close_value
