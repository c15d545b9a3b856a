"""Alpha Vantage response bodies shaped like the real API."""

from __future__ import annotations

from typing import Any

QUERY_URL = "https://www.alphavantage.co/query"

RATE_LIMIT_NOTE = (
    "Thank you for using Alpha Vantage! Our standard API rate limit is 25 requests per day."
)


def quote_payload(price: str | None = "150.2500", symbol: str = "AAPL") -> dict[str, Any]:
    quote: dict[str, Any] = {
        "01. symbol": symbol,
        "02. open": "148.0000",
        "03. high": "151.0000",
        "04. low": "147.5000",
        "06. volume": "51234567",
        "07. latest trading day": "2024-03-01",
        "08. previous close": "149.0000",
        "09. change": "1.2500",
        "10. change percent": "0.8389%",
    }
    if price is not None:
        quote["05. price"] = price
    return {"Global Quote": quote}


def overview_payload(name: str | None = "Apple Inc", symbol: str = "AAPL") -> dict[str, Any]:
    payload: dict[str, Any] = {"Symbol": symbol, "Exchange": "NASDAQ", "Currency": "USD"}
    if name is not None:
        payload["Name"] = name
    return payload


def time_series_payload(closes: dict[str, str], symbol: str = "AAPL") -> dict[str, Any]:
    return {
        "Meta Data": {
            "1. Information": "Daily Prices (open, high, low, close) and Volumes",
            "2. Symbol": symbol,
        },
        "Time Series (Daily)": {
            day: {
                "1. open": close,
                "2. high": close,
                "3. low": close,
                "4. close": close,
                "5. volume": "1000",
            }
            for day, close in closes.items()
        },
    }


def rate_limit_payload() -> dict[str, Any]:
    return {"Information": RATE_LIMIT_NOTE}
