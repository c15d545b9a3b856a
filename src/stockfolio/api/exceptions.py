"""Custom exceptions for quote provider errors."""

from __future__ import annotations


class QuoteError(Exception):
    """Base exception for quote provider errors."""


class InvalidURLError(QuoteError):
    """A request URL could not be built (e.g. an empty or malformed symbol)."""

    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__("Invalid URL")


class NoPriceDataError(QuoteError):
    """The provider responded but had no usable price for the symbol."""

    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__("No price data available for this symbol")


class QuoteTransportError(QuoteError):
    """Network, timeout or decoding failure while talking to the provider."""


class InvalidDataError(QuoteTransportError):
    """Response body could not be decoded into the expected shape."""

    def __init__(self, message: str = "Unable to parse response") -> None:
        self.message = message
        super().__init__(message)


class RateLimitError(QuoteTransportError):
    """Provider rate limit exceeded (HTTP 429 or a throttling notice in the body)."""

    def __init__(self, message: str = "Rate limit exceeded") -> None:
        self.message = message
        super().__init__(message)


class QuoteAPIError(QuoteTransportError):
    """HTTP API error with status code."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"API Error {status_code}: {message}")
