"""Quote provider client module."""

from stockfolio.api.client import QuoteClient
from stockfolio.api.config import APIConfig, get_config, set_config
from stockfolio.api.exceptions import (
    InvalidDataError,
    InvalidURLError,
    NoPriceDataError,
    QuoteAPIError,
    QuoteError,
    QuoteTransportError,
    RateLimitError,
)
from stockfolio.api.models import (
    CompanyOverview,
    DailyBar,
    GlobalQuote,
    TimeSeriesResponse,
    parse_price,
)

__all__ = [
    # Client
    "QuoteClient",
    # Config
    "APIConfig",
    "get_config",
    "set_config",
    # Exceptions
    "InvalidDataError",
    "InvalidURLError",
    "NoPriceDataError",
    "QuoteAPIError",
    "QuoteError",
    "QuoteTransportError",
    "RateLimitError",
    # Models
    "CompanyOverview",
    "DailyBar",
    "GlobalQuote",
    "TimeSeriesResponse",
    "parse_price",
]
