"""
stockfolio.

Stock portfolio tracking: valuation, quote refresh, price charts and 3D scene layout.
"""

__version__ = "0.1.0"

from stockfolio.api import QuoteClient
from stockfolio.charts import ChartSeriesBuilder, ChartTimeframe

# Configure structlog once at import time (quiet by default).
from stockfolio.logging import configure_structlog
from stockfolio.portfolio import Portfolio, PortfolioService, Position, Transaction

configure_structlog()

__all__ = [
    "ChartSeriesBuilder",
    "ChartTimeframe",
    "Portfolio",
    "PortfolioService",
    "Position",
    "QuoteClient",
    "Transaction",
    "__version__",
]
