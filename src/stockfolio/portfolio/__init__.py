"""Portfolio model, valuation engine and portfolio actions."""

from stockfolio.portfolio.models import Portfolio, Position, Transaction, TransactionType
from stockfolio.portfolio.service import (
    PortfolioActionError,
    PortfolioService,
    RefreshResult,
)

__all__ = [
    "Portfolio",
    "PortfolioActionError",
    "PortfolioService",
    "Position",
    "RefreshResult",
    "Transaction",
    "TransactionType",
]
