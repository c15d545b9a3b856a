"""Portfolio storage (SQLite via SQLAlchemy async)."""

from stockfolio.data.database import PortfolioDatabase
from stockfolio.data.models import Base, PortfolioRecord, PositionRecord, TransactionRecord
from stockfolio.data.repository import PortfolioRepository, SqlPortfolioStore

__all__ = [
    "Base",
    "PortfolioDatabase",
    "PortfolioRecord",
    "PortfolioRepository",
    "PositionRecord",
    "SqlPortfolioStore",
    "TransactionRecord",
]
