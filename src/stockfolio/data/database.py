"""SQLite file lifecycle for portfolio storage."""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from stockfolio.data.models import Base
from stockfolio.paths import DEFAULT_DB_PATH

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from sqlalchemy.ext.asyncio import AsyncEngine

logger = structlog.get_logger()


def _enable_sqlite_pragmas(dbapi_connection: Any, _connection_record: Any) -> None:
    # Cascading deletes from portfolio to transactions need foreign keys on.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


class PortfolioDatabase:
    """
    One SQLite file of portfolio aggregates.

    Entering the async context connects and creates any missing tables, so code
    inside it never sees an empty file. Reads use `read()`; writes use
    `transaction()`, which commits on success and rolls back on error. Each
    transaction is its own session, so concurrent writers commit independently.
    """

    def __init__(self, path: str | Path = DEFAULT_DB_PATH, *, echo: bool = False) -> None:
        self.path = Path(path)
        self._echo = echo
        self._engine: AsyncEngine | None = None
        self._sessions: async_sessionmaker[AsyncSession] | None = None
        self._schema_ready = False

    @property
    def url(self) -> str:
        return f"sqlite+aiosqlite:///{self.path}"

    def _connect(self) -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
        if self._engine is None or self._sessions is None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            engine = create_async_engine(
                self.url,
                echo=self._echo,
                connect_args={"check_same_thread": False},
            )
            event.listen(engine.sync_engine, "connect", _enable_sqlite_pragmas)
            self._engine = engine
            self._sessions = async_sessionmaker(engine, expire_on_commit=False)
        return self._engine, self._sessions

    async def ensure_schema(self) -> None:
        """Create missing tables once per connection lifetime."""
        if self._schema_ready:
            return
        engine, _ = self._connect()
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        self._schema_ready = True
        logger.debug("Portfolio schema ready", path=str(self.path))

    @asynccontextmanager
    async def read(self) -> AsyncIterator[AsyncSession]:
        """Session for queries; nothing is committed."""
        _, sessions = self._connect()
        async with sessions() as session:
            yield session

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """Session wrapped in a transaction that commits when the block exits cleanly."""
        _, sessions = self._connect()
        async with sessions() as session, session.begin():
            yield session

    async def close(self) -> None:
        """Dispose of the engine. The next use reconnects."""
        if self._engine is not None:
            await self._engine.dispose()
        self._engine = None
        self._sessions = None
        self._schema_ready = False

    async def __aenter__(self) -> PortfolioDatabase:
        await self.ensure_schema()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        await self.close()
