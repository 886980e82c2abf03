"""Async SQLAlchemy engine and session factory."""

from __future__ import annotations

import structlog
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from task_manager_service.db.models import Base

logger = structlog.get_logger(__name__)


class Database:
    """Owns the process-wide engine. Created once at startup and shared by all repositories."""

    def __init__(self, url: str, *, echo: bool = False) -> None:
        kwargs: dict = {}
        if not url.startswith("sqlite"):
            kwargs["pool_size"] = 10
        elif ":memory:" in url:
            # One shared connection, otherwise every checkout sees an empty database.
            kwargs["poolclass"] = StaticPool
            kwargs["connect_args"] = {"check_same_thread": False}
        self._url = url
        self.engine: AsyncEngine = create_async_engine(url, echo=echo, **kwargs)
        self.session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )

    async def init(self) -> None:
        """Create missing tables and verify the store answers."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        await self.ping()
        logger.info("db_initialized", backend=self.engine.dialect.name)

    async def ping(self) -> None:
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def close(self) -> None:
        await self.engine.dispose()
