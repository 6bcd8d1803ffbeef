"""PostgreSQL engine, sessions and the per-request transaction."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import logfire
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from cleartrack.config import Settings

APPLICATION_NAME = "cleartrack-api"


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the asyncpg engine, named in pg_stat_activity."""
    database = settings.database
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
        connect_args={"server_settings": {"application_name": APPLICATION_NAME}},
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


@asynccontextmanager
async def request_transaction(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """Open the session shared by everything one request writes.

    Commits when the block exits cleanly and rolls back if it raises, so an
    invite claim never outlives a failed account creation.
    """
    async with session_factory() as session:
        try:
            yield session
        except Exception as e:
            logfire.warn("Session rollback", error=str(e))
            await session.rollback()
            raise
        await session.commit()
        logfire.debug("Session committed")
