"""Database: engine and per-request sessions for the users/profiles/posts store.

Invariants:
    - One AsyncSession per request, always closed; rolled back on any error
    - A versioned UPDATE that matched no row (lost race) → ConcurrencyError (409)
    - Every other store failure is re-raised untouched: the catch-all handler
      answers it with a plain-text 500 and nothing about the store leaks
    - health_check never raises; readiness alone reports the store as 503

Design Decisions:
    - Singleton db_manager built in the FastAPI lifespan, disposed on shutdown
    - expire_on_commit=False: routes serialize aggregates after the commit
    - Pool sizing only for server databases; SQLite keeps its default pool
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.orm.exc import StaleDataError

from devconnect.core.errors import ConcurrencyError

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Owns the async engine; hands out sessions that clean up after themselves."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_kwargs = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except StaleDataError as e:
            await session.rollback()
            logger.warning(f"Stale aggregate write rejected: {e}")
            raise ConcurrencyError(
                "Resource was modified concurrently, retry",
            ) from e
        except SQLAlchemyError:
            await session.rollback()
            logger.error("Store call failed, session rolled back", exc_info=True)
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """True when a trivial query round-trips (readiness probe)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Store unreachable: {e}")
            return False

    async def close(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs):
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)


async def close_db() -> None:
    global db_manager
    if db_manager:
        await db_manager.close()
        db_manager = None


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
