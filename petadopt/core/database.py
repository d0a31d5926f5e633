"""
Async SQLAlchemy engine, session factory and transaction helpers.

A Database is constructed once at application startup and stored on
app.state; each request gets its own AsyncSession from it via get_db().
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncGenerator, Awaitable, Callable
from typing import TypeVar

from fastapi import Request
from sqlalchemy import delete, event, text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from petadopt.core.config import settings
from petadopt.models import Base, Organization, Pet, Photo

logger = logging.getLogger(__name__)

T = TypeVar("T")

# PostgreSQL SQLSTATEs worth retrying: serialization_failure, deadlock_detected,
# lock_not_available.
_TRANSIENT_SQLSTATES = {"40001", "40P01", "55P03"}
_TRANSIENT_SQLITE_MESSAGES = ("database is locked", "database is busy", "database table is locked")


class Database:
    """Owns the engine and session factory for one database."""

    def __init__(self, url: str, echo: bool = False) -> None:
        self.url = url
        engine_kwargs: dict[str, object] = {"echo": echo}
        if not url.startswith("sqlite"):
            engine_kwargs.update(pool_size=5, max_overflow=15, pool_pre_ping=True)

        self.engine = create_async_engine(url, **engine_kwargs)

        if url.startswith("sqlite"):
            event.listen(self.engine.sync_engine, "connect", _configure_sqlite_connection)

        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def create_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def clear(self) -> None:
        """Delete every row, children first, as one retried transaction."""
        async with self.session_factory() as session:

            async def work() -> None:
                await session.execute(delete(Photo))
                await session.execute(delete(Pet))
                await session.execute(delete(Organization))

            await run_in_transaction(session, work)

    async def ping(self) -> None:
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        await self.engine.dispose()


def _configure_sqlite_connection(dbapi_connection, connection_record) -> None:
    """Enforce ON DELETE CASCADE and make LIKE case-sensitive, as on PostgreSQL."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA case_sensitive_like=ON")
    cursor.close()


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: yields a session per request, auto-closes."""
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        try:
            yield session
        finally:
            await session.close()


# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------

def is_transient_error(exc: DBAPIError) -> bool:
    """True when the failure is lock/serialization contention, not a real error."""
    orig = exc.orig
    sqlstate = (
        getattr(orig, "sqlstate", None)
        or getattr(orig, "pgcode", None)
        or getattr(getattr(orig, "__cause__", None), "sqlstate", None)
    )
    if sqlstate in _TRANSIENT_SQLSTATES:
        return True
    message = str(orig).lower()
    return any(fragment in message for fragment in _TRANSIENT_SQLITE_MESSAGES)


async def run_in_transaction(
    session: AsyncSession,
    work: Callable[[], Awaitable[T]],
    attempts: int | None = None,
    backoff: float | None = None,
) -> T:
    """
    Run work() and commit it as one transaction.

    work() must redo everything it needs from scratch: on a transient
    contention error the session is rolled back and work() is called again,
    up to `attempts` times, sleeping `backoff * attempt` seconds in between.
    Any other error rolls back and propagates.
    """
    max_attempts = attempts if attempts is not None else settings.TRANSACTION_MAX_ATTEMPTS
    base_backoff = backoff if backoff is not None else settings.TRANSACTION_RETRY_BACKOFF_SECONDS

    attempt = 0
    while True:
        attempt += 1
        try:
            result = await work()
            await session.commit()
            return result
        except DBAPIError as exc:
            await session.rollback()
            if attempt >= max_attempts or not is_transient_error(exc):
                raise
            logger.warning(
                "Transient database error (attempt %s/%s), retrying: %s",
                attempt,
                max_attempts,
                exc.orig,
            )
        except Exception:
            await session.rollback()
            raise

        await asyncio.sleep(base_backoff * attempt)
