"""Database Session Manager — async engine, per-operation sessions and error mapping.

Invariants:
    - Every session rolls back on exception (no partial commits leak)
    - SQLAlchemy exceptions leave session() only as DatabaseError (core/errors.py);
      SMPServerErrors raised by managers inside the block pass through unchanged
    - pool_pre_ping on every engine; pool sizing only for server databases

Design Decisions:
    - One DatabaseSessionManager per process, created by init_db() in the lifespan
    - expire_on_commit=False: managers return domain values built after commit
    - Managers open one session per operation, so each mutation is its own
      transaction
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from smp_directory.core.errors import DatabaseError
from smp_directory.db.base import Base

logger = logging.getLogger(__name__)

# Most specific first: IntegrityError/OperationalError are DBAPIErrors
_ERROR_MAP: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (IntegrityError, "Integrity constraint violated", "commit"),
    (OperationalError, "Connection or operational error", "execute"),
    (DBAPIError, "Database driver error", "query"),
    (SQLAlchemyError, "Database operation failed", "unknown"),
)


def _is_sqlite(database_url: str) -> bool:
    return database_url.startswith("sqlite")


class DatabaseSessionManager:
    """Owns the async engine and hands out sessions with rollback and error mapping."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_kwargs = {"pool_pre_ping": True}
        if not _is_sqlite(database_url):
            engine_kwargs.update(
                pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Session scoped to the block; rolled back and mapped on database errors."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            message, operation = next(
                (msg, op) for exc_type, msg, op in _ERROR_MAP if isinstance(e, exc_type)
            )
            logger.error(
                f"DB {operation} error ({type(e).__name__}): {e}",
                extra={"error_code": "DATABASE_ERROR"},
            )
            raise DatabaseError(message, operation) from e
        finally:
            await session.close()

    async def create_schema(self) -> None:
        """Create all tables (local and sqlite deployments without alembic)."""
        # Import models so Base.metadata has them
        import smp_directory.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info(f"Database schema created ({len(Base.metadata.tables)} tables)")

    async def health_check(self) -> bool:
        """True if a trivial query succeeds (readiness probe)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
        except DatabaseError as e:
            logger.error(f"DB health check failed: {e.message}")
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Database engine disposed")


# Initialized on startup
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    logger.info(
        f"Database initialized ({'sqlite' if _is_sqlite(database_url) else 'pooled'})",
    )
    return db_manager
