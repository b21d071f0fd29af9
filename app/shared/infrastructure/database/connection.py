# 📄 File: app/shared/infrastructure/database/connection.py
#
# 🧭 Purpose (Layman Explanation):
# Manages the connection to our PostgreSQL database, like making sure we can talk to our data storage
# and handling multiple connections efficiently without overwhelming the database.
#
# 🧪 Purpose (Technical Summary):
# Async SQLAlchemy engine and session factory management. One DatabaseConnectionManager per
# application instance (no module globals), pooled PostgreSQL via asyncpg in production and
# SQLite via aiosqlite for tests, plus the declarative Base shared by all ORM models.
#
# 🔗 Dependencies:
# - sqlalchemy (async engine and sessions)
# - app/shared/config/settings.py (database configuration)
# - asyncpg / aiosqlite (async drivers)
#
# 🔄 Connected Modules / Calls From:
# - app/modules/membership/infrastructure/database (ORM models, unit of work)
# - app/modules/membership/container.py (startup/shutdown)
# - app/api/v1/health.py (database health monitoring)

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from app.shared.config.settings import Settings
from app.shared.core.exceptions import DatabaseError

logger = logging.getLogger(__name__)

# Shared declarative base for every ORM model
Base = declarative_base()


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def build_engine_kwargs(settings: Settings, url: Optional[str] = None) -> Dict[str, Any]:
    """Build SQLAlchemy engine parameters from settings."""
    url = url or settings.database_url
    if _is_sqlite(url):
        kwargs: Dict[str, Any] = {
            "url": url,
            "echo": settings.DB_ECHO,
            "connect_args": {"check_same_thread": False},
        }
        if ":memory:" in url or url.endswith("://"):
            # one shared connection, otherwise every checkout gets an empty database
            kwargs["poolclass"] = StaticPool
        return kwargs

    return {
        "url": url,
        "echo": settings.DB_ECHO,
        "pool_pre_ping": True,  # Validate connections before use
        "pool_recycle": settings.DB_POOL_RECYCLE,
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
        "connect_args": {
            "server_settings": {
                "application_name": "ncfca_membership_api",
                "jit": "off",
            },
            "command_timeout": 60,
        },
    }


class DatabaseConnectionManager:
    """
    Manages database connections with connection pooling and health checks.

    Example:
        db = DatabaseConnectionManager(settings)
        await db.initialize()
        async with db.session_factory() as session:
            ...
        await db.close()
    """

    def __init__(self, settings: Settings, url: Optional[str] = None):
        self.settings = settings
        self.url = url or settings.database_url
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker] = None
        self._health_check_query = text("SELECT 1")
        self._retry_attempts = 3
        self._retry_delay = 1.0

    async def initialize(self) -> None:
        """Create the engine and session factory."""
        if self._engine is not None:
            logger.warning("Database engine already initialized")
            return

        logger.info("Initializing database connection pool...")
        self._engine = create_async_engine(**build_engine_kwargs(self.settings, self.url))
        self._register_connection_events()
        self._session_factory = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,  # Keep objects accessible after commit
            autoflush=True,
        )
        logger.info("Database connection pool initialized")

    def _register_connection_events(self) -> None:
        if self._engine is None or not _is_sqlite(self.url):
            return

        @event.listens_for(self._engine.sync_engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            """SQLite ignores foreign keys unless asked."""
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    async def create_all(self) -> None:
        """Create every table known to Base (tests and local SQLite runs)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema created")

    async def drop_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def health_check(self) -> Dict[str, Any]:
        """
        Perform database health check and return structured status.
        """
        if self._engine is None:
            return {
                "status": "unhealthy",
                "error": "Database engine not initialized",
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }

        for attempt in range(self._retry_attempts):
            try:
                async with self._engine.connect() as conn:
                    await conn.execute(self._health_check_query)
                return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}
            except (SQLAlchemyError, OSError) as e:
                logger.warning(
                    f"Database health check failed (attempt {attempt + 1}/{self._retry_attempts}): {e}"
                )
                if attempt < self._retry_attempts - 1:
                    await asyncio.sleep(self._retry_delay * (2 ** attempt))

        logger.error("Database health check failed after all retry attempts")
        return {
            "status": "unhealthy",
            "error": "Database health check failed after all retry attempts",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    async def close(self) -> None:
        """Close database engine and all connections."""
        if self._engine is None:
            logger.warning("Database engine not initialized, nothing to close")
            return

        logger.info("Closing database connection pool...")
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database connection pool closed successfully")

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise DatabaseError("Database engine not initialized", operation="engine")
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker:
        if self._session_factory is None:
            raise DatabaseError("Session factory not initialized", operation="session")
        return self._session_factory

    @property
    def is_initialized(self) -> bool:
        return self._engine is not None
