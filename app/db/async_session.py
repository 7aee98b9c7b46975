from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import text, event
from typing import AsyncGenerator, Optional, Dict, Any
import logging
import asyncio
import time

from app.core.config import settings

logger = logging.getLogger(__name__)


def enable_sqlite_foreign_keys(engine) -> None:
    """Turn on FK enforcement for SQLite so ON DELETE CASCADE holds."""

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


class AsyncDatabaseManager:
    """
    Manages async database connections and sessions.

    This class provides centralized management of the async engine and the
    session factory, including session lifecycle management and proper
    cleanup of resources.
    """

    def __init__(self, database_url: Optional[str] = None):
        self.database_url = database_url or settings.async_database_url
        self.async_engine = None
        self.async_session_factory = None
        self._is_initialized = False
        self._initialize_engine()

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    def _initialize_engine(self):
        """Initialize the async database engine."""
        if not self.database_url:
            raise ValueError("Async database URL is not configured")

        logger.info(f"Initializing async database engine with URL: {self.database_url[:50]}...")
        logger.info(f"Environment: {settings.ENVIRONMENT}")

        if self.is_sqlite:
            self.async_engine = create_async_engine(
                self.database_url,
                echo=settings.ASYNC_DB_ECHO,
                connect_args={"check_same_thread": False},
            )
            enable_sqlite_foreign_keys(self.async_engine)
        else:
            logger.info(f"Pool configuration - Size: {settings.ASYNC_DB_POOL_SIZE}, "
                        f"Max Overflow: {settings.ASYNC_DB_MAX_OVERFLOW}, "
                        f"Timeout: {settings.ASYNC_DB_POOL_TIMEOUT}s, Recycle: {settings.ASYNC_DB_POOL_RECYCLE}s")
            self.async_engine = create_async_engine(
                self.database_url,
                echo=settings.ASYNC_DB_ECHO,
                pool_pre_ping=settings.ASYNC_DB_POOL_PRE_PING,
                pool_size=settings.ASYNC_DB_POOL_SIZE,
                max_overflow=settings.ASYNC_DB_MAX_OVERFLOW,
                pool_recycle=settings.ASYNC_DB_POOL_RECYCLE,
                pool_timeout=settings.ASYNC_DB_POOL_TIMEOUT,
            )

        self.async_session_factory = async_sessionmaker(
            bind=self.async_engine,
            class_=AsyncSession,
            expire_on_commit=False,  # Keep objects accessible after commit
            autoflush=False,
        )

        self._is_initialized = True
        logger.info("Async database engine initialized successfully")

    async def get_async_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Get an async database session with proper lifecycle management.

        Yields:
            AsyncSession: Database session for async operations

        Raises:
            RuntimeError: If the database manager is not initialized
        """
        if not self._is_initialized:
            raise RuntimeError("AsyncDatabaseManager is not initialized")

        async with self.async_session_factory() as session:
            try:
                yield session
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(f"Database error in session: {e}")
                raise
            except Exception:
                await session.rollback()
                raise

    async def test_connection(self) -> bool:
        """
        Test the database connection.

        Returns:
            bool: True if connection is successful, False otherwise
        """
        try:
            async with self.async_session_factory() as session:
                await session.execute(text("SELECT 1"))
                return True
        except SQLAlchemyError as e:
            logger.error(f"Database connection test failed: {e}")
            return False

    async def close(self):
        """Dispose of the engine and all pooled connections."""
        if self.async_engine:
            try:
                await self.async_engine.dispose()
                logger.info("Async database engine disposed successfully")
            finally:
                self._is_initialized = False
                self.async_engine = None
                self.async_session_factory = None


# Global async database manager instance (singleton pattern)
_async_db_manager: Optional[AsyncDatabaseManager] = None
_manager_lock = asyncio.Lock()


async def get_async_db_manager() -> AsyncDatabaseManager:
    """Return the global manager, creating it on first use."""
    global _async_db_manager

    if _async_db_manager is None:
        async with _manager_lock:
            if _async_db_manager is None:
                _async_db_manager = AsyncDatabaseManager()
    return _async_db_manager


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a request-scoped async session."""
    manager = await get_async_db_manager()
    async for session in manager.get_async_session():
        yield session


async def check_async_database_health() -> Dict[str, Any]:
    """Run a connectivity probe and report its latency."""
    start_time = time.time()
    health_status: Dict[str, Any] = {"status": "unhealthy"}

    manager = await get_async_db_manager()
    connection_test = await manager.test_connection()

    health_status["database"] = "connected" if connection_test else "disconnected"
    health_status["response_time_ms"] = round((time.time() - start_time) * 1000, 2)
    if connection_test:
        health_status["status"] = "healthy"
    return health_status


async def startup_async_database():
    """Initialize the database manager on application startup."""
    await get_async_db_manager()


async def shutdown_async_database():
    """
    Close the global async database manager.

    Called during application shutdown to release pooled connections.
    """
    global _async_db_manager

    if _async_db_manager is not None:
        await _async_db_manager.close()
        _async_db_manager = None
