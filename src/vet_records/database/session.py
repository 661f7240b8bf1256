"""
Database session management utilities for the vet-records package.

This module provides the async session factory, session management, and the
transaction (unit of work) boundary used by every record service.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from sqlalchemy import MetaData, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from ..exceptions import (
    TransactionException,
    VetRecordsException,
    log_exception_context,
)

logger = logging.getLogger(__name__)


class SessionManager:
    """Manages database sessions and provides transaction utilities."""

    def __init__(
        self, engine: AsyncEngine, session_config: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize session manager with database engine.

        Args:
            engine: SQLAlchemy async engine
            session_config: Optional session configuration overrides
        """
        self.engine = engine
        self._is_initialized = False

        default_config = {
            "expire_on_commit": False,
            "autoflush": True,
        }
        if session_config:
            default_config.update(session_config)

        self.session_factory = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            autoflush=default_config["autoflush"],
            expire_on_commit=default_config["expire_on_commit"],
        )

    async def create_session(self) -> AsyncSession:
        """
        Create a new database session.

        Returns:
            New async database session
        """
        return self.session_factory()

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Context manager for database sessions with automatic cleanup.

        Yields:
            Database session

        Example:
            async with session_manager.get_session() as session:
                result = await session.execute(select(Pet))
        """
        session = await self.create_session()
        try:
            yield session
        except Exception as e:
            await session.rollback()
            logger.error(f"Session error, rolling back: {e}")
            raise
        finally:
            await session.close()

    @asynccontextmanager
    async def get_transaction(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Context manager for database transactions with automatic commit/rollback.

        Every resolution, collection change and the final persist-or-delete
        performed inside the block commit together, or not at all.

        Yields:
            Database session within a transaction

        Raises:
            TransactionException: If the commit itself fails for a reason
                other than one already reported as a package exception

        Example:
            async with session_manager.get_transaction() as session:
                session.add(Owner(name="Ana", lastname="Diaz"))
                # Transaction is automatically committed on success
        """
        async with self.get_session() as session:
            try:
                async with session.begin():
                    yield session
            except VetRecordsException:
                raise
            except SQLAlchemyError as e:
                log_exception_context(
                    e, {"operation": "transaction", "action": "rollback"}, logger=logger
                )
                raise TransactionException(
                    "Database transaction failed", original_error=e
                ) from e

    # Services speak of the transaction boundary as a unit of work.
    unit_of_work = get_transaction

    async def health_check(self) -> Dict[str, Any]:
        """
        Check that sessions can be opened and queried.

        Returns:
            Dictionary with health check results
        """
        health_status: Dict[str, Any] = {"status": "healthy", "checks": {}}

        try:
            start_time = time.time()
            async with self.get_session() as session:
                await session.execute(text("SELECT 1"))
            health_status["checks"]["basic_query"] = {
                "status": "pass",
                "response_time": round((time.time() - start_time) * 1000, 2),
            }
        except SQLAlchemyError as e:
            health_status["status"] = "unhealthy"
            health_status["checks"]["basic_query"] = {
                "status": "fail",
                "error": str(e),
                "error_type": type(e).__name__,
            }
            logger.error(f"Database error during health check: {e}")

        return health_status

    async def initialize_database(self, metadata: MetaData) -> None:
        """
        Create all tables described by ``metadata``.

        Args:
            metadata: SQLAlchemy metadata object containing table definitions
        """
        logger.info("Starting database initialization...")
        async with self.engine.begin() as conn:
            await conn.run_sync(metadata.create_all)
        self._is_initialized = True
        logger.info("Database tables created successfully")

    async def cleanup_database(
        self, metadata: Optional[MetaData] = None, drop_all: bool = False
    ) -> None:
        """
        Clean up database resources and optionally drop schema.

        Args:
            metadata: SQLAlchemy metadata object containing table definitions
            drop_all: Whether to drop all tables (use with caution)
        """
        logger.info("Starting database cleanup...")

        if drop_all and metadata is not None:
            async with self.engine.begin() as conn:
                await conn.run_sync(metadata.drop_all)
            logger.warning("All database tables dropped")

        await self.close_all_sessions()
        self._is_initialized = False

    async def close_all_sessions(self) -> None:
        """Close all active sessions and dispose of the engine."""
        await self.engine.dispose()
        logger.info("All database sessions and connections closed")

    @property
    def is_initialized(self) -> bool:
        """Check if the database schema has been created by this manager."""
        return self._is_initialized


# Global session manager instance (will be initialized by application)
_session_manager: Optional[SessionManager] = None


def initialize_session_manager(engine: AsyncEngine) -> SessionManager:
    """
    Initialize the global session manager.

    Args:
        engine: SQLAlchemy async engine

    Returns:
        Initialized session manager
    """
    global _session_manager
    _session_manager = SessionManager(engine)
    logger.info("Session manager initialized")
    return _session_manager


def get_session_manager() -> SessionManager:
    """
    Get the global session manager instance.

    Raises:
        RuntimeError: If session manager is not initialized
    """
    if _session_manager is None:
        raise RuntimeError(
            "Session manager not initialized. Call initialize_session_manager() first."
        )
    return _session_manager


@asynccontextmanager
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Get a database session from the global session manager."""
    manager = get_session_manager()
    async with manager.get_session() as session:
        yield session


@asynccontextmanager
async def get_transaction() -> AsyncGenerator[AsyncSession, None]:
    """Get a database transaction from the global session manager."""
    manager = get_session_manager()
    async with manager.get_transaction() as session:
        yield session
