# school_api/core/database.py
"""Database connection and session management using SQLAlchemy."""
from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
from sqlalchemy import text
import logging

from .config import settings

logger = logging.getLogger(__name__)


def _engine_options(database_url: str) -> dict:
    """Engine keyword arguments for the configured backend"""
    options = {"echo": settings.environment == "development" and settings.log_level == "debug"}

    if database_url.startswith("sqlite"):
        # A single shared connection keeps in-memory databases alive across sessions
        options.update(
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
        return options

    options.update(
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_recycle=settings.db_pool_recycle,
        pool_pre_ping=True,
    )
    if database_url.startswith("postgresql+asyncpg"):
        options["connect_args"] = {
            "command_timeout": 60,
            "server_settings": {
                "application_name": "school_api",
                "idle_in_transaction_session_timeout": "60s",
                "lock_timeout": "30s",
            }
        }
    return options


engine = create_async_engine(settings.database_url, **_engine_options(settings.database_url))

# Session factory for API requests
AsyncSessionLocal = async_sessionmaker(
    engine,
    expire_on_commit=False,
    class_=AsyncSession,
    autoflush=False,
)

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session for API requests with proper error handling"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception as e:
            logger.error(f"Database session error: {e}")
            await session.rollback()
            raise
        finally:
            await session.close()

async def health_check_db() -> bool:
    """Fast health check"""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
            return True
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return False

async def create_all():
    """Create every mapped table (development and tests; production uses Alembic)"""
    from ..models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema created")

async def close_db_connections():
    """Properly close all database connections"""
    await engine.dispose()
    logger.info("Database connections closed")
