"""
Database Session Management

Engine, session factory and lifecycle hooks for the preference store.

Lifecycle:
----------
Application Start -> init_db() -> connection verified (tables created in development)
API Request       -> get_session() -> PreferenceStore queries -> commit / rollback
Application Stop  -> close_db() -> pool disposed

Production runs against PostgreSQL through asyncpg; the test suite swaps in
an in-memory SQLite database through aiosqlite, so nothing here may assume
an asyncpg-only connect argument outside the asyncpg branch.

Learning Resources:
- SQLAlchemy Engine: https://docs.sqlalchemy.org/en/20/core/engines.html
- Async Sessions: https://docs.sqlalchemy.org/en/20/orm/extensions/asyncio.html
"""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import AsyncAdaptedQueuePool, NullPool

from personalization.core.config import settings
from personalization.core.logging import get_logger

logger = get_logger(__name__)


# ================================
# Database Engine Configuration
# ================================

def get_engine_config(database_url: str | None = None) -> dict[str, Any]:
    """
    Engine keyword arguments for the current environment.

    Pooling:
    --------
    - development / production: AsyncAdaptedQueuePool sized by DB_POOL_SIZE
      and DB_MAX_OVERFLOW, connections pre-pinged and recycled
    - testing / staging: NullPool, one connection per checkout

    Args:
        database_url: URL the engine will connect to (defaults to settings)
    """
    url = database_url or settings.DATABASE_URL

    config: dict[str, Any] = {
        "echo": settings.DB_ECHO,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
    }

    # Tag connections so they are identifiable in pg_stat_activity
    if url.startswith("postgresql+asyncpg"):
        config["connect_args"] = {
            "server_settings": {"application_name": settings.APP_NAME},
        }

    if settings.is_development or settings.is_production:
        logger.info(
            "configuring_database_engine",
            environment=settings.APP_ENV,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
        )
        config.update({
            "poolclass": AsyncAdaptedQueuePool,
            "pool_size": settings.DB_POOL_SIZE,
            "max_overflow": settings.DB_MAX_OVERFLOW,
            "pool_timeout": 30,
        })
        if settings.is_production:
            config["pool_recycle"] = 7200
    else:
        logger.info(
            "configuring_database_engine",
            environment=settings.APP_ENV,
            pool_type="NullPool",
        )
        config["poolclass"] = NullPool

    return config


def create_engine(database_url: str | None = None) -> AsyncEngine:
    """
    Create the async engine.

    Args:
        database_url: Override for settings.DATABASE_URL

    Returns:
        AsyncEngine: The database engine instance
    """
    url = database_url or settings.DATABASE_URL
    engine_config = get_engine_config(url)
    engine = create_async_engine(url, **engine_config)

    logger.info(
        "database_engine_created",
        driver=engine.dialect.driver,
        pool_size=engine_config.get("pool_size", "NullPool"),
    )
    return engine


# ================================
# Global Engine Instance
# ================================
# One engine per process; it owns the connection pool
engine: AsyncEngine = create_engine()


# ================================
# Session Factory
# ================================
# expire_on_commit=False: records stay readable after commit, which lets the
# store hand them straight to pydantic schemas
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
)


# ================================
# Session Lifecycle Functions
# ================================

async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Yield one session per request.

    Any exception raised while the session is checked out rolls the
    transaction back before propagating. The session is closed by the
    `async with` block either way.

    Yields:
        AsyncSession: A database session for this request
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception as e:
            logger.error(
                "database_session_error",
                error=str(e),
                error_type=type(e).__name__,
            )
            await session.rollback()
            raise


async def init_db() -> None:
    """
    Verify the database connection on startup.

    In development the preference tables are also created directly from
    the models; every other environment relies on Alembic migrations.

    Called from: personalization.main.lifespan() startup
    """
    logger.info("initializing_database")

    try:
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))

        logger.info("database_connection_successful")

        if settings.is_development:
            # Registers the preference models on Base.metadata
            import personalization.models  # noqa: F401
            from personalization.db.base import Base

            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)

            logger.info("database_tables_created")

    except Exception as e:
        logger.error(
            "database_initialization_failed",
            error=str(e),
            error_type=type(e).__name__,
        )
        raise


async def close_db() -> None:
    """
    Dispose of the connection pool on shutdown.

    Failures are logged, not raised: the process is exiting anyway.
    """
    logger.info("closing_database_connections")

    try:
        await engine.dispose()
        logger.info("database_connections_closed")
    except Exception as e:
        logger.error(
            "database_closure_failed",
            error=str(e),
            error_type=type(e).__name__,
        )


# ================================
# Database Health Check
# ================================

async def check_db_health() -> bool:
    """
    True if the database answers a trivial query.

    Used by the /health endpoint.
    """
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    except Exception as e:
        logger.error(
            "database_health_check_failed",
            error=str(e),
            error_type=type(e).__name__,
        )
        return False
