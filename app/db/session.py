"""Database session configuration"""

import logging
from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker

from app import config
from app.db.base import Base

logger = logging.getLogger(__name__)


def to_async_url(database_url: str) -> str:
    """
    Convert a database URL to its async driver form.

    postgresql:// and postgresql+asyncpg:// become postgresql+psycopg://,
    sqlite:// becomes sqlite+aiosqlite://. Already-async URLs pass through.
    """
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+psycopg://", 1)
    if database_url.startswith("postgresql+psycopg://"):
        return database_url
    if database_url.startswith("postgresql+asyncpg://"):
        # Legacy support: convert asyncpg URLs to psycopg
        return database_url.replace("postgresql+asyncpg://", "postgresql+psycopg://", 1)
    if database_url.startswith("sqlite+aiosqlite://"):
        return database_url
    if database_url.startswith("sqlite://"):
        return database_url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    raise ValueError(f"Unsupported database URL format: {database_url}")


def build_engine(database_url: str) -> AsyncEngine:
    """Create an async engine; pool tuning only applies to PostgreSQL"""
    async_url = to_async_url(database_url)

    if async_url.startswith("sqlite"):
        return create_async_engine(async_url, echo=False)

    return create_async_engine(
        async_url,
        pool_pre_ping=True,  # Verify connections before using them
        pool_size=config.DB_POOL_SIZE,
        max_overflow=config.DB_MAX_OVERFLOW,
        pool_timeout=config.DB_POOL_TIMEOUT,
        pool_recycle=config.DB_POOL_RECYCLE,
        echo=False,  # Set to True to see SQL queries in logs
    )


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


engine = build_engine(config.DATABASE_URL)

SessionLocal = build_session_factory(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency function for FastAPI routes.

    Usage:
        @app.get("/example")
        async def example(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with SessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def create_tables(bind: AsyncEngine | None = None) -> None:
    """Create all tables known to the ORM metadata (local development only)"""
    # Register models on the metadata
    import app.db.models  # noqa: F401

    target = bind or engine
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created")


# Add event listeners to monitor connection pool activity
# Note: For async engines, we listen to the sync_engine
from sqlalchemy import event  # noqa: E402


@event.listens_for(engine.sync_engine, "connect")
def on_connect(dbapi_conn, connection_record):
    """Log when a new connection is created"""
    logger.debug("New database connection created")


@event.listens_for(engine.sync_engine, "invalidate")
def on_invalidate(dbapi_conn, connection_record, exception):
    """Log when a connection is invalidated"""
    logger.warning(
        f"Database connection invalidated: {exception}",
        exc_info=exception
    )
