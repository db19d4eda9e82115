"""SQLAlchemy async database setup and engine configuration.

Engines are created on demand rather than at import time so the
ingestion scripts can validate DATABASE_URL before connecting.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from app.config import Settings, get_settings


def create_db_engine(settings: Optional[Settings] = None) -> AsyncEngine:
    """Create and configure async SQLAlchemy engine.

    Returns:
        Async SQLAlchemy engine instance.
    """
    settings = settings or get_settings()
    settings.validate_store_credentials()

    is_sqlite = settings.DATABASE_URL.startswith("sqlite")
    kwargs = dict(echo=settings.SQLALCHEMY_ECHO)
    if not is_sqlite:
        kwargs.update(
            pool_pre_ping=True,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
        )
    return create_async_engine(settings.DATABASE_URL, **kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """Create async session factory.

    Args:
        engine: SQLAlchemy async engine instance.

    Returns:
        Async sessionmaker instance.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def init_db(engine: AsyncEngine) -> None:
    """Create the templates table (and any other registered models)."""
    from db.base import Base
    import db.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@asynccontextmanager
async def store_session(settings: Optional[Settings] = None) -> AsyncIterator[AsyncSession]:
    """Provide an initialized session for a single script run.

    Usage:
        async with store_session() as session:
            store = TemplateService(session)
    """
    engine = create_db_engine(settings)
    try:
        await init_db(engine)
        session_factory = create_session_factory(engine)
        async with session_factory() as session:
            yield session
    finally:
        await engine.dispose()
