"""
Asynchronous Database Utilities Module

This module provides the async SQLAlchemy engine and session factory behind
the SQL user store.

**Security Note**: DATABASE_URL may contain credentials; it is never logged.

Key Components:
    - engine: The asynchronous SQLAlchemy engine.
    - AsyncSessionFactory: A factory for creating asynchronous database sessions.
    - create_async_db_and_tables: Creates the tables for all SQLModel models.
"""

import structlog
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

from usercred.core.config.settings import settings

logger = structlog.get_logger(__name__)


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """
    Build an async engine for the given URL.

    SQLite needs ``check_same_thread`` disabled because aiosqlite runs the
    connection on its own thread; server databases get a sized pool.
    """
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        return create_async_engine(url, echo=echo, connect_args={"check_same_thread": False})
    return create_async_engine(
        url,
        echo=echo,
        pool_size=settings.DB_POOL_SIZE,
        pool_pre_ping=True,
    )

engine = build_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)

AsyncSessionFactory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

async def create_async_db_and_tables(bind: AsyncEngine = engine) -> None:
    """
    Create tables for every SQLModel model (users) if they do not exist.
    """
    # Registers the users table on SQLModel.metadata.
    from usercred.domain.entities.user import User  # noqa: F401

    logger.info("Creating async database tables")
    async with bind.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Async database tables created")

async def dispose_engine() -> None:
    await engine.dispose()
