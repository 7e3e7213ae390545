"""
Database session configuration.

This module handles database engine creation for the ``database`` storage
backend using SQLAlchemy with async support (SQLite via aiosqlite by
default, any async driver URL works).
"""

from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from dailyops.app.core.config import settings

# Create declarative base for models
Base = declarative_base()


def create_engine(database_url: str = None, **kwargs) -> AsyncEngine:
    """Create an async engine for the configured (or given) database URL."""
    return create_async_engine(
        database_url or settings.database_url,
        echo=settings.db_echo,
        future=True,
        **kwargs,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """Create an async session factory bound to ``engine``."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )
