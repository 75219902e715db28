"""
Database Engine and Session Management

Builds the async SQLAlchemy engine and session factory used by the SQL
key-value store. Dialect-specific engine options live here so SQLStore
stays backend-neutral.

SQLite specifics:
- File databases use NullPool (file locking, no benefit from pooling)
- In-memory databases use StaticPool so every session shares the one
  connection that holds the data
- check_same_thread=False is required for aiosqlite
"""

from typing import Any, Dict

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession


def is_memory_sqlite(database_url: str) -> bool:
    url = make_url(database_url)
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def get_engine_kwargs(database_url: str) -> Dict[str, Any]:
    """
    Get engine configuration for the dialect in database_url.

    Returns:
        Dictionary of create_async_engine keyword arguments
    """
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return {"pool_pre_ping": True}

    return {
        "poolclass": StaticPool if is_memory_sqlite(database_url) else NullPool,
        "connect_args": {"check_same_thread": False},
    }


def create_engine(database_url: str, **kwargs) -> AsyncEngine:
    """
    Create the async engine for database_url.

    Args:
        database_url: SQLAlchemy async URL (sqlite+aiosqlite://..., postgresql+asyncpg://...)
        **kwargs: Extra engine options, merged over the dialect defaults
    """
    engine_kwargs = get_engine_kwargs(database_url)
    engine_kwargs.update(kwargs)
    return create_async_engine(database_url, echo=False, **engine_kwargs)


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker:
    """Create the session factory bound to engine."""
    return async_sessionmaker(
        engine,
        class_=SQLModelAsyncSession,
        expire_on_commit=False,  # Prevents SQLAlchemy from expiring objects after commit
        autoflush=False,
    )
