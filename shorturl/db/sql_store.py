"""
SQL Key-Value Store

KeyValueStore implementation on top of an async SQLAlchemy engine. SQLite
(aiosqlite) is the default; any async SQLAlchemy URL works.

put() merges on the primary key, so it behaves like a map assignment:
an existing value is replaced, never rejected. Every SQLAlchemy failure is
wrapped in StorageError so callers see one error type regardless of
dialect.
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlmodel import SQLModel

from shorturl.core.exceptions import StorageError
from shorturl.db.interface import KeyValueStore
from shorturl.db.models import KeyValueEntry, utcnow
from shorturl.db.session import create_engine, create_session_maker

logger = logging.getLogger(__name__)


class SQLStore(KeyValueStore):
    """KeyValueStore persisted in the short_urls table."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self.session_maker = create_session_maker(engine)

    @classmethod
    def from_url(cls, database_url: str, **engine_kwargs) -> "SQLStore":
        return cls(create_engine(database_url, **engine_kwargs))

    async def create_tables(self) -> None:
        """Create the short_urls table if it does not exist."""
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
        except SQLAlchemyError as e:
            raise StorageError("failed to create tables", original_error=e) from e

    async def get(self, key: str) -> Optional[str]:
        try:
            async with self.session_maker() as session:
                entry = await session.get(KeyValueEntry, key)
                return entry.value if entry else None
        except SQLAlchemyError as e:
            raise StorageError(f"failed to read '{key}'", original_error=e) from e

    async def put(self, key: str, value: str) -> None:
        try:
            async with self.session_maker() as session:
                await session.merge(KeyValueEntry(key=key, value=value, created_at=utcnow()))
                await session.commit()
        except SQLAlchemyError as e:
            raise StorageError(f"failed to write '{key}'", original_error=e) from e

    async def list(self, prefix: Optional[str] = None) -> List[str]:
        statement = select(KeyValueEntry.key).order_by(KeyValueEntry.key)
        if prefix:
            statement = statement.where(KeyValueEntry.key.startswith(prefix, autoescape=True))
        try:
            async with self.session_maker() as session:
                result = await session.execute(statement)
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise StorageError("failed to list keys", original_error=e) from e

    async def delete(self, key: str) -> bool:
        try:
            async with self.session_maker() as session:
                entry = await session.get(KeyValueEntry, key)
                if entry is None:
                    return False
                await session.delete(entry)
                await session.commit()
                return True
        except SQLAlchemyError as e:
            raise StorageError(f"failed to delete '{key}'", original_error=e) from e

    async def close(self) -> None:
        await self.engine.dispose()
        logger.debug("SQL store engine disposed")
