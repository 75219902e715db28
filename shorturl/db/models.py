"""
Database Models for the SQL Key-Value Store

The SQL backend stores the slug -> URL map as a two-column table. The
created_at column is bookkeeping for operators and is never returned by
the API.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class KeyValueEntry(SQLModel, table=True):
    """
    One key-value pair.

    Fields:
    - key: The slug (primary key, max 50 characters)
    - value: The stored URL
    - created_at: When the entry was last written
    """
    __tablename__ = "short_urls"

    key: str = Field(
        sa_column=Column(String(50), primary_key=True, nullable=False)
    )
    value: str = Field(sa_column=Column(Text, nullable=False))
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
