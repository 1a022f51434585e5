"""
Declarative base and column mixins for document records.

Dependencies: sqlalchemy
System role: ORM foundation
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Registry for every ORM model; create_tables() builds from its metadata."""


class UUIDMixin:
    """
    Client-generated UUID4 primary key.

    The key doubles as the document's vector namespace, so it must exist
    before the insert is flushed. Uuid maps to a native UUID column on
    PostgreSQL and CHAR(32) on SQLite.
    """

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)


class TimestampMixin:
    """Creation time in UTC. Records are write-once, so there is no update stamp."""

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
