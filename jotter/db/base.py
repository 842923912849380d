import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, DateTime, JSON, UUID
from sqlalchemy.dialects.postgresql import JSONB

from jotter.core.db import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite отдаёт naive datetime: считаем такие значения UTC"""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


# JSON-дерево документа; на PostgreSQL хранится как JSONB
JsonContent = JSON(none_as_null=True).with_variant(JSONB(none_as_null=True), "postgresql")


class BaseModel(Base):
    __abstract__ = True

    uuid = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
