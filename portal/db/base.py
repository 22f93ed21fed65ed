import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Uuid
from sqlalchemy.types import TypeDecorator

from portal.core.db import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """UTC로 저장하고 항상 aware datetime으로 반환 (naive 입력은 UTC로 간주)

    SQLite는 오프셋을 저장하지 않으므로 저장 전에 UTC로 맞춘다.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value, dialect):
        if value is None:
            return value
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class BaseModel(Base):
    """UUID 키와 생성/수정 시각을 가진 공통 베이스"""

    __abstract__ = True

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at = Column(UTCDateTime, default=utcnow, nullable=False)
    updated_at = Column(UTCDateTime, default=utcnow, onupdate=utcnow, nullable=False)
