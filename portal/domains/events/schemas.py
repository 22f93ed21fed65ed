from datetime import datetime, timezone
from typing import Optional
import uuid

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from portal.db.models.event import EventType
from portal.domains.common.schemas import RecordResponse, strip_required


def comparable(value: datetime) -> datetime:
    """aware/naive 혼용 비교용 (naive는 UTC로 간주)"""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class EventCreate(BaseModel):
    """일정 등록"""
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    start_time: datetime
    end_time: datetime
    location: Optional[str] = Field(None, max_length=255)
    type: EventType = EventType.OTHER

    model_config = ConfigDict(use_enum_values=True)

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        return strip_required(v, '제목을 입력해주세요.')

    @model_validator(mode='after')
    def validate_period(self):
        if comparable(self.end_time) < comparable(self.start_time):
            raise ValueError('종료 시간은 시작 시간보다 빠를 수 없습니다.')
        return self


class EventUpdate(BaseModel):
    """일정 수정 (부분)"""
    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    location: Optional[str] = Field(None, max_length=255)
    type: Optional[EventType] = None

    model_config = ConfigDict(use_enum_values=True)


class EventResponse(RecordResponse):
    title: str
    description: Optional[str] = None
    start_time: datetime
    end_time: datetime
    location: Optional[str] = None
    type: str
    user_id: Optional[uuid.UUID] = None
