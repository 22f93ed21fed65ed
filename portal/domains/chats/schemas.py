from datetime import datetime
from typing import List, Optional
import uuid

from pydantic import BaseModel, ConfigDict, Field, field_validator

from portal.domains.common.schemas import RecordBase, strip_required


class ChatCreate(BaseModel):
    """채팅방 생성"""
    name: str = Field(..., min_length=1, max_length=255)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return strip_required(v, '채팅방 이름을 입력해주세요.')


class ParticipantAdd(BaseModel):
    user_id: uuid.UUID


class ParticipantResponse(BaseModel):
    chat_id: uuid.UUID
    user_id: uuid.UUID
    joined_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ChatResponse(RecordBase):
    name: str
    creator_id: uuid.UUID
    participants: List[ParticipantResponse] = []


class MessageResponse(RecordBase):
    chat_id: uuid.UUID
    sender_id: uuid.UUID
    sender_name: str
    content: Optional[str] = None
    file_path: Optional[str] = None
    file_name: Optional[str] = None
    file_type: Optional[str] = None
    file_size: Optional[int] = None
    file_url: Optional[str] = None
