from datetime import datetime
from typing import List, Optional
import uuid

from pydantic import BaseModel, ConfigDict, Field, field_validator

from portal.db.models.board_meeting import MeetingStatus
from portal.domains.common.schemas import RecordBase, RecordResponse, strip_required


class MeetingUpdate(BaseModel):
    """이사회 수정 (부분)"""
    title: Optional[str] = Field(None, max_length=255)
    content: Optional[str] = None
    meeting_date: Optional[datetime] = None
    location: Optional[str] = Field(None, max_length=255)
    status: Optional[MeetingStatus] = None

    model_config = ConfigDict(use_enum_values=True)

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        return strip_required(v, '제목을 입력해주세요.')


class MeetingFileResponse(RecordBase):
    board_meeting_id: uuid.UUID
    file_name: str
    file_type: str
    file_size: int
    file_path: str
    url: Optional[str] = None
    size_label: Optional[str] = None


class MeetingResponse(RecordResponse):
    title: str
    content: Optional[str] = None
    meeting_date: datetime
    location: Optional[str] = None
    status: str
    user_id: Optional[uuid.UUID] = None
    files: List[MeetingFileResponse] = []
