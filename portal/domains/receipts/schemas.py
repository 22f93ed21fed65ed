from typing import Optional
import uuid

from pydantic import BaseModel, Field, field_validator

from portal.domains.common.permissions import SessionContext
from portal.domains.common.schemas import RecordResponse, strip_required


class ReceiptCreate(BaseModel):
    """기부금 영수증 신청"""
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
    receipt_file: Optional[str] = Field(None, max_length=1024)

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        return strip_required(v, '제목을 입력해주세요.')

    @field_validator('content')
    @classmethod
    def validate_content(cls, v):
        return strip_required(v, '내용을 입력해주세요.')


class ReceiptUpdate(BaseModel):
    title: Optional[str] = Field(None, max_length=255)
    content: Optional[str] = None
    amount: Optional[float] = Field(None, gt=0)
    receipt_file: Optional[str] = Field(None, max_length=1024)

    @field_validator('title', 'content')
    @classmethod
    def validate_text(cls, v):
        return strip_required(v, '빈 값은 허용되지 않습니다.')


class ReceiptResponse(RecordResponse):
    title: str
    content: str
    amount: float
    processed: bool = False
    user_id: uuid.UUID
    author: str
    receipt_file: Optional[str] = None
    can_toggle: bool = False

    @classmethod
    def from_record(cls, record, session: Optional[SessionContext], **extra):
        extra.setdefault("can_toggle", session is not None and session.is_admin)
        return super().from_record(record, session, **extra)


class ReceiptCommentResponse(RecordResponse):
    receipt_id: uuid.UUID
    user_id: uuid.UUID
    author: str
    content: str
    attachment_url: Optional[str] = None
