import uuid
from datetime import datetime
from typing import Any, ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from portal.domains.common.permissions import SessionContext


class RecordBase(BaseModel):
    """모든 리소스 응답의 공통 필드"""

    id: uuid.UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_record(cls, record: Any, **extra):
        return cls.model_validate(record).model_copy(update=extra)


class RecordResponse(RecordBase):
    """작성자/관리자 수정·삭제 가능 여부를 함께 내려주는 응답"""

    can_edit: bool = False
    can_delete: bool = False

    owner_field: ClassVar[str] = "user_id"

    @classmethod
    def from_record(cls, record: Any, session: Optional[SessionContext], **extra):
        allowed = session is not None and session.can_modify(getattr(record, cls.owner_field, None))
        response = cls.model_validate(record)
        return response.model_copy(update={"can_edit": allowed, "can_delete": allowed, **extra})


def strip_required(value: Optional[str], message: str) -> Optional[str]:
    """None은 그대로, 공백뿐인 문자열은 거부"""
    if value is None:
        return value
    if not value.strip():
        raise ValueError(message)
    return value.strip()


class CommentCreate(BaseModel):
    """댓글 작성 (공지/영수증 공용)"""
    content: str = Field(..., min_length=1, max_length=5000)

    @field_validator('content')
    @classmethod
    def validate_content(cls, v):
        return strip_required(v, '댓글 내용을 입력해주세요.')
