from typing import List, Optional
import uuid

from pydantic import BaseModel, Field, field_validator

from portal.db.models.notice import DEFAULT_CATEGORY
from portal.domains.common.schemas import RecordResponse, strip_required

NOTICE_CATEGORIES = ("공지", "모집", "행사", "기타")
PAGE_SIZE = 10


def validate_category(value: Optional[str]) -> Optional[str]:
    if value is not None and value not in NOTICE_CATEGORIES:
        raise ValueError(f"분류는 {', '.join(NOTICE_CATEGORIES)} 중 하나여야 합니다.")
    return value


class NoticeUpdate(BaseModel):
    """공지사항 수정"""
    title: Optional[str] = Field(None, max_length=255)
    content: Optional[str] = None
    category: Optional[str] = None

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        return strip_required(v, '제목을 입력해주세요.')

    @field_validator('category')
    @classmethod
    def check_category(cls, v):
        return validate_category(v)


class NoticeResponse(RecordResponse):
    title: str
    content: Optional[str] = None
    category: str = DEFAULT_CATEGORY
    author: str
    user_id: uuid.UUID
    views: int = 0
    attachment_url: Optional[str] = None


class NoticeListResponse(BaseModel):
    notices: List[NoticeResponse]
    total: int
    page: int
    per_page: int
    total_pages: int


class NoticeCommentResponse(RecordResponse):
    notice_id: uuid.UUID
    user_id: uuid.UUID
    author: str
    content: str
