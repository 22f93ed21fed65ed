import re
from typing import Optional
import uuid

from pydantic import BaseModel, Field, field_validator

from portal.domains.common.schemas import RecordResponse, strip_required

SCHEME_PATTERN = re.compile(r"^https?://", re.IGNORECASE)


def normalize_url(value: Optional[str]) -> Optional[str]:
    """스킴이 없으면 http:// 를 붙인다"""
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError('URL을 입력해주세요.')
    if not SCHEME_PATTERN.match(value):
        value = f"http://{value}"
    return value


class BookmarkCreate(BaseModel):
    """즐겨찾기 추가"""
    title: str = Field(..., min_length=1, max_length=255)
    url: str = Field(..., min_length=1, max_length=2048)
    description: Optional[str] = None
    icon: Optional[str] = Field(None, max_length=255)

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        return strip_required(v, '제목을 입력해주세요.')

    @field_validator('url')
    @classmethod
    def validate_url(cls, v):
        return normalize_url(v)


class BookmarkUpdate(BaseModel):
    title: Optional[str] = Field(None, max_length=255)
    url: Optional[str] = Field(None, max_length=2048)
    description: Optional[str] = None
    icon: Optional[str] = Field(None, max_length=255)

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        return strip_required(v, '제목을 입력해주세요.')

    @field_validator('url')
    @classmethod
    def validate_url(cls, v):
        return normalize_url(v)


class BookmarkResponse(RecordResponse):
    title: str
    url: str
    description: Optional[str] = None
    icon: Optional[str] = None
    user_id: uuid.UUID
