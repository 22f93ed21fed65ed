from typing import Optional
import uuid

from pydantic import BaseModel, Field, field_validator

from portal.domains.common.schemas import RecordResponse, strip_required


def format_file_size(size: int) -> str:
    """바이트 → 사람이 읽기 쉬운 크기"""
    if size < 1024:
        return f"{size} B"
    if size < 1024 ** 2:
        return f"{size / 1024:.1f} KB"
    if size < 1024 ** 3:
        return f"{size / 1024 ** 2:.1f} MB"
    return f"{size / 1024 ** 3:.1f} GB"


class DocumentUpdate(BaseModel):
    """문서 정보 수정 (파일 자체는 교체 불가)"""
    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        return strip_required(v, '제목을 입력해주세요.')


class DocumentResponse(RecordResponse):
    title: str
    description: Optional[str] = None
    file_path: str
    file_type: str
    file_size: int
    user_id: Optional[uuid.UUID] = None
    author: str = "Unknown"
    url: Optional[str] = None
    size_label: Optional[str] = None
