from typing import Optional
import uuid

from pydantic import BaseModel, Field, field_validator

from portal.domains.common.schemas import RecordResponse, strip_required


class PostCreate(BaseModel):
    """자유게시판 글 작성"""
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    category: Optional[str] = Field(None, max_length=50)

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        return strip_required(v, '제목을 입력해주세요.')

    @field_validator('content')
    @classmethod
    def validate_content(cls, v):
        return strip_required(v, '내용을 입력해주세요.')


class PostUpdate(BaseModel):
    title: Optional[str] = Field(None, max_length=255)
    content: Optional[str] = None
    category: Optional[str] = Field(None, max_length=50)

    @field_validator('title', 'content')
    @classmethod
    def validate_text(cls, v):
        return strip_required(v, '빈 값은 허용되지 않습니다.')


class PostResponse(RecordResponse):
    title: str
    content: str
    category: Optional[str] = None
    author: str
    user_id: Optional[uuid.UUID] = None
    views: int = 0


class PostCommentResponse(RecordResponse):
    post_id: uuid.UUID
    user_id: uuid.UUID
    author: str
    content: str
