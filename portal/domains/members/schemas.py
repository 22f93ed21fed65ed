from typing import Optional
import uuid

from pydantic import BaseModel, EmailStr, Field, field_validator

from portal.domains.common.permissions import SessionContext
from portal.domains.common.schemas import RecordResponse, strip_required


class MemberCreate(BaseModel):
    """디렉터리 항목 추가 (관리자)"""
    name: str = Field(..., min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    department: Optional[str] = Field(None, max_length=100)
    role: Optional[str] = Field(None, max_length=50)
    phone: Optional[str] = Field(None, max_length=50)
    image: Optional[str] = Field(None, max_length=1024)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return strip_required(v, '이름을 입력해주세요.')


class MemberUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=100)
    email: Optional[EmailStr] = None
    department: Optional[str] = Field(None, max_length=100)
    role: Optional[str] = Field(None, max_length=50)
    phone: Optional[str] = Field(None, max_length=50)
    image: Optional[str] = Field(None, max_length=1024)


class ProfileUpdate(BaseModel):
    """본인 프로필 수정 (role은 관리자만 변경)"""
    name: Optional[str] = Field(None, max_length=100)
    department: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=50)
    image: Optional[str] = Field(None, max_length=1024)


class MemberResponse(RecordResponse):
    name: Optional[str] = None
    email: Optional[str] = None
    department: Optional[str] = None
    role: Optional[str] = None
    phone: Optional[str] = None
    image: Optional[str] = None

    @classmethod
    def from_record(cls, record, session: Optional[SessionContext], **extra):
        # 디렉터리 편집은 관리자만
        allowed = session is not None and session.is_admin
        extra.setdefault("can_edit", allowed)
        extra.setdefault("can_delete", allowed)
        return super().from_record(record, session, **extra)


class ProfileResponse(BaseModel):
    """저장된 프로필이 없으면 id/email만 채운다"""
    id: uuid.UUID
    email: Optional[str] = None
    name: Optional[str] = None
    department: Optional[str] = None
    role: Optional[str] = None
    phone: Optional[str] = None
    image: Optional[str] = None
    exists: bool = True
