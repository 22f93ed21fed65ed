from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
import uuid


class UserCreate(BaseModel):
    """회원가입 요청"""
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    name: Optional[str] = Field(None, max_length=100)

    @field_validator('password')
    @classmethod
    def validate_password(cls, v):
        if not any(c.isalpha() for c in v):
            raise ValueError('비밀번호에는 문자가 포함되어야 합니다.')
        if not any(c.isdigit() for c in v):
            raise ValueError('비밀번호에는 숫자가 포함되어야 합니다.')
        return v


class UserLogin(BaseModel):
    """로그인 요청"""
    email: EmailStr
    password: str


class Token(BaseModel):
    """JWT 토큰"""
    access_token: str
    token_type: str = "bearer"


class SessionResponse(BaseModel):
    """현재 세션 정보"""
    user_id: uuid.UUID
    email: Optional[str] = None
    role: Optional[str] = None
    name: Optional[str] = None
    display_name: str
    is_admin: bool
