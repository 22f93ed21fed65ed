from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.auth import get_current_session
from portal.core.db import get_db
from portal.core.errors import AuthenticationError
from portal.domains.common.permissions import SessionContext
from portal.domains.identity.schemas import UserCreate, UserLogin, Token, SessionResponse
from portal.domains.identity.services import IdentityService

router = APIRouter(prefix="/auth", tags=["authentication"])


def session_response(session: SessionContext) -> SessionResponse:
    return SessionResponse(
        user_id=session.user_id,
        email=session.email,
        role=session.role,
        name=session.name,
        display_name=session.display_name,
        is_admin=session.is_admin,
    )


@router.post("/register", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db)
):
    """회원가입"""
    identity_service = IdentityService(db)
    user = await identity_service.register_user(user_data)
    return session_response(await identity_service.build_session(user))


@router.post("/login", response_model=Token)
async def login(
    login_data: UserLogin,
    db: AsyncSession = Depends(get_db)
):
    """로그인"""
    token = await IdentityService(db).login_user(login_data)

    if not token:
        raise AuthenticationError("이메일 또는 비밀번호가 올바르지 않습니다.")

    return {"access_token": token, "token_type": "bearer"}


@router.get("/me", response_model=SessionResponse)
async def me(session: SessionContext = Depends(get_current_session)):
    """현재 세션"""
    return session_response(session)
