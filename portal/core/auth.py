from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.db import get_db
from portal.core.errors import AuthenticationError, PermissionDeniedError
from portal.domains.common.permissions import SessionContext
from portal.domains.identity.services import IdentityService

bearer_scheme = HTTPBearer(auto_error=False)


async def get_optional_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> Optional[SessionContext]:
    """로그인하지 않은 요청이면 None"""
    if credentials is None:
        return None
    session = await IdentityService(db).get_session_from_token(credentials.credentials)
    if session is None:
        raise AuthenticationError("인증 정보가 유효하지 않습니다.")
    return session


async def get_current_session(
    session: Optional[SessionContext] = Depends(get_optional_session),
) -> SessionContext:
    if session is None:
        raise AuthenticationError()
    return session


async def require_admin(session: SessionContext = Depends(get_current_session)) -> SessionContext:
    if not session.is_admin:
        raise PermissionDeniedError("관리자만 사용할 수 있습니다.")
    return session
