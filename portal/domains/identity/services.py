import logging
from typing import Optional
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.config import settings
from portal.core.errors import ValidationError
from portal.core.security import create_access_token, get_password_hash, verify_password, verify_token
from portal.db.models.user import User
from portal.db.repositories.profile_repository import ProfileRepository
from portal.db.repositories.user_repository import UserRepository
from portal.domains.common.permissions import ADMIN_ROLE, SessionContext
from portal.domains.identity.schemas import UserCreate, UserLogin

logger = logging.getLogger(__name__)

MEMBER_ROLE = "member"


class IdentityService:
    """회원가입, 로그인, 토큰 → 세션 변환"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repository = UserRepository(session)
        self.profile_repository = ProfileRepository(session)

    async def register_user(self, user_data: UserCreate) -> User:
        """회원가입 (계정 + 프로필)"""
        email = user_data.email.lower()
        if await self.user_repository.email_exists(email):
            raise ValidationError("이미 가입된 이메일입니다.")

        user = await self.user_repository.create({
            "email": email,
            "password_hash": get_password_hash(user_data.password),
            "is_active": True,
        })

        role = ADMIN_ROLE if email in settings.admin_email_list else MEMBER_ROLE
        await self.profile_repository.create({
            "id": user.id,
            "email": email,
            "name": user_data.name,
            "role": role,
        })
        logger.info("registered user %s (role=%s)", user.id, role)
        return user

    async def authenticate_user(self, login_data: UserLogin) -> Optional[User]:
        user = await self.user_repository.get_by_email(login_data.email)

        if not user or not user.is_active:
            return None

        if not verify_password(login_data.password, user.password_hash):
            return None

        return user

    async def login_user(self, login_data: UserLogin) -> Optional[str]:
        """로그인 후 JWT 발급"""
        user = await self.authenticate_user(login_data)

        if not user:
            logger.info("login failed for %s", login_data.email)
            return None

        return create_access_token(data={"sub": str(user.id), "email": user.email})

    async def build_session(self, user: User) -> SessionContext:
        profile = await self.profile_repository.get(user.id)
        return SessionContext(
            user_id=user.id,
            email=user.email,
            role=profile.role if profile else None,
            name=profile.name if profile else None,
        )

    async def get_session_from_token(self, token: str) -> Optional[SessionContext]:
        """토큰에서 현재 세션 생성 (유효하지 않으면 None)"""
        payload = verify_token(token)
        if not payload or not payload.get("sub"):
            return None

        try:
            user_id = uuid.UUID(payload["sub"])
        except ValueError:
            return None

        user = await self.user_repository.get(user_id)
        if user is None or not user.is_active:
            return None

        return await self.build_session(user)
