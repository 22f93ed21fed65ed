from typing import Optional

from sqlalchemy import select

from portal.db.models.user import User
from portal.db.repositories.base import ResourceRepository


class UserRepository(ResourceRepository[User]):
    """인증 계정 저장소"""

    model = User
    resource_name = "users"
    required_fields = ("email", "password_hash")

    async def get_by_email(self, email: str) -> Optional[User]:
        """이메일로 사용자 조회"""
        result = await self._execute("get_by_email", select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        """이메일 중복 확인"""
        result = await self._execute("email_exists", select(User.id).where(User.email == email.lower()))
        return result.scalar_one_or_none() is not None
