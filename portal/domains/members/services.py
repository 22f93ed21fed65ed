import logging
from typing import List, Optional
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from portal.db.models.profile import Profile
from portal.db.repositories.profile_repository import ProfileRepository
from portal.domains.common.permissions import SessionContext
from portal.domains.members.schemas import MemberCreate, MemberUpdate, ProfileResponse, ProfileUpdate

logger = logging.getLogger(__name__)


class MemberService:
    """임직원 디렉터리 (쓰기는 관리자 전용, 라우터에서 require_admin)"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repository = ProfileRepository(session)

    async def list_members(self, q: Optional[str] = None) -> List[Profile]:
        return await self.repository.search(q)

    async def get_member(self, member_id: uuid.UUID) -> Profile:
        return await self.repository.get_or_raise(member_id)

    async def create_member(self, member_data: MemberCreate) -> Profile:
        return await self.repository.create(member_data.model_dump())

    async def update_member(self, member_id: uuid.UUID, update_data: MemberUpdate) -> Profile:
        await self.repository.get_or_raise(member_id)
        return await self.repository.update(member_id, update_data.model_dump(exclude_unset=True))

    async def delete_member(self, member_id: uuid.UUID) -> None:
        await self.repository.get_or_raise(member_id)
        await self.repository.delete_or_raise(member_id)


class ProfileService:
    """본인 프로필 (id == users.id)"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repository = ProfileRepository(session)

    async def get_my_profile(self, session: SessionContext) -> ProfileResponse:
        profile = await self.repository.get(session.user_id)
        if profile is None:
            return ProfileResponse(id=session.user_id, email=session.email, exists=False)
        return ProfileResponse.model_validate(profile, from_attributes=True)

    async def upsert_my_profile(self, update_data: ProfileUpdate, session: SessionContext) -> ProfileResponse:
        """없으면 생성, 있으면 수정"""
        fields = update_data.model_dump(exclude_unset=True)
        profile = await self.repository.get(session.user_id)
        if profile is None:
            logger.info("creating profile for %s", session.user_id)
            profile = await self.repository.create({**fields, "id": session.user_id, "email": session.email})
        elif fields:
            profile = await self.repository.update(session.user_id, fields)
        return ProfileResponse.model_validate(profile, from_attributes=True)
