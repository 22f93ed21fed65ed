import uuid
from typing import Dict, Iterable, List, Optional

from sqlalchemy import or_, select

from portal.db.models.profile import Profile
from portal.db.repositories.base import ResourceRepository


class ProfileRepository(ResourceRepository[Profile]):
    model = Profile
    resource_name = "profiles"
    default_order = "name"
    default_ascending = True

    async def get_many(self, ids: Iterable[uuid.UUID]) -> Dict[uuid.UUID, Profile]:
        """작성자 표시용 일괄 조회"""
        wanted = {i for i in ids if i is not None}
        if not wanted:
            return {}
        result = await self._execute("get_many", select(Profile).where(Profile.id.in_(wanted)))
        return {profile.id: profile for profile in result.scalars().all()}

    async def search(self, q: Optional[str] = None) -> List[Profile]:
        """이름순 목록 (q: 이름/이메일/부서/직책 부분 일치, 대소문자 무시)"""
        if not q or not q.strip():
            return await self.list()
        pattern = f"%{q.strip()}%"
        matches = or_(
            Profile.name.ilike(pattern),
            Profile.email.ilike(pattern),
            Profile.department.ilike(pattern),
            Profile.role.ilike(pattern),
        )
        return await self.list(where=[matches])
