from typing import List
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from portal.db.models.bookmark import Bookmark
from portal.db.repositories.bookmark_repository import BookmarkRepository
from portal.domains.bookmarks.schemas import BookmarkCreate, BookmarkUpdate
from portal.domains.common.permissions import SessionContext, ensure_can_modify


class BookmarkService:
    """사용자별 즐겨찾기 링크"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repository = BookmarkRepository(session)

    async def list_bookmarks(self, session: SessionContext) -> List[Bookmark]:
        return await self.repository.list(user_id=session.user_id)

    async def create_bookmark(self, bookmark_data: BookmarkCreate, session: SessionContext) -> Bookmark:
        fields = bookmark_data.model_dump()
        fields["user_id"] = session.user_id
        return await self.repository.create(fields)

    async def update_bookmark(
        self,
        bookmark_id: uuid.UUID,
        update_data: BookmarkUpdate,
        session: SessionContext,
    ) -> Bookmark:
        bookmark = await self.repository.get_or_raise(bookmark_id)
        ensure_can_modify(session, bookmark.user_id)
        return await self.repository.update(bookmark_id, update_data.model_dump(exclude_unset=True))

    async def delete_bookmark(self, bookmark_id: uuid.UUID, session: SessionContext) -> None:
        bookmark = await self.repository.get_or_raise(bookmark_id)
        ensure_can_modify(session, bookmark.user_id)
        await self.repository.delete_or_raise(bookmark_id)
