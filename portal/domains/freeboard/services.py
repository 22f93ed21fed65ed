from typing import List
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.errors import ValidationError
from portal.core.saga import Saga
from portal.db.models.free_post import FreePost, FreePostComment
from portal.db.repositories.free_post_repository import FreePostCommentRepository, FreePostRepository
from portal.domains.common.permissions import SessionContext, ensure_can_modify
from portal.domains.freeboard.schemas import PostCreate, PostUpdate


class FreeBoardService:
    """자유게시판 글 + 댓글"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repository = FreePostRepository(session)
        self.comment_repository = FreePostCommentRepository(session)

    async def list_posts(self) -> List[FreePost]:
        return await self.repository.list()

    async def view_post(self, post_id: uuid.UUID) -> FreePost:
        """상세 조회 (조회수 증가)"""
        post = await self.repository.get_or_raise(post_id)
        await self.repository.increment_views(post.id)
        return await self.repository.get_or_raise(post_id)

    async def create_post(self, post_data: PostCreate, session: SessionContext) -> FreePost:
        fields = post_data.model_dump()
        fields.update({"author": session.display_name, "user_id": session.user_id, "views": 0})
        return await self.repository.create(fields)

    async def update_post(self, post_id: uuid.UUID, update_data: PostUpdate, session: SessionContext) -> FreePost:
        post = await self.repository.get_or_raise(post_id)
        ensure_can_modify(session, post.user_id)
        return await self.repository.update(post_id, update_data.model_dump(exclude_unset=True))

    async def delete_post(self, post_id: uuid.UUID, session: SessionContext) -> None:
        """댓글 삭제 → 글 삭제"""
        post = await self.repository.get_or_raise(post_id)
        ensure_can_modify(session, post.user_id)

        saga = Saga("free_post.delete")
        saga.step("delete_comments", lambda: self.comment_repository.delete_where(post_id=post_id))
        saga.step("delete_post", lambda: self.repository.delete_or_raise(post_id))
        await saga.run()

    async def list_comments(self, post_id: uuid.UUID) -> List[FreePostComment]:
        await self.repository.get_or_raise(post_id)
        return await self.comment_repository.list(post_id=post_id)

    async def add_comment(self, post_id: uuid.UUID, content: str, session: SessionContext) -> FreePostComment:
        await self.repository.get_or_raise(post_id)
        return await self.comment_repository.create({
            "post_id": post_id,
            "user_id": session.user_id,
            "author": session.display_name,
            "content": content,
        })

    async def delete_comment(self, post_id: uuid.UUID, comment_id: uuid.UUID, session: SessionContext) -> None:
        comment = await self.comment_repository.get_or_raise(comment_id)
        if comment.post_id != post_id:
            raise ValidationError("해당 글의 댓글이 아닙니다.")
        ensure_can_modify(session, comment.user_id)
        await self.comment_repository.delete_or_raise(comment_id)
