import logging
import math
import os
import secrets
from typing import List, Optional, Tuple
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.errors import ValidationError
from portal.core.saga import Saga
from portal.core.storage import ATTACHMENTS_BUCKET, ObjectStorage
from portal.db.models.notice import DEFAULT_CATEGORY, Notice, NoticeComment
from portal.db.repositories.notice_repository import NoticeCommentRepository, NoticeRepository
from portal.domains.common.permissions import SessionContext, ensure_can_modify
from portal.domains.notices.schemas import NOTICE_CATEGORIES, PAGE_SIZE, NoticeUpdate

logger = logging.getLogger(__name__)


class NoticeService:
    """공지사항 + 댓글"""

    def __init__(self, session: AsyncSession, storage: ObjectStorage):
        self.session = session
        self.storage = storage
        self.repository = NoticeRepository(session)
        self.comment_repository = NoticeCommentRepository(session)

    async def list_notices(self, page: int = 1, per_page: int = PAGE_SIZE) -> Tuple[List[Notice], int, int]:
        """최신순 페이지 + 전체 개수 + 전체 페이지 수"""
        total = await self.repository.count()
        notices = await self.repository.page(offset=(page - 1) * per_page, limit=per_page)
        total_pages = math.ceil(total / per_page) if total else 0
        return notices, total, total_pages

    async def view_notice(self, notice_id: uuid.UUID) -> Notice:
        """상세 조회 (조회수 증가)"""
        notice = await self.repository.get_or_raise(notice_id)
        await self.repository.increment_views(notice.id)
        return await self.repository.get_or_raise(notice_id)

    async def create_notice(
        self,
        title: str,
        content: Optional[str],
        category: Optional[str],
        session: SessionContext,
        attachment: Optional[Tuple[str, bytes]] = None,
    ) -> Notice:
        """첨부 파일 업로드 → 공지 저장 (저장 실패 시 첨부 삭제)"""
        category = category or DEFAULT_CATEGORY
        if category not in NOTICE_CATEGORIES:
            raise ValidationError("분류가 올바르지 않습니다.")
        if not title or not title.strip():
            raise ValidationError("제목을 입력해주세요.")

        fields = {
            "title": title.strip(),
            "content": content,
            "category": category,
            "author": session.display_name,
            "user_id": session.user_id,
            "views": 0,
        }

        saga = Saga("notice.create")
        if attachment is not None:
            filename, data = attachment
            _, ext = os.path.splitext(filename or "")
            path = f"{secrets.token_hex(8)}{ext.lower()}"
            fields["attachment_url"] = self.storage.public_url(ATTACHMENTS_BUCKET, path)
            saga.step(
                "upload_attachment",
                lambda: self.storage.upload(ATTACHMENTS_BUCKET, path, data),
                compensation=lambda: self.storage.remove(ATTACHMENTS_BUCKET, [path]),
            )
        saga.step("insert_notice", lambda: self.repository.create(fields))
        results = await saga.run()
        return results[-1]

    async def update_notice(self, notice_id: uuid.UUID, update_data: NoticeUpdate, session: SessionContext) -> Notice:
        notice = await self.repository.get_or_raise(notice_id)
        ensure_can_modify(session, notice.user_id)
        return await self.repository.update(notice_id, update_data.model_dump(exclude_unset=True))

    async def delete_notice(self, notice_id: uuid.UUID, session: SessionContext) -> None:
        """첨부 삭제 → 댓글 삭제 → 공지 삭제"""
        notice = await self.repository.get_or_raise(notice_id)
        ensure_can_modify(session, notice.user_id)

        saga = Saga("notice.delete")
        if notice.attachment_url:
            path = self.storage.path_from_public_url(ATTACHMENTS_BUCKET, notice.attachment_url)
            saga.step("remove_attachment", lambda: self.storage.remove(ATTACHMENTS_BUCKET, [path]))
        saga.step("delete_comments", lambda: self.comment_repository.delete_where(notice_id=notice_id))
        saga.step("delete_notice", lambda: self.repository.delete_or_raise(notice_id))
        await saga.run()

    async def download_attachment(self, notice_id: uuid.UUID) -> Tuple[str, bytes]:
        notice = await self.repository.get_or_raise(notice_id)
        if not notice.attachment_url:
            raise ValidationError("첨부 파일이 없습니다.")
        path = self.storage.path_from_public_url(ATTACHMENTS_BUCKET, notice.attachment_url)
        return path, await self.storage.download(ATTACHMENTS_BUCKET, path)

    # --- 댓글 ---

    async def list_comments(self, notice_id: uuid.UUID) -> List[NoticeComment]:
        await self.repository.get_or_raise(notice_id)
        return await self.comment_repository.list(notice_id=notice_id)

    async def add_comment(self, notice_id: uuid.UUID, content: str, session: SessionContext) -> NoticeComment:
        await self.repository.get_or_raise(notice_id)
        return await self.comment_repository.create({
            "notice_id": notice_id,
            "user_id": session.user_id,
            "author": session.display_name,
            "content": content,
        })

    async def delete_comment(self, notice_id: uuid.UUID, comment_id: uuid.UUID, session: SessionContext) -> None:
        comment = await self.comment_repository.get_or_raise(comment_id)
        if comment.notice_id != notice_id:
            raise ValidationError("해당 공지사항의 댓글이 아닙니다.")
        ensure_can_modify(session, comment.user_id)
        await self.comment_repository.delete_or_raise(comment_id)
