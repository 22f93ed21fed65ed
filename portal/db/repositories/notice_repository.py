import uuid

from portal.db.models.notice import Notice, NoticeComment
from portal.db.repositories.base import ResourceRepository


class NoticeRepository(ResourceRepository[Notice]):
    model = Notice
    resource_name = "notices"
    required_fields = ("title", "category", "author", "user_id")

    async def increment_views(self, notice_id: uuid.UUID) -> None:
        """조회수 +1"""
        await self.increment(notice_id, "views")


class NoticeCommentRepository(ResourceRepository[NoticeComment]):
    model = NoticeComment
    resource_name = "notice_comments"
    required_fields = ("notice_id", "user_id", "author", "content")
    default_ascending = True
