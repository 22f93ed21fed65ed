import uuid

from portal.db.models.free_post import FreePost, FreePostComment
from portal.db.repositories.base import ResourceRepository


class FreePostRepository(ResourceRepository[FreePost]):
    model = FreePost
    resource_name = "free_posts"
    required_fields = ("title", "content", "author")

    async def increment_views(self, post_id: uuid.UUID) -> None:
        await self.increment(post_id, "views")


class FreePostCommentRepository(ResourceRepository[FreePostComment]):
    model = FreePostComment
    resource_name = "free_post_comments"
    required_fields = ("post_id", "user_id", "author", "content")
    default_ascending = True
