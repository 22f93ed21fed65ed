from portal.db.models.bookmark import Bookmark
from portal.db.repositories.base import ResourceRepository


class BookmarkRepository(ResourceRepository[Bookmark]):
    model = Bookmark
    resource_name = "bookmarks"
    required_fields = ("title", "url", "user_id")
