from portal.api.http.health import router as health_router
from portal.api.http.auth import router as auth_router
from portal.api.http.events import router as events_router
from portal.api.http.documents import router as documents_router
from portal.api.http.notices import router as notices_router
from portal.api.http.receipts import router as receipts_router
from portal.api.http.members import router as members_router
from portal.api.http.profile import router as profile_router
from portal.api.http.chats import router as chats_router
from portal.api.http.free_posts import router as free_posts_router
from portal.api.http.board_meetings import router as board_meetings_router
from portal.api.http.bookmarks import router as bookmarks_router

__all__ = [
    "health_router",
    "auth_router",
    "events_router",
    "documents_router",
    "notices_router",
    "receipts_router",
    "members_router",
    "profile_router",
    "chats_router",
    "free_posts_router",
    "board_meetings_router",
    "bookmarks_router",
]
