from portal.db.repositories.base import ResourceRepository
from portal.db.repositories.user_repository import UserRepository
from portal.db.repositories.profile_repository import ProfileRepository
from portal.db.repositories.event_repository import EventRepository
from portal.db.repositories.document_repository import DocumentRepository
from portal.db.repositories.notice_repository import NoticeRepository, NoticeCommentRepository
from portal.db.repositories.receipt_repository import (
    DonationReceiptRepository, DonationReceiptCommentRepository
)
from portal.db.repositories.chat_repository import (
    ChatRepository, ChatParticipantRepository, ChatMessageRepository
)
from portal.db.repositories.free_post_repository import FreePostRepository, FreePostCommentRepository
from portal.db.repositories.board_meeting_repository import (
    BoardMeetingRepository, BoardMeetingFileRepository
)
from portal.db.repositories.bookmark_repository import BookmarkRepository

__all__ = [
    "ResourceRepository",
    "UserRepository",
    "ProfileRepository",
    "EventRepository",
    "DocumentRepository",
    "NoticeRepository",
    "NoticeCommentRepository",
    "DonationReceiptRepository",
    "DonationReceiptCommentRepository",
    "ChatRepository",
    "ChatParticipantRepository",
    "ChatMessageRepository",
    "FreePostRepository",
    "FreePostCommentRepository",
    "BoardMeetingRepository",
    "BoardMeetingFileRepository",
    "BookmarkRepository",
]
