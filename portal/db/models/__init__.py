from portal.core.db import Base
from portal.db.models.user import User
from portal.db.models.profile import Profile
from portal.db.models.event import CalendarEvent, EventType
from portal.db.models.document import Document
from portal.db.models.notice import Notice, NoticeComment
from portal.db.models.receipt import DonationReceipt, DonationReceiptComment
from portal.db.models.chat import Chat, ChatParticipant, ChatMessage
from portal.db.models.free_post import FreePost, FreePostComment
from portal.db.models.board_meeting import BoardMeeting, BoardMeetingFile, MeetingStatus
from portal.db.models.bookmark import Bookmark

__all__ = [
    "Base",
    "User",
    "Profile",
    "CalendarEvent",
    "EventType",
    "Document",
    "Notice",
    "NoticeComment",
    "DonationReceipt",
    "DonationReceiptComment",
    "Chat",
    "ChatParticipant",
    "ChatMessage",
    "FreePost",
    "FreePostComment",
    "BoardMeeting",
    "BoardMeetingFile",
    "MeetingStatus",
    "Bookmark",
]
