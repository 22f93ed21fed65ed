from portal.db.models.board_meeting import BoardMeeting, BoardMeetingFile
from portal.db.repositories.base import ResourceRepository


class BoardMeetingRepository(ResourceRepository[BoardMeeting]):
    """이사회 (회의 일시 최신순)"""

    model = BoardMeeting
    resource_name = "board_meetings"
    required_fields = ("title", "meeting_date", "status")
    default_order = "meeting_date"


class BoardMeetingFileRepository(ResourceRepository[BoardMeetingFile]):
    model = BoardMeetingFile
    resource_name = "board_meeting_files"
    required_fields = ("board_meeting_id", "file_name", "file_type", "file_size", "file_path")
    default_ascending = True
