import enum

from sqlalchemy import Column, String, Text, BigInteger, ForeignKey, Uuid

from portal.db.base import BaseModel, UTCDateTime


class MeetingStatus(str, enum.Enum):
    UPCOMING = "upcoming"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class BoardMeeting(BaseModel):
    """이사회 (첨부 파일은 board_meeting_files 버킷)"""

    __tablename__ = "board_meetings"

    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=True)
    meeting_date = Column(UTCDateTime, nullable=False, index=True)
    location = Column(String(255), nullable=True)
    status = Column(String(20), nullable=False, default=MeetingStatus.UPCOMING.value)
    user_id = Column(Uuid(as_uuid=True), nullable=True)


class BoardMeetingFile(BaseModel):
    __tablename__ = "board_meeting_files"

    board_meeting_id = Column(Uuid(as_uuid=True), ForeignKey("board_meetings.id"), nullable=False, index=True)
    file_name = Column(String(255), nullable=False)
    file_type = Column(String(255), nullable=False)
    file_size = Column(BigInteger, nullable=False)
    file_path = Column(String(1024), nullable=False)
