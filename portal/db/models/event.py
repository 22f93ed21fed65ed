import enum

from sqlalchemy import Column, String, Text, Uuid

from portal.db.base import BaseModel, UTCDateTime


class EventType(str, enum.Enum):
    MEETING = "meeting"
    TRAINING = "training"
    EVENT = "event"
    VOLUNTEER = "volunteer"
    OTHER = "other"


class CalendarEvent(BaseModel):
    __tablename__ = "calendar_events"

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    start_time = Column(UTCDateTime, nullable=False, index=True)
    end_time = Column(UTCDateTime, nullable=False)
    location = Column(String(255), nullable=True)
    type = Column(String(20), nullable=False, default=EventType.OTHER.value)
    user_id = Column(Uuid(as_uuid=True), nullable=True)
