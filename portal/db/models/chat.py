from sqlalchemy import Column, String, Text, BigInteger, ForeignKey, UniqueConstraint, Uuid

from portal.db.base import BaseModel, UTCDateTime, utcnow


class Chat(BaseModel):
    """채팅방 (updated_at = 마지막 활동 시각)"""

    __tablename__ = "chats"

    name = Column(String(255), nullable=False)
    creator_id = Column(Uuid(as_uuid=True), nullable=False)


class ChatParticipant(BaseModel):
    __tablename__ = "chat_participants"
    __table_args__ = (UniqueConstraint("chat_id", "user_id", name="uq_chat_participant"),)

    chat_id = Column(Uuid(as_uuid=True), ForeignKey("chats.id"), nullable=False, index=True)
    user_id = Column(Uuid(as_uuid=True), nullable=False)
    joined_at = Column(UTCDateTime, default=utcnow, nullable=False)


class ChatMessage(BaseModel):
    __tablename__ = "messages"

    chat_id = Column(Uuid(as_uuid=True), ForeignKey("chats.id"), nullable=False, index=True)
    sender_id = Column(Uuid(as_uuid=True), nullable=False)
    sender_name = Column(String(255), nullable=False)
    content = Column(Text, nullable=True)
    file_path = Column(String(1024), nullable=True)
    file_name = Column(String(255), nullable=True)
    file_type = Column(String(255), nullable=True)
    file_size = Column(BigInteger, nullable=True)
