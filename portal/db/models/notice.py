from sqlalchemy import Column, String, Text, Integer, ForeignKey, Uuid

from portal.db.base import BaseModel

DEFAULT_CATEGORY = "공지"


class Notice(BaseModel):
    __tablename__ = "notices"

    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=True)
    category = Column(String(50), nullable=False, default=DEFAULT_CATEGORY)
    author = Column(String(100), nullable=False)
    user_id = Column(Uuid(as_uuid=True), nullable=False)
    views = Column(Integer, nullable=False, default=0)
    attachment_url = Column(String(1024), nullable=True)


class NoticeComment(BaseModel):
    __tablename__ = "notice_comments"

    notice_id = Column(Uuid(as_uuid=True), ForeignKey("notices.id"), nullable=False, index=True)
    user_id = Column(Uuid(as_uuid=True), nullable=False)
    author = Column(String(100), nullable=False)
    content = Column(Text, nullable=False)
