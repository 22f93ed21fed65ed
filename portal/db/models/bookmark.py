from sqlalchemy import Column, String, Text, Uuid

from portal.db.base import BaseModel


class Bookmark(BaseModel):
    """개인 즐겨찾기 링크"""

    __tablename__ = "bookmarks"

    title = Column(String(255), nullable=False)
    url = Column(String(2048), nullable=False)
    description = Column(Text, nullable=True)
    icon = Column(String(255), nullable=True)
    user_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
