from sqlalchemy import Column, String, Text, Integer, ForeignKey, Uuid

from portal.db.base import BaseModel


class FreePost(BaseModel):
    """자유게시판 글"""

    __tablename__ = "free_posts"

    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    category = Column(String(50), nullable=True)
    author = Column(String(100), nullable=False)
    user_id = Column(Uuid(as_uuid=True), nullable=True)
    views = Column(Integer, nullable=False, default=0)


class FreePostComment(BaseModel):
    __tablename__ = "free_post_comments"

    post_id = Column(Uuid(as_uuid=True), ForeignKey("free_posts.id"), nullable=False, index=True)
    user_id = Column(Uuid(as_uuid=True), nullable=False)
    author = Column(String(100), nullable=False)
    content = Column(Text, nullable=False)
