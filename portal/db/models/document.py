from sqlalchemy import Column, String, Text, BigInteger, Uuid

from portal.db.base import BaseModel


class Document(BaseModel):
    """문서 메타데이터 (파일 본문은 documents 버킷)"""

    __tablename__ = "documents"

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    file_path = Column(String(1024), nullable=False)
    file_type = Column(String(255), nullable=False)
    file_size = Column(BigInteger, nullable=False)
    user_id = Column(Uuid(as_uuid=True), nullable=True)
