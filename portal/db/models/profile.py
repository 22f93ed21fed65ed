from sqlalchemy import Column, String

from portal.db.base import BaseModel


class Profile(BaseModel):
    """임직원 디렉터리 겸 사용자 프로필 (본인 프로필은 id == users.id)"""

    __tablename__ = "profiles"

    name = Column(String(100), nullable=True)
    email = Column(String(255), nullable=True, index=True)
    department = Column(String(100), nullable=True)
    role = Column(String(50), nullable=True)
    phone = Column(String(50), nullable=True)
    image = Column(String(1024), nullable=True)
