import uuid
from dataclasses import dataclass
from typing import Optional

from portal.core.errors import AuthenticationError, PermissionDeniedError

ADMIN_ROLE = "admin"
ANONYMOUS_LABEL = "방문자"


@dataclass(frozen=True)
class SessionContext:
    """요청 단위로 전달되는 인증 정보 (불변)"""

    user_id: uuid.UUID
    email: Optional[str] = None
    role: Optional[str] = None
    name: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE

    @property
    def display_name(self) -> str:
        """이름 → 이메일 앞부분 → '방문자'"""
        return author_label(self.name, self.email, ANONYMOUS_LABEL)

    def can_modify(self, owner_id) -> bool:
        return can_modify(owner_id, self.user_id, self.role)


def _normalize_id(value) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def can_modify(owner_id, session_user_id, session_role: Optional[str]) -> bool:
    """작성자 본인 또는 관리자만 수정/삭제 가능"""
    if session_role == ADMIN_ROLE:
        return True
    owner = _normalize_id(owner_id)
    user = _normalize_id(session_user_id)
    return owner is not None and owner == user


def author_label(name: Optional[str], email: Optional[str], fallback: str) -> str:
    if name and name.strip():
        return name.strip()
    if email and email.split("@")[0]:
        return email.split("@")[0]
    return fallback


def ensure_can_modify(session: Optional[SessionContext], owner_id) -> None:
    """작성자/관리자가 아니면 PermissionDeniedError"""
    if session is None:
        raise AuthenticationError()
    if not session.can_modify(owner_id):
        raise PermissionDeniedError("작성자 또는 관리자만 수정/삭제할 수 있습니다.")
