import uuid

import pytest

from portal.core.errors import AuthenticationError, PermissionDeniedError
from portal.domains.common.permissions import (
    ADMIN_ROLE, SessionContext, author_label, can_modify, ensure_can_modify
)

OWNER = uuid.uuid4()


def test_owner_can_modify():
    assert can_modify(OWNER, OWNER, "member")


def test_owner_id_compared_as_string():
    assert can_modify(str(OWNER), OWNER, None)


def test_other_user_cannot_modify():
    assert not can_modify(OWNER, uuid.uuid4(), "member")


def test_admin_can_modify_anything():
    assert can_modify(OWNER, uuid.uuid4(), ADMIN_ROLE)
    assert can_modify(None, uuid.uuid4(), ADMIN_ROLE)


def test_missing_owner_never_matches():
    assert not can_modify(None, None, None)
    assert not can_modify("", OWNER, "member")


def test_author_label_fallbacks():
    assert author_label("홍길동", "hong@example.com", "방문자") == "홍길동"
    assert author_label("  ", "hong@example.com", "방문자") == "hong"
    assert author_label(None, None, "방문자") == "방문자"


def test_session_display_name():
    assert SessionContext(user_id=OWNER, email="park@example.com").display_name == "park"
    assert SessionContext(user_id=OWNER).display_name == "방문자"


def test_ensure_can_modify():
    ensure_can_modify(SessionContext(user_id=OWNER), OWNER)

    with pytest.raises(PermissionDeniedError):
        ensure_can_modify(SessionContext(user_id=uuid.uuid4()), OWNER)

    with pytest.raises(AuthenticationError):
        ensure_can_modify(None, OWNER)
