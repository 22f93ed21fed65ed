import pytest

from tests.conftest import auth_headers, create_account


@pytest.mark.asyncio
async def test_directory_search(api_client, db_session, member):
    await create_account(db_session, "park@example.com", name="박지훈")

    response = await api_client.get("/members/")
    assert [m["name"] for m in response.json()] == ["김철수", "박지훈"]

    response = await api_client.get("/members/", params={"q": "PARK"})
    assert [m["name"] for m in response.json()] == ["박지훈"]


@pytest.mark.asyncio
async def test_only_admin_manages_directory(api_client, member, admin):
    entry = {"name": "정수빈", "department": "재무팀", "role": "팀장"}

    response = await api_client.post("/members/", json=entry, headers=auth_headers(member))
    assert response.status_code == 403

    response = await api_client.post("/members/", json=entry, headers=auth_headers(admin))
    assert response.status_code == 201
    created = response.json()
    assert created["can_edit"] is True

    response = await api_client.put(
        f"/members/{created['id']}", json={"department": "기획팀"}, headers=auth_headers(admin)
    )
    assert response.json()["department"] == "기획팀"

    response = await api_client.delete(f"/members/{created['id']}?confirm=true", headers=auth_headers(admin))
    assert response.status_code == 204


@pytest.mark.asyncio
async def test_profile_placeholder_then_upsert(api_client, db_session):
    from portal.db.repositories.user_repository import UserRepository
    from portal.domains.common.permissions import SessionContext

    user = await UserRepository(db_session).create({
        "email": "new@example.com", "password_hash": "x", "is_active": True,
    })
    session = SessionContext(user_id=user.id, email=user.email)

    response = await api_client.get("/profile/me", headers=auth_headers(session))
    assert response.json() == {
        "id": str(user.id), "email": "new@example.com", "name": None, "department": None,
        "role": None, "phone": None, "image": None, "exists": False,
    }

    response = await api_client.put("/profile/me", json={"name": "신입"}, headers=auth_headers(session))
    assert response.json()["name"] == "신입"
    assert response.json()["exists"] is True


@pytest.mark.asyncio
async def test_profile_update_cannot_change_role(api_client, member):
    response = await api_client.put(
        "/profile/me", json={"phone": "010-1234-5678", "role": "admin"}, headers=auth_headers(member)
    )

    assert response.json()["phone"] == "010-1234-5678"
    assert response.json()["role"] == "member"
