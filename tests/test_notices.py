import pytest

from portal.core.storage import ATTACHMENTS_BUCKET
from tests.conftest import auth_headers


async def create_notice(api_client, session, title="휴무 안내", **extra):
    data = {"title": title, "content": "설 연휴 휴무", "category": "공지", **extra}
    response = await api_client.post("/notices/", data=data, headers=auth_headers(session))
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
async def test_detail_view_increments_views(api_client, member):
    notice = await create_notice(api_client, member)
    assert notice["views"] == 0
    assert notice["author"] == "김철수"

    await api_client.get(f"/notices/{notice['id']}")
    response = await api_client.get(f"/notices/{notice['id']}")

    assert response.json()["views"] == 2


@pytest.mark.asyncio
async def test_pagination(api_client, member):
    for i in range(12):
        await create_notice(api_client, member, title=f"공지 {i}")

    response = await api_client.get("/notices/", params={"page": 2})
    body = response.json()

    assert body["total"] == 12
    assert body["total_pages"] == 2
    assert body["per_page"] == 10
    assert [n["title"] for n in body["notices"]] == ["공지 1", "공지 0"]


@pytest.mark.asyncio
async def test_unknown_category_is_rejected(api_client, member):
    response = await api_client.post(
        "/notices/", data={"title": "제목", "category": "잡담"}, headers=auth_headers(member)
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_delete_requires_confirmation(api_client, member):
    notice = await create_notice(api_client, member)

    response = await api_client.delete(f"/notices/{notice['id']}", headers=auth_headers(member))
    assert response.status_code == 428

    response = await api_client.get(f"/notices/{notice['id']}")
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_attachment_is_stored_and_removed_with_notice(api_client, storage, member):
    response = await api_client.post(
        "/notices/",
        data={"title": "채용 공고", "category": "모집"},
        files={"attachment": ("공고문.pdf", b"%PDF", "application/pdf")},
        headers=auth_headers(member),
    )
    notice = response.json()
    path = storage.path_from_public_url(ATTACHMENTS_BUCKET, notice["attachment_url"])
    assert await storage.exists(ATTACHMENTS_BUCKET, path)

    response = await api_client.get(f"/notices/{notice['id']}/attachment")
    assert response.content == b"%PDF"

    await api_client.post(
        f"/notices/{notice['id']}/comments", json={"content": "지원합니다"}, headers=auth_headers(member)
    )
    response = await api_client.delete(f"/notices/{notice['id']}?confirm=true", headers=auth_headers(member))
    assert response.status_code == 204
    assert not await storage.exists(ATTACHMENTS_BUCKET, path)


@pytest.mark.asyncio
async def test_comments(api_client, member, other_member):
    notice = await create_notice(api_client, member)

    response = await api_client.post(
        f"/notices/{notice['id']}/comments", json={"content": "   "}, headers=auth_headers(other_member)
    )
    assert response.status_code == 422

    response = await api_client.post(
        f"/notices/{notice['id']}/comments", json={"content": "확인했습니다"}, headers=auth_headers(other_member)
    )
    comment = response.json()
    assert comment["author"] == "이영희"

    response = await api_client.delete(
        f"/notices/{notice['id']}/comments/{comment['id']}?confirm=true", headers=auth_headers(member)
    )
    assert response.status_code == 403

    response = await api_client.get(f"/notices/{notice['id']}/comments", headers=auth_headers(other_member))
    [listed] = response.json()
    assert listed["can_delete"] is True
