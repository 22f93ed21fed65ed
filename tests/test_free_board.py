import pytest

from portal.core.errors import PermissionDeniedError
from portal.db.repositories.free_post_repository import FreePostCommentRepository, FreePostRepository
from portal.domains.freeboard.schemas import PostCreate
from portal.domains.freeboard.services import FreeBoardService
from tests.conftest import auth_headers

POST = {"title": "점심 메뉴 추천", "content": "근처 맛집 공유해요", "category": "잡담"}


@pytest.mark.asyncio
async def test_create_sets_author_and_lists_newest_first(api_client, member):
    response = await api_client.post("/free-posts/", json=POST, headers=auth_headers(member))
    assert response.status_code == 201
    created = response.json()
    assert created["author"] == "김철수"
    assert created["user_id"] == str(member.user_id)
    assert created["views"] == 0
    assert created["can_edit"] is True

    await api_client.post("/free-posts/", json={**POST, "title": "주말 등산"}, headers=auth_headers(member))

    response = await api_client.get("/free-posts/")
    assert [post["title"] for post in response.json()] == ["주말 등산", "점심 메뉴 추천"]


@pytest.mark.asyncio
async def test_blank_content_is_rejected(api_client, member):
    response = await api_client.post("/free-posts/", json={**POST, "content": "   "}, headers=auth_headers(member))
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_viewing_increments_views(api_client, member):
    response = await api_client.post("/free-posts/", json=POST, headers=auth_headers(member))
    post_id = response.json()["id"]

    await api_client.get(f"/free-posts/{post_id}")
    response = await api_client.get(f"/free-posts/{post_id}")

    assert response.json()["views"] == 2


@pytest.mark.asyncio
async def test_only_owner_or_admin_edits(api_client, member, other_member, admin):
    response = await api_client.post("/free-posts/", json=POST, headers=auth_headers(member))
    post_id = response.json()["id"]

    response = await api_client.put(f"/free-posts/{post_id}", json={"title": "변경"}, headers=auth_headers(other_member))
    assert response.status_code == 403

    response = await api_client.put(f"/free-posts/{post_id}", json={"title": "변경"}, headers=auth_headers(admin))
    assert response.status_code == 200
    assert response.json()["title"] == "변경"


@pytest.mark.asyncio
async def test_comments_and_delete_needs_confirmation(api_client, member, other_member):
    response = await api_client.post("/free-posts/", json=POST, headers=auth_headers(member))
    post_id = response.json()["id"]

    response = await api_client.post(
        f"/free-posts/{post_id}/comments", json={"content": "저도 궁금해요"}, headers=auth_headers(other_member)
    )
    assert response.status_code == 201
    assert response.json()["author"] == "이영희"

    response = await api_client.get(f"/free-posts/{post_id}/comments")
    assert [comment["content"] for comment in response.json()] == ["저도 궁금해요"]

    response = await api_client.delete(f"/free-posts/{post_id}", headers=auth_headers(member))
    assert response.status_code == 428

    response = await api_client.delete(f"/free-posts/{post_id}?confirm=true", headers=auth_headers(member))
    assert response.status_code == 204

    response = await api_client.get(f"/free-posts/{post_id}")
    assert response.status_code == 404

    response = await api_client.delete(f"/free-posts/{post_id}?confirm=true", headers=auth_headers(member))
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_removes_comments_first(db_session, member, other_member):
    service = FreeBoardService(db_session)
    post = await service.create_post(PostCreate(**POST), member)
    await service.add_comment(post.id, "댓글", other_member)

    await service.delete_post(post.id, member)

    assert await FreePostRepository(db_session).get(post.id) is None
    assert await FreePostCommentRepository(db_session).count(post_id=post.id) == 0


@pytest.mark.asyncio
async def test_commenter_cannot_delete_post(db_session, member, other_member):
    service = FreeBoardService(db_session)
    post = await service.create_post(PostCreate(**POST), member)

    with pytest.raises(PermissionDeniedError):
        await service.delete_post(post.id, other_member)
