import uuid

import pytest

from portal.core.errors import PermissionDeniedError
from portal.db.repositories.receipt_repository import DonationReceiptCommentRepository
from portal.domains.common.permissions import SessionContext
from portal.domains.receipts.schemas import ReceiptCreate, ReceiptResponse
from portal.domains.receipts.services import ReceiptService
from tests.conftest import auth_headers

RECEIPT = {"title": "2024년 기부금", "content": "연말정산용", "amount": 50000}


@pytest.mark.asyncio
async def test_author_label_falls_back_to_visitor(db_session):
    anonymous = SessionContext(user_id=uuid.uuid4())
    receipt = await ReceiptService(db_session).create_receipt(ReceiptCreate(**RECEIPT), anonymous)

    assert receipt.author == "방문자"
    assert receipt.processed is False


@pytest.mark.asyncio
async def test_toggle_processed_flips_both_ways(db_session, member, admin):
    service = ReceiptService(db_session)
    receipt = await service.create_receipt(ReceiptCreate(**RECEIPT), member)

    receipt = await service.toggle_processed(receipt.id, admin)
    assert receipt.processed is True

    receipt = await service.toggle_processed(receipt.id, admin)
    assert receipt.processed is False


@pytest.mark.asyncio
async def test_only_admin_toggles(db_session, member):
    service = ReceiptService(db_session)
    receipt = await service.create_receipt(ReceiptCreate(**RECEIPT), member)

    with pytest.raises(PermissionDeniedError):
        await service.toggle_processed(receipt.id, member)


@pytest.mark.asyncio
async def test_affordances_per_viewer(db_session, member, other_member, admin):
    receipt = await ReceiptService(db_session).create_receipt(ReceiptCreate(**RECEIPT), member)

    stranger = ReceiptResponse.from_record(receipt, other_member)
    assert (stranger.can_edit, stranger.can_delete, stranger.can_toggle) == (False, False, False)

    owner = ReceiptResponse.from_record(receipt, member)
    assert (owner.can_edit, owner.can_delete, owner.can_toggle) == (True, True, False)

    manager = ReceiptResponse.from_record(receipt, admin)
    assert (manager.can_edit, manager.can_delete, manager.can_toggle) == (True, True, True)

    anonymous = ReceiptResponse.from_record(receipt, None)
    assert (anonymous.can_edit, anonymous.can_delete, anonymous.can_toggle) == (False, False, False)


@pytest.mark.asyncio
async def test_delete_removes_comments_first(db_session, member, other_member):
    service = ReceiptService(db_session)
    receipt = await service.create_receipt(ReceiptCreate(**RECEIPT), member)
    await service.add_comment(receipt.id, "확인 부탁드립니다.", member)
    await service.add_comment(receipt.id, "확인했습니다.", other_member)

    await service.delete_receipt(receipt.id, member)

    assert await service.repository.get(receipt.id) is None
    assert await DonationReceiptCommentRepository(db_session).list(receipt_id=receipt.id) == []


@pytest.mark.asyncio
async def test_comments_are_oldest_first(db_session, member, other_member):
    service = ReceiptService(db_session)
    receipt = await service.create_receipt(ReceiptCreate(**RECEIPT), member)
    await service.add_comment(receipt.id, "첫 번째", member)
    await service.add_comment(receipt.id, "두 번째", other_member)

    comments = await service.list_comments(receipt.id)

    assert [c.content for c in comments] == ["첫 번째", "두 번째"]
    assert [c.author for c in comments] == ["김철수", "이영희"]


@pytest.mark.asyncio
async def test_api_toggle_flow(api_client, member, admin):
    response = await api_client.post("/receipts/", json=RECEIPT, headers=auth_headers(member))
    assert response.status_code == 201
    receipt_id = response.json()["id"]

    response = await api_client.post(f"/receipts/{receipt_id}/toggle-processed", headers=auth_headers(member))
    assert response.status_code == 403

    response = await api_client.post(f"/receipts/{receipt_id}/toggle-processed", headers=auth_headers(admin))
    assert response.status_code == 200
    assert response.json()["processed"] is True
    assert response.json()["can_toggle"] is True


@pytest.mark.asyncio
@pytest.mark.parametrize("amount", [0, -1000])
async def test_api_rejects_non_positive_amount(api_client, member, amount):
    response = await api_client.post("/receipts/", json={**RECEIPT, "amount": amount}, headers=auth_headers(member))
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_api_comment_delete_by_admin(api_client, member, admin):
    response = await api_client.post("/receipts/", json=RECEIPT, headers=auth_headers(member))
    receipt_id = response.json()["id"]
    response = await api_client.post(
        f"/receipts/{receipt_id}/comments", json={"content": "확인 요청"}, headers=auth_headers(member)
    )
    comment_id = response.json()["id"]

    response = await api_client.delete(
        f"/receipts/{receipt_id}/comments/{comment_id}?confirm=true", headers=auth_headers(admin)
    )
    assert response.status_code == 204

    response = await api_client.get(f"/receipts/{receipt_id}/comments")
    assert response.json() == []
