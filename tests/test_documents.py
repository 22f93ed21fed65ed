import logging
import re

import pytest

from portal.core.errors import BackendError, NotFoundError, PermissionDeniedError
from portal.core.storage import DOCUMENTS_BUCKET
from portal.db.repositories.document_repository import DocumentRepository
from portal.domains.documents.services import DocumentService, build_storage_path
from tests.conftest import auth_headers


def test_storage_path_keeps_extension():
    assert re.fullmatch(r"[0-9a-f]{12}-\d{13}\.pdf", build_storage_path("연간 보고서.PDF"))


@pytest.mark.asyncio
async def test_upload_stores_blob_and_metadata(db_session, storage, member):
    service = DocumentService(db_session, storage)

    document = await service.upload_document("보고서", None, "report.pdf", "application/pdf", b"%PDF-1.4", member)

    assert document.user_id == member.user_id
    assert document.file_size == 8
    assert await storage.download(DOCUMENTS_BUCKET, document.file_path) == b"%PDF-1.4"


@pytest.mark.asyncio
async def test_upload_removes_blob_when_metadata_insert_fails(db_session, storage, member, monkeypatch):
    async def failing_create(self, fields):
        raise BackendError()

    monkeypatch.setattr(DocumentRepository, "create", failing_create)
    service = DocumentService(db_session, storage)

    with pytest.raises(BackendError):
        await service.upload_document("보고서", None, "report.pdf", "application/pdf", b"data", member)

    bucket = storage.root / DOCUMENTS_BUCKET
    assert not bucket.exists() or list(bucket.iterdir()) == []


@pytest.mark.asyncio
async def test_delete_removes_row_then_blob(db_session, storage, member):
    service = DocumentService(db_session, storage)
    document = await service.upload_document("보고서", None, "report.pdf", None, b"data", member)

    await service.delete_document(document.id, member)

    assert await DocumentRepository(db_session).get(document.id) is None
    assert not await storage.exists(DOCUMENTS_BUCKET, document.file_path)


@pytest.mark.asyncio
async def test_blob_failure_after_row_delete_leaves_orphan(db_session, storage, member, monkeypatch):
    service = DocumentService(db_session, storage)
    document = await service.upload_document("보고서", None, "report.pdf", None, b"data", member)

    async def failing_remove(bucket, paths):
        raise BackendError("storage down")

    monkeypatch.setattr(storage, "remove", failing_remove)

    with pytest.raises(BackendError):
        await service.delete_document(document.id, member)

    # 행은 삭제된 상태로 남고 파일은 고아가 된다
    assert await DocumentRepository(db_session).get(document.id) is None
    assert await storage.exists(DOCUMENTS_BUCKET, document.file_path)


@pytest.mark.asyncio
async def test_non_owner_cannot_delete(db_session, storage, member, other_member):
    service = DocumentService(db_session, storage)
    document = await service.upload_document("보고서", None, "report.pdf", None, b"data", member)

    with pytest.raises(PermissionDeniedError):
        await service.delete_document(document.id, other_member)

    assert await DocumentRepository(db_session).get(document.id) is not None


@pytest.mark.asyncio
async def test_api_upload_list_and_delete(api_client, member, other_member):
    response = await api_client.post(
        "/documents/",
        data={"title": "회의록", "description": "1월"},
        files={"file": ("minutes.txt", b"hello", "text/plain")},
        headers=auth_headers(member),
    )
    assert response.status_code == 201
    created = response.json()
    assert created["author"] == "김철수"
    assert created["size_label"] == "5 B"
    assert created["url"].startswith("/storage/documents/")

    response = await api_client.get("/documents/", headers=auth_headers(other_member))
    [listed] = response.json()
    assert listed["author"] == "김철수"
    assert listed["can_edit"] is False
    assert listed["can_delete"] is False

    response = await api_client.get(f"/documents/{created['id']}/download")
    assert response.status_code == 200
    assert response.content == b"hello"

    response = await api_client.delete(f"/documents/{created['id']}", headers=auth_headers(member))
    assert response.status_code == 428

    response = await api_client.delete(f"/documents/{created['id']}?confirm=true", headers=auth_headers(member))
    assert response.status_code == 204

    response = await api_client.get(f"/documents/{created['id']}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_api_upload_requires_login(api_client):
    response = await api_client.post(
        "/documents/",
        data={"title": "회의록"},
        files={"file": ("minutes.txt", b"hello", "text/plain")},
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_unexpected_blob_failure_is_logged_and_reraised(db_session, storage, member, monkeypatch, caplog):
    service = DocumentService(db_session, storage)
    document = await service.upload_document("보고서", None, "report.pdf", None, b"data", member)

    async def crashing_remove(bucket, paths):
        raise RuntimeError("disk unplugged")

    monkeypatch.setattr(storage, "remove", crashing_remove)

    with caplog.at_level(logging.ERROR, logger="portal.domains.documents.services"):
        with pytest.raises(RuntimeError):
            await service.delete_document(document.id, member)

    assert await DocumentRepository(db_session).get(document.id) is None
    assert any(document.file_path in record.getMessage() for record in caplog.records)


@pytest.mark.asyncio
async def test_delete_of_missing_document_is_not_found(db_session, storage, member):
    service = DocumentService(db_session, storage)
    document = await service.upload_document("보고서", None, "report.pdf", None, b"data", member)
    await service.delete_document(document.id, member)

    with pytest.raises(NotFoundError):
        await service.delete_document(document.id, member)
