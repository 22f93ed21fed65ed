import logging
import os
import secrets
import time
from typing import List, Optional, Tuple
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.errors import ValidationError
from portal.core.saga import Saga
from portal.core.storage import DOCUMENTS_BUCKET, ObjectStorage
from portal.db.models.document import Document
from portal.db.repositories.document_repository import DocumentRepository
from portal.db.repositories.profile_repository import ProfileRepository
from portal.domains.common.permissions import SessionContext, author_label, ensure_can_modify
from portal.domains.documents.schemas import DocumentUpdate

logger = logging.getLogger(__name__)

UNKNOWN_AUTHOR = "Unknown"
DEFAULT_MIME_TYPE = "application/octet-stream"


def build_storage_path(filename: str) -> str:
    """<랜덤>-<밀리초>.<확장자>"""
    _, ext = os.path.splitext(filename or "")
    return f"{secrets.token_hex(6)}-{int(time.time() * 1000)}{ext.lower()}"


class DocumentService:
    """문서함: 메타데이터 행 + 스토리지 파일"""

    def __init__(self, session: AsyncSession, storage: ObjectStorage):
        self.session = session
        self.storage = storage
        self.repository = DocumentRepository(session)
        self.profile_repository = ProfileRepository(session)

    async def list_documents(self) -> List[Tuple[Document, str]]:
        """최신순 목록 + 작성자 표시 이름"""
        documents = await self.repository.list(order_by="created_at", ascending=False)
        profiles = await self.profile_repository.get_many(doc.user_id for doc in documents)

        result = []
        for document in documents:
            profile = profiles.get(document.user_id)
            if profile is None:
                author = UNKNOWN_AUTHOR
            else:
                author = author_label(profile.name, profile.email, UNKNOWN_AUTHOR)
            result.append((document, author))
        return result

    async def get_document(self, document_id: uuid.UUID) -> Document:
        return await self.repository.get_or_raise(document_id)

    async def get_author(self, document: Document) -> str:
        if document.user_id is None:
            return UNKNOWN_AUTHOR
        profile = await self.profile_repository.get(document.user_id)
        if profile is None:
            return UNKNOWN_AUTHOR
        return author_label(profile.name, profile.email, UNKNOWN_AUTHOR)

    async def upload_document(
        self,
        title: str,
        description: Optional[str],
        filename: str,
        content_type: Optional[str],
        data: bytes,
        session: SessionContext,
    ) -> Document:
        """1) 파일 업로드 → 2) 메타데이터 저장 (2 실패 시 파일 삭제)"""
        if not data:
            raise ValidationError("파일을 선택해주세요.")
        if not title or not title.strip():
            raise ValidationError("제목을 입력해주세요.")

        path = build_storage_path(filename)
        fields = {
            "title": title.strip(),
            "description": description,
            "file_path": path,
            "file_type": content_type or DEFAULT_MIME_TYPE,
            "file_size": len(data),
            "user_id": session.user_id,
        }

        saga = Saga("document.upload")
        saga.step(
            "upload_blob",
            lambda: self.storage.upload(DOCUMENTS_BUCKET, path, data),
            compensation=lambda: self.storage.remove(DOCUMENTS_BUCKET, [path]),
        )
        saga.step("insert_metadata", lambda: self.repository.create(fields))
        _, document = await saga.run()
        return document

    async def update_document(
        self,
        document_id: uuid.UUID,
        update_data: DocumentUpdate,
        session: SessionContext,
    ) -> Document:
        document = await self.repository.get_or_raise(document_id)
        ensure_can_modify(session, document.user_id)
        return await self.repository.update(document_id, update_data.model_dump(exclude_unset=True))

    async def download_document(self, document_id: uuid.UUID) -> Tuple[Document, bytes]:
        document = await self.repository.get_or_raise(document_id)
        data = await self.storage.download(DOCUMENTS_BUCKET, document.file_path)
        return document, data

    async def delete_document(self, document_id: uuid.UUID, session: SessionContext) -> None:
        """1) 메타데이터 삭제 → 2) 파일 삭제

        2단계 실패는 되돌리지 않는다: 행은 삭제된 채로 남고 파일이 고아가 된다.
        """
        document = await self.repository.get_or_raise(document_id)
        ensure_can_modify(session, document.user_id)
        path = document.file_path

        saga = Saga("document.delete")
        saga.step("delete_metadata", lambda: self.repository.delete_or_raise(document_id))
        saga.step("remove_blob", lambda: self.storage.remove(DOCUMENTS_BUCKET, [path]))

        try:
            await saga.run()
        except Exception:
            if "delete_metadata" in saga.completed:
                logger.error("document %s deleted but blob %s/%s was left behind", document_id, DOCUMENTS_BUCKET, path)
            raise

    def public_url(self, document: Document) -> str:
        return self.storage.public_url(DOCUMENTS_BUCKET, document.file_path)
