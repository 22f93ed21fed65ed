import os
from typing import List, Optional
from urllib.parse import quote
import uuid

from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.auth import get_current_session, get_optional_session
from portal.core.db import get_db
from portal.core.storage import ObjectStorage, get_storage
from portal.domains.common.confirmation import run_confirmed_delete
from portal.domains.common.permissions import SessionContext
from portal.domains.documents.schemas import DocumentUpdate, DocumentResponse, format_file_size
from portal.domains.documents.services import DocumentService

router = APIRouter(prefix="/documents", tags=["documents"])


def document_response(service: DocumentService, document, author: str, session) -> DocumentResponse:
    return DocumentResponse.from_record(
        document,
        session,
        author=author,
        url=service.public_url(document),
        size_label=format_file_size(document.file_size),
    )


@router.get("/", response_model=List[DocumentResponse])
async def list_documents(
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    session: Optional[SessionContext] = Depends(get_optional_session),
):
    """문서 목록 (최신순)"""
    service = DocumentService(db, storage)
    return [
        document_response(service, document, author, session)
        for document, author in await service.list_documents()
    ]


@router.post("/", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def upload_document(
    title: str = Form(...),
    description: Optional[str] = Form(None),
    file: UploadFile = File(...),
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    session: SessionContext = Depends(get_current_session),
):
    """파일 업로드 + 문서 등록"""
    service = DocumentService(db, storage)
    data = await file.read()
    document = await service.upload_document(title, description, file.filename, file.content_type, data, session)
    return document_response(service, document, session.display_name, session)


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    session: Optional[SessionContext] = Depends(get_optional_session),
):
    service = DocumentService(db, storage)
    document = await service.get_document(document_id)
    return document_response(service, document, await service.get_author(document), session)


@router.get("/{document_id}/download")
async def download_document(
    document_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
):
    """파일 다운로드"""
    document, data = await DocumentService(db, storage).download_document(document_id)
    _, ext = os.path.splitext(document.file_path)
    filename = document.title + ext
    return Response(
        content=data,
        media_type=document.file_type,
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"},
    )


@router.put("/{document_id}", response_model=DocumentResponse)
async def update_document(
    document_id: uuid.UUID,
    update_data: DocumentUpdate,
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    session: SessionContext = Depends(get_current_session),
):
    service = DocumentService(db, storage)
    document = await service.update_document(document_id, update_data, session)
    return document_response(service, document, await service.get_author(document), session)


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    document_id: uuid.UUID,
    confirm: bool = Query(False),
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    session: SessionContext = Depends(get_current_session),
):
    """문서 삭제: 메타데이터 → 파일 (?confirm=true 필요)"""
    service = DocumentService(db, storage)
    await run_confirmed_delete("document", document_id, lambda: service.delete_document(document_id, session), confirm)
