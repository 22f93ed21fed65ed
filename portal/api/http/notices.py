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
from portal.domains.common.schemas import CommentCreate
from portal.domains.notices.schemas import (
    PAGE_SIZE, NoticeUpdate, NoticeResponse, NoticeListResponse, NoticeCommentResponse
)
from portal.domains.notices.services import NoticeService

router = APIRouter(prefix="/notices", tags=["notices"])


@router.get("/", response_model=NoticeListResponse)
async def list_notices(
    page: int = Query(1, ge=1),
    per_page: int = Query(PAGE_SIZE, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    session: Optional[SessionContext] = Depends(get_optional_session),
):
    """공지사항 목록 (최신순, 페이지 단위)"""
    notices, total, total_pages = await NoticeService(db, storage).list_notices(page, per_page)
    return NoticeListResponse(
        notices=[NoticeResponse.from_record(notice, session) for notice in notices],
        total=total,
        page=page,
        per_page=per_page,
        total_pages=total_pages,
    )


@router.post("/", response_model=NoticeResponse, status_code=status.HTTP_201_CREATED)
async def create_notice(
    title: str = Form(...),
    content: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    attachment: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    session: SessionContext = Depends(get_current_session),
):
    """공지 작성 (첨부 파일 선택)"""
    upload = None
    if attachment is not None and attachment.filename:
        upload = (attachment.filename, await attachment.read())
    notice = await NoticeService(db, storage).create_notice(title, content, category, session, upload)
    return NoticeResponse.from_record(notice, session)


@router.get("/{notice_id}", response_model=NoticeResponse)
async def get_notice(
    notice_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    session: Optional[SessionContext] = Depends(get_optional_session),
):
    """공지 상세 (조회수 증가)"""
    notice = await NoticeService(db, storage).view_notice(notice_id)
    return NoticeResponse.from_record(notice, session)


@router.get("/{notice_id}/attachment")
async def download_attachment(
    notice_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
):
    path, data = await NoticeService(db, storage).download_attachment(notice_id)
    return Response(
        content=data,
        media_type="application/octet-stream",
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(path)}"},
    )


@router.put("/{notice_id}", response_model=NoticeResponse)
async def update_notice(
    notice_id: uuid.UUID,
    update_data: NoticeUpdate,
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    session: SessionContext = Depends(get_current_session),
):
    notice = await NoticeService(db, storage).update_notice(notice_id, update_data, session)
    return NoticeResponse.from_record(notice, session)


@router.delete("/{notice_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_notice(
    notice_id: uuid.UUID,
    confirm: bool = Query(False),
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    session: SessionContext = Depends(get_current_session),
):
    """공지 삭제: 첨부 → 댓글 → 공지 (?confirm=true 필요)"""
    service = NoticeService(db, storage)
    await run_confirmed_delete("notice", notice_id, lambda: service.delete_notice(notice_id, session), confirm)


@router.get("/{notice_id}/comments", response_model=List[NoticeCommentResponse])
async def list_comments(
    notice_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    session: Optional[SessionContext] = Depends(get_optional_session),
):
    comments = await NoticeService(db, storage).list_comments(notice_id)
    return [NoticeCommentResponse.from_record(comment, session) for comment in comments]


@router.post("/{notice_id}/comments", response_model=NoticeCommentResponse, status_code=status.HTTP_201_CREATED)
async def add_comment(
    notice_id: uuid.UUID,
    comment_data: CommentCreate,
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    session: SessionContext = Depends(get_current_session),
):
    comment = await NoticeService(db, storage).add_comment(notice_id, comment_data.content, session)
    return NoticeCommentResponse.from_record(comment, session)


@router.delete("/{notice_id}/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    notice_id: uuid.UUID,
    comment_id: uuid.UUID,
    confirm: bool = Query(False),
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    session: SessionContext = Depends(get_current_session),
):
    service = NoticeService(db, storage)
    await run_confirmed_delete(
        "notice_comment", comment_id, lambda: service.delete_comment(notice_id, comment_id, session), confirm
    )
