from typing import List, Optional
import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.auth import get_current_session, get_optional_session, require_admin
from portal.core.db import get_db
from portal.domains.common.confirmation import run_confirmed_delete
from portal.domains.common.permissions import SessionContext
from portal.domains.common.schemas import CommentCreate
from portal.domains.receipts.schemas import (
    ReceiptCreate, ReceiptUpdate, ReceiptResponse, ReceiptCommentResponse
)
from portal.domains.receipts.services import ReceiptService

router = APIRouter(prefix="/receipts", tags=["receipts"])


@router.get("/", response_model=List[ReceiptResponse])
async def list_receipts(
    db: AsyncSession = Depends(get_db),
    session: Optional[SessionContext] = Depends(get_optional_session),
):
    """영수증 신청 목록 (최신순)"""
    receipts = await ReceiptService(db).list_receipts()
    return [ReceiptResponse.from_record(receipt, session) for receipt in receipts]


@router.post("/", response_model=ReceiptResponse, status_code=status.HTTP_201_CREATED)
async def create_receipt(
    receipt_data: ReceiptCreate,
    db: AsyncSession = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    """기부금 영수증 신청"""
    receipt = await ReceiptService(db).create_receipt(receipt_data, session)
    return ReceiptResponse.from_record(receipt, session)


@router.get("/{receipt_id}", response_model=ReceiptResponse)
async def get_receipt(
    receipt_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    session: Optional[SessionContext] = Depends(get_optional_session),
):
    receipt = await ReceiptService(db).get_receipt(receipt_id)
    return ReceiptResponse.from_record(receipt, session)


@router.put("/{receipt_id}", response_model=ReceiptResponse)
async def update_receipt(
    receipt_id: uuid.UUID,
    update_data: ReceiptUpdate,
    db: AsyncSession = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    receipt = await ReceiptService(db).update_receipt(receipt_id, update_data, session)
    return ReceiptResponse.from_record(receipt, session)


@router.post("/{receipt_id}/toggle-processed", response_model=ReceiptResponse)
async def toggle_processed(
    receipt_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    session: SessionContext = Depends(require_admin),
):
    """처리 상태 전환 (관리자)"""
    receipt = await ReceiptService(db).toggle_processed(receipt_id, session)
    return ReceiptResponse.from_record(receipt, session)


@router.delete("/{receipt_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_receipt(
    receipt_id: uuid.UUID,
    confirm: bool = Query(False),
    db: AsyncSession = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    """영수증 삭제: 댓글 → 영수증 (?confirm=true 필요)"""
    service = ReceiptService(db)
    await run_confirmed_delete("receipt", receipt_id, lambda: service.delete_receipt(receipt_id, session), confirm)


@router.get("/{receipt_id}/comments", response_model=List[ReceiptCommentResponse])
async def list_comments(
    receipt_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    session: Optional[SessionContext] = Depends(get_optional_session),
):
    comments = await ReceiptService(db).list_comments(receipt_id)
    return [ReceiptCommentResponse.from_record(comment, session) for comment in comments]


@router.post("/{receipt_id}/comments", response_model=ReceiptCommentResponse, status_code=status.HTTP_201_CREATED)
async def add_comment(
    receipt_id: uuid.UUID,
    comment_data: CommentCreate,
    db: AsyncSession = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    comment = await ReceiptService(db).add_comment(receipt_id, comment_data.content, session)
    return ReceiptCommentResponse.from_record(comment, session)


@router.delete("/{receipt_id}/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    receipt_id: uuid.UUID,
    comment_id: uuid.UUID,
    confirm: bool = Query(False),
    db: AsyncSession = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    service = ReceiptService(db)
    await run_confirmed_delete(
        "receipt_comment", comment_id, lambda: service.delete_comment(receipt_id, comment_id, session), confirm
    )
