import logging
from typing import List
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.errors import PermissionDeniedError, ValidationError
from portal.core.saga import Saga
from portal.db.models.receipt import DonationReceipt, DonationReceiptComment
from portal.db.repositories.receipt_repository import (
    DonationReceiptCommentRepository,
    DonationReceiptRepository,
)
from portal.domains.common.permissions import SessionContext, ensure_can_modify
from portal.domains.receipts.schemas import ReceiptCreate, ReceiptUpdate

logger = logging.getLogger(__name__)


class ReceiptService:
    """기부금 영수증 신청 + 처리 상태 + 댓글"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repository = DonationReceiptRepository(session)
        self.comment_repository = DonationReceiptCommentRepository(session)

    async def list_receipts(self) -> List[DonationReceipt]:
        return await self.repository.list()

    async def get_receipt(self, receipt_id: uuid.UUID) -> DonationReceipt:
        return await self.repository.get_or_raise(receipt_id)

    async def create_receipt(self, receipt_data: ReceiptCreate, session: SessionContext) -> DonationReceipt:
        fields = receipt_data.model_dump()
        fields.update({
            "user_id": session.user_id,
            "author": session.display_name,
            "processed": False,
        })
        return await self.repository.create(fields)

    async def update_receipt(
        self,
        receipt_id: uuid.UUID,
        update_data: ReceiptUpdate,
        session: SessionContext,
    ) -> DonationReceipt:
        receipt = await self.repository.get_or_raise(receipt_id)
        ensure_can_modify(session, receipt.user_id)
        return await self.repository.update(receipt_id, update_data.model_dump(exclude_unset=True))

    async def toggle_processed(self, receipt_id: uuid.UUID, session: SessionContext) -> DonationReceipt:
        """처리 상태 반전 (관리자, 양방향)"""
        if not session.is_admin:
            raise PermissionDeniedError("관리자만 처리 상태를 변경할 수 있습니다.")
        receipt = await self.repository.get_or_raise(receipt_id)
        processed = not receipt.processed
        logger.info("receipt %s processed %s -> %s by %s", receipt_id, receipt.processed, processed, session.user_id)
        return await self.repository.update(receipt_id, {"processed": processed})

    async def delete_receipt(self, receipt_id: uuid.UUID, session: SessionContext) -> None:
        """댓글 삭제 → 영수증 삭제"""
        receipt = await self.repository.get_or_raise(receipt_id)
        ensure_can_modify(session, receipt.user_id)

        saga = Saga("receipt.delete")
        saga.step("delete_comments", lambda: self.comment_repository.delete_where(receipt_id=receipt_id))
        saga.step("delete_receipt", lambda: self.repository.delete_or_raise(receipt_id))
        await saga.run()

    # --- 댓글 ---

    async def list_comments(self, receipt_id: uuid.UUID) -> List[DonationReceiptComment]:
        await self.repository.get_or_raise(receipt_id)
        return await self.comment_repository.list(receipt_id=receipt_id)

    async def add_comment(self, receipt_id: uuid.UUID, content: str, session: SessionContext) -> DonationReceiptComment:
        await self.repository.get_or_raise(receipt_id)
        return await self.comment_repository.create({
            "receipt_id": receipt_id,
            "user_id": session.user_id,
            "author": session.display_name,
            "content": content,
        })

    async def delete_comment(self, receipt_id: uuid.UUID, comment_id: uuid.UUID, session: SessionContext) -> None:
        comment = await self.comment_repository.get_or_raise(comment_id)
        if comment.receipt_id != receipt_id:
            raise ValidationError("해당 영수증의 댓글이 아닙니다.")
        ensure_can_modify(session, comment.user_id)
        await self.comment_repository.delete_or_raise(comment_id)
