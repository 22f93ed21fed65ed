from sqlalchemy import Column, String, Text, Numeric, Boolean, ForeignKey, Uuid

from portal.db.base import BaseModel


class DonationReceipt(BaseModel):
    __tablename__ = "donation_receipts"

    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    amount = Column(Numeric(14, 2, asdecimal=False), nullable=False)
    processed = Column(Boolean, nullable=False, default=False)
    user_id = Column(Uuid(as_uuid=True), nullable=False)
    author = Column(String(100), nullable=False)
    receipt_file = Column(String(1024), nullable=True)


class DonationReceiptComment(BaseModel):
    __tablename__ = "donation_receipt_comments"

    receipt_id = Column(Uuid(as_uuid=True), ForeignKey("donation_receipts.id"), nullable=False, index=True)
    user_id = Column(Uuid(as_uuid=True), nullable=False)
    author = Column(String(100), nullable=False)
    content = Column(Text, nullable=False)
    attachment_url = Column(String(1024), nullable=True)
