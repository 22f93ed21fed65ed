from portal.db.models.receipt import DonationReceipt, DonationReceiptComment
from portal.db.repositories.base import ResourceRepository


class DonationReceiptRepository(ResourceRepository[DonationReceipt]):
    model = DonationReceipt
    resource_name = "donation_receipts"
    required_fields = ("title", "content", "amount", "user_id", "author")


class DonationReceiptCommentRepository(ResourceRepository[DonationReceiptComment]):
    model = DonationReceiptComment
    resource_name = "donation_receipt_comments"
    required_fields = ("receipt_id", "user_id", "author", "content")
    default_ascending = True
