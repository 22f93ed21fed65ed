from portal.db.models.document import Document
from portal.db.repositories.base import ResourceRepository


class DocumentRepository(ResourceRepository[Document]):
    """문서 메타데이터 저장소 (파일은 스토리지)"""

    model = Document
    resource_name = "documents"
    required_fields = ("title", "file_path", "file_type", "file_size")
