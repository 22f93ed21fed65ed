"""로컬 파일시스템 기반 오브젝트 스토리지.

버킷은 STORAGE_ROOT 아래의 하위 디렉터리이며, 파일은 버킷 내부의 상대 경로로
식별한다. 공개 URL은 STORAGE_PUBLIC_URL 기준으로 만들고 /storage 정적 마운트가 제공한다.
"""

import logging
import time
from pathlib import Path, PurePosixPath
from typing import Iterable, List
from urllib.parse import quote, unquote

from starlette.concurrency import run_in_threadpool

from portal.core.config import settings
from portal.core.errors import BackendError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

DOCUMENTS_BUCKET = "documents"
ATTACHMENTS_BUCKET = "attachments"
CHAT_FILES_BUCKET = "chat_files"
BOARD_MEETING_FILES_BUCKET = "board_meeting_files"


def _write(target: Path, data: bytes) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(data)


def prefixed_path(prefix, filename: str) -> str:
    """<prefix>/<밀리초>_<파일명> (경로 구분자는 제거)"""
    name = (filename or "file").replace("/", "_").replace("\\", "_")
    return f"{prefix}/{int(time.time() * 1000)}_{name}"


class ObjectStorage:
    """업로드/다운로드/삭제/공개 URL"""

    def __init__(self, root: str, public_url: str = "/storage"):
        self.root = Path(root)
        self.public_base = public_url.rstrip("/")

    def _resolve(self, bucket: str, path: str) -> Path:
        if not bucket or not path:
            raise ValidationError("버킷과 경로가 필요합니다.")
        relative = PurePosixPath(path)
        if relative.is_absolute() or ".." in relative.parts:
            raise ValidationError(f"허용되지 않는 경로입니다: {path}")
        return self.root / bucket / Path(*relative.parts)

    async def upload(self, bucket: str, path: str, data: bytes) -> str:
        target = self._resolve(bucket, path)
        logger.info("storage upload %s/%s (%d bytes)", bucket, path, len(data))
        if target.exists():
            raise BackendError(f"이미 존재하는 파일입니다: {path}")
        try:
            await run_in_threadpool(_write, target, data)
        except OSError as e:
            logger.error("storage upload failed %s/%s: %s", bucket, path, e)
            raise BackendError("파일 업로드에 실패했습니다.") from e
        return path

    async def download(self, bucket: str, path: str) -> bytes:
        target = self._resolve(bucket, path)
        if not target.is_file():
            raise NotFoundError("파일을 찾을 수 없습니다.")
        try:
            return await run_in_threadpool(target.read_bytes)
        except OSError as e:
            logger.error("storage download failed %s/%s: %s", bucket, path, e)
            raise BackendError("파일 다운로드에 실패했습니다.") from e

    async def remove(self, bucket: str, paths: Iterable[str]) -> List[str]:
        """존재하는 파일만 삭제하고 삭제된 경로 목록 반환"""
        removed = []
        for path in paths:
            target = self._resolve(bucket, path)
            if not target.exists():
                continue
            try:
                await run_in_threadpool(target.unlink)
            except OSError as e:
                logger.error("storage remove failed %s/%s: %s", bucket, path, e)
                raise BackendError("파일 삭제에 실패했습니다.") from e
            removed.append(path)
        logger.info("storage remove %s %s", bucket, removed)
        return removed

    async def exists(self, bucket: str, path: str) -> bool:
        return self._resolve(bucket, path).is_file()

    def public_url(self, bucket: str, path: str) -> str:
        self._resolve(bucket, path)
        return f"{self.public_base}/{quote(bucket)}/{quote(path)}"

    def path_from_public_url(self, bucket: str, url: str) -> str:
        """공개 URL에서 버킷 내부 경로 추출"""
        prefix = f"{self.public_base}/{quote(bucket)}/"
        if url.startswith(prefix):
            return unquote(url[len(prefix):])
        return url.rsplit("/", 1)[-1]


storage = ObjectStorage(settings.storage_root, settings.storage_public_url)


def get_storage() -> ObjectStorage:
    return storage
