from datetime import datetime
from typing import List, Optional, Tuple
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.errors import ValidationError
from portal.core.saga import Saga
from portal.core.storage import BOARD_MEETING_FILES_BUCKET, ObjectStorage, prefixed_path
from portal.db.models.board_meeting import BoardMeeting, BoardMeetingFile, MeetingStatus
from portal.db.repositories.board_meeting_repository import BoardMeetingFileRepository, BoardMeetingRepository
from portal.domains.common.permissions import SessionContext, ensure_can_modify
from portal.domains.board_meetings.schemas import MeetingUpdate

DEFAULT_MIME_TYPE = "application/octet-stream"

# (파일명, MIME 타입, 내용)
Upload = Tuple[str, Optional[str], bytes]


class BoardMeetingService:
    """이사회 회의 + 회의 자료 파일"""

    def __init__(self, session: AsyncSession, storage: ObjectStorage):
        self.session = session
        self.storage = storage
        self.repository = BoardMeetingRepository(session)
        self.file_repository = BoardMeetingFileRepository(session)

    async def list_meetings(self, status: Optional[MeetingStatus] = None) -> List[BoardMeeting]:
        """회의 일시 최신순 (상태 탭 필터 선택)"""
        if status is None:
            return await self.repository.list()
        return await self.repository.list(status=MeetingStatus(status).value)

    async def get_meeting(self, meeting_id: uuid.UUID) -> Tuple[BoardMeeting, List[BoardMeetingFile]]:
        meeting = await self.repository.get_or_raise(meeting_id)
        files = await self.file_repository.list(board_meeting_id=meeting.id)
        return meeting, files

    async def create_meeting(
        self,
        title: str,
        content: Optional[str],
        meeting_date: datetime,
        location: Optional[str],
        status: MeetingStatus,
        uploads: List[Upload],
        session: SessionContext,
    ) -> Tuple[BoardMeeting, List[BoardMeetingFile]]:
        """회의 저장 → 파일마다 (업로드 → 파일 행 저장)

        중간에 실패하면 완료된 단계를 역순으로 되돌려 회의 자체가 남지 않는다.
        """
        if not title or not title.strip():
            raise ValidationError("제목을 입력해주세요.")

        meeting_id = uuid.uuid4()
        fields = {
            "id": meeting_id,
            "title": title.strip(),
            "content": content,
            "meeting_date": meeting_date,
            "location": location,
            "status": MeetingStatus(status).value,
            "user_id": session.user_id,
        }

        saga = Saga("board_meeting.create")
        saga.step(
            "insert_meeting",
            lambda: self.repository.create(fields),
            compensation=lambda: self.repository.delete(meeting_id),
        )
        for index, upload in enumerate(uploads):
            self._add_file_steps(saga, meeting_id, index, upload)

        results = await saga.run()
        return results[0], [record for record in results[1:] if isinstance(record, BoardMeetingFile)]

    def _add_file_steps(self, saga: Saga, meeting_id: uuid.UUID, index: int, upload: Upload) -> None:
        filename, content_type, data = upload
        path = prefixed_path(meeting_id, f"{index}_{filename}")
        row = {
            "id": uuid.uuid4(),
            "board_meeting_id": meeting_id,
            "file_name": filename,
            "file_type": content_type or DEFAULT_MIME_TYPE,
            "file_size": len(data),
            "file_path": path,
        }
        saga.step(
            f"upload_file[{index}]",
            lambda: self.storage.upload(BOARD_MEETING_FILES_BUCKET, path, data),
            compensation=lambda: self.storage.remove(BOARD_MEETING_FILES_BUCKET, [path]),
        )
        saga.step(
            f"insert_file[{index}]",
            lambda: self.file_repository.create(row),
            compensation=lambda: self.file_repository.delete(row["id"]),
        )

    async def update_meeting(
        self,
        meeting_id: uuid.UUID,
        update_data: MeetingUpdate,
        session: SessionContext,
    ) -> BoardMeeting:
        meeting = await self.repository.get_or_raise(meeting_id)
        ensure_can_modify(session, meeting.user_id)
        return await self.repository.update(meeting_id, update_data.model_dump(exclude_unset=True))

    async def download_file(self, meeting_id: uuid.UUID, file_id: uuid.UUID) -> Tuple[BoardMeetingFile, bytes]:
        record = await self.file_repository.get_or_raise(file_id)
        if record.board_meeting_id != meeting_id:
            raise ValidationError("해당 회의의 파일이 아닙니다.")
        return record, await self.storage.download(BOARD_MEETING_FILES_BUCKET, record.file_path)

    async def delete_meeting(self, meeting_id: uuid.UUID, session: SessionContext) -> None:
        """파일 삭제 → 파일 행 삭제 → 회의 삭제"""
        meeting = await self.repository.get_or_raise(meeting_id)
        ensure_can_modify(session, meeting.user_id)
        files = await self.file_repository.list(board_meeting_id=meeting_id)
        paths = [record.file_path for record in files]

        saga = Saga("board_meeting.delete")
        if paths:
            saga.step("remove_files", lambda: self.storage.remove(BOARD_MEETING_FILES_BUCKET, paths))
            saga.step("delete_file_rows", lambda: self.file_repository.delete_where(board_meeting_id=meeting_id))
        saga.step("delete_meeting", lambda: self.repository.delete_or_raise(meeting_id))
        await saga.run()

    def public_url(self, record: BoardMeetingFile) -> str:
        return self.storage.public_url(BOARD_MEETING_FILES_BUCKET, record.file_path)
