from datetime import datetime
from typing import List, Optional
from urllib.parse import quote
import uuid

from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.auth import get_current_session, get_optional_session
from portal.core.db import get_db
from portal.core.storage import ObjectStorage, get_storage
from portal.db.models.board_meeting import MeetingStatus
from portal.domains.board_meetings.schemas import MeetingFileResponse, MeetingResponse, MeetingUpdate
from portal.domains.board_meetings.services import BoardMeetingService
from portal.domains.common.confirmation import run_confirmed_delete
from portal.domains.common.permissions import SessionContext
from portal.domains.documents.schemas import format_file_size

router = APIRouter(prefix="/board-meetings", tags=["board-meetings"])


def meeting_response(service: BoardMeetingService, meeting, files, session) -> MeetingResponse:
    return MeetingResponse.from_record(
        meeting,
        session,
        files=[
            MeetingFileResponse.from_record(
                record, url=service.public_url(record), size_label=format_file_size(record.file_size)
            )
            for record in files
        ],
    )


@router.get("/", response_model=List[MeetingResponse])
async def list_meetings(
    status_filter: Optional[MeetingStatus] = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    session: Optional[SessionContext] = Depends(get_optional_session),
):
    """이사회 목록 (회의 일시 최신순, ?status= 로 필터)"""
    meetings = await BoardMeetingService(db, storage).list_meetings(status_filter)
    return [MeetingResponse.from_record(meeting, session) for meeting in meetings]


@router.post("/", response_model=MeetingResponse, status_code=status.HTTP_201_CREATED)
async def create_meeting(
    title: str = Form(...),
    meeting_date: datetime = Form(...),
    content: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
    meeting_status: MeetingStatus = Form(MeetingStatus.UPCOMING, alias="status"),
    files: Optional[List[UploadFile]] = File(None),
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    session: SessionContext = Depends(get_current_session),
):
    """회의 등록 + 회의 자료 업로드"""
    uploads = []
    for upload in files or []:
        if upload.filename:
            uploads.append((upload.filename, upload.content_type, await upload.read()))
    service = BoardMeetingService(db, storage)
    meeting, records = await service.create_meeting(
        title, content, meeting_date, location, meeting_status, uploads, session
    )
    return meeting_response(service, meeting, records, session)


@router.get("/{meeting_id}", response_model=MeetingResponse)
async def get_meeting(
    meeting_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    session: Optional[SessionContext] = Depends(get_optional_session),
):
    """회의 상세 + 첨부 파일 목록"""
    service = BoardMeetingService(db, storage)
    meeting, files = await service.get_meeting(meeting_id)
    return meeting_response(service, meeting, files, session)


@router.get("/{meeting_id}/files/{file_id}")
async def download_file(
    meeting_id: uuid.UUID,
    file_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
):
    record, data = await BoardMeetingService(db, storage).download_file(meeting_id, file_id)
    return Response(
        content=data,
        media_type=record.file_type,
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(record.file_name)}"},
    )


@router.put("/{meeting_id}", response_model=MeetingResponse)
async def update_meeting(
    meeting_id: uuid.UUID,
    update_data: MeetingUpdate,
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    session: SessionContext = Depends(get_current_session),
):
    service = BoardMeetingService(db, storage)
    await service.update_meeting(meeting_id, update_data, session)
    meeting, files = await service.get_meeting(meeting_id)
    return meeting_response(service, meeting, files, session)


@router.delete("/{meeting_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_meeting(
    meeting_id: uuid.UUID,
    confirm: bool = Query(False),
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    session: SessionContext = Depends(get_current_session),
):
    """회의 삭제: 파일 → 파일 행 → 회의 (?confirm=true 필요)"""
    service = BoardMeetingService(db, storage)
    await run_confirmed_delete(
        "board_meeting", meeting_id, lambda: service.delete_meeting(meeting_id, session), confirm
    )
