from datetime import datetime, timezone

import pytest

from portal.core.errors import BackendError, PermissionDeniedError
from portal.core.storage import BOARD_MEETING_FILES_BUCKET
from portal.db.models.board_meeting import MeetingStatus
from portal.db.repositories.board_meeting_repository import BoardMeetingFileRepository, BoardMeetingRepository
from portal.domains.board_meetings.services import BoardMeetingService
from tests.conftest import auth_headers

MARCH = datetime(2025, 3, 5, 5, 0, tzinfo=timezone.utc)


async def create_meeting(service, session, title="정기 이사회", when=MARCH, status=MeetingStatus.UPCOMING, uploads=()):
    return await service.create_meeting(title, "안건 검토", when, "본관 3층", status, list(uploads), session)


@pytest.mark.asyncio
async def test_create_stores_files_under_meeting(db_session, storage, member):
    service = BoardMeetingService(db_session, storage)

    meeting, files = await create_meeting(
        service, member, uploads=[("안건.pdf", "application/pdf", b"%PDF"), ("회의록.txt", None, b"notes")]
    )

    assert meeting.user_id == member.user_id
    assert meeting.status == "upcoming"
    assert [f.file_name for f in files] == ["안건.pdf", "회의록.txt"]
    assert files[1].file_type == "application/octet-stream"
    for record in files:
        assert record.file_path.startswith(f"{meeting.id}/")
        assert await storage.exists(BOARD_MEETING_FILES_BUCKET, record.file_path)


@pytest.mark.asyncio
async def test_failed_file_insert_rolls_back_meeting_and_blobs(db_session, storage, member, monkeypatch):
    original_create = BoardMeetingFileRepository.create
    calls = []

    async def create_once(self, fields):
        calls.append(fields["file_name"])
        if len(calls) == 2:
            raise BackendError()
        return await original_create(self, fields)

    monkeypatch.setattr(BoardMeetingFileRepository, "create", create_once)
    service = BoardMeetingService(db_session, storage)

    with pytest.raises(BackendError):
        await create_meeting(service, member, uploads=[("a.txt", None, b"a"), ("b.txt", None, b"b")])

    assert await BoardMeetingRepository(db_session).count() == 0
    assert await BoardMeetingFileRepository(db_session).count() == 0
    bucket = storage.root / BOARD_MEETING_FILES_BUCKET
    assert not bucket.exists() or [p for p in bucket.rglob("*") if p.is_file()] == []


@pytest.mark.asyncio
async def test_list_by_meeting_date_with_status_filter(db_session, storage, member):
    service = BoardMeetingService(db_session, storage)
    await create_meeting(service, member, title="1월 이사회", when=datetime(2025, 1, 8, tzinfo=timezone.utc),
                         status=MeetingStatus.COMPLETED)
    await create_meeting(service, member, title="3월 이사회")
    await create_meeting(service, member, title="2월 이사회", when=datetime(2025, 2, 5, tzinfo=timezone.utc),
                         status=MeetingStatus.CANCELLED)

    assert [m.title for m in await service.list_meetings()] == ["3월 이사회", "2월 이사회", "1월 이사회"]
    assert [m.title for m in await service.list_meetings(MeetingStatus.COMPLETED)] == ["1월 이사회"]


@pytest.mark.asyncio
async def test_delete_removes_blobs_rows_and_meeting(db_session, storage, member, other_member):
    service = BoardMeetingService(db_session, storage)
    meeting, files = await create_meeting(service, member, uploads=[("a.txt", None, b"a")])

    with pytest.raises(PermissionDeniedError):
        await service.delete_meeting(meeting.id, other_member)

    await service.delete_meeting(meeting.id, member)

    assert await BoardMeetingRepository(db_session).get(meeting.id) is None
    assert await BoardMeetingFileRepository(db_session).count(board_meeting_id=meeting.id) == 0
    assert not await storage.exists(BOARD_MEETING_FILES_BUCKET, files[0].file_path)


@pytest.mark.asyncio
async def test_api_create_detail_download_and_delete(api_client, member):
    response = await api_client.post(
        "/board-meetings/",
        data={"title": "임시 이사회", "meeting_date": "2025-03-05T14:00:00+09:00", "location": "본관"},
        files=[
            ("files", ("안건.txt", b"agenda", "text/plain")),
            ("files", ("예산.csv", b"a,b\n1,2", "text/csv")),
        ],
        headers=auth_headers(member),
    )
    assert response.status_code == 201
    created = response.json()
    assert created["status"] == "upcoming"
    assert created["can_edit"] is True
    assert [f["file_name"] for f in created["files"]] == ["안건.txt", "예산.csv"]
    assert created["files"][0]["url"].startswith("/storage/board_meeting_files/")

    response = await api_client.get("/board-meetings/", params={"status": "upcoming"})
    assert [m["title"] for m in response.json()] == ["임시 이사회"]
    response = await api_client.get("/board-meetings/", params={"status": "completed"})
    assert response.json() == []

    response = await api_client.get(f"/board-meetings/{created['id']}")
    detail = response.json()
    assert len(detail["files"]) == 2
    assert datetime.fromisoformat(detail["meeting_date"].replace("Z", "+00:00")) == MARCH

    file_id = detail["files"][0]["id"]
    response = await api_client.get(f"/board-meetings/{created['id']}/files/{file_id}")
    assert response.status_code == 200
    assert response.content == b"agenda"

    response = await api_client.put(
        f"/board-meetings/{created['id']}", json={"status": "completed"}, headers=auth_headers(member)
    )
    assert response.json()["status"] == "completed"
    assert len(response.json()["files"]) == 2

    response = await api_client.delete(f"/board-meetings/{created['id']}", headers=auth_headers(member))
    assert response.status_code == 428

    response = await api_client.delete(f"/board-meetings/{created['id']}?confirm=true", headers=auth_headers(member))
    assert response.status_code == 204

    response = await api_client.get(f"/board-meetings/{created['id']}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_api_invalid_status_is_rejected(api_client, member):
    response = await api_client.post(
        "/board-meetings/",
        data={"title": "이사회", "meeting_date": "2025-03-05T14:00:00", "status": "postponed"},
        headers=auth_headers(member),
    )
    assert response.status_code == 422
