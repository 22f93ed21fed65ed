from datetime import datetime
from typing import List, Optional
import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.auth import get_current_session, get_optional_session
from portal.core.db import get_db
from portal.domains.common.confirmation import run_confirmed_delete
from portal.domains.common.permissions import SessionContext
from portal.domains.events.schemas import EventCreate, EventUpdate, EventResponse
from portal.domains.events.services import EventService

router = APIRouter(prefix="/events", tags=["events"])


@router.get("/", response_model=List[EventResponse])
async def list_events(
    start: Optional[datetime] = Query(None),
    end: Optional[datetime] = Query(None),
    db: AsyncSession = Depends(get_db),
    session: Optional[SessionContext] = Depends(get_optional_session),
):
    """일정 목록 ([start, end) 구간과 겹치는 일정, 시작 시간순)"""
    events = await EventService(db).list_events(start, end)
    return [EventResponse.from_record(event, session) for event in events]


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    session: Optional[SessionContext] = Depends(get_optional_session),
):
    event = await EventService(db).get_event(event_id)
    return EventResponse.from_record(event, session)


@router.post("/", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    event_data: EventCreate,
    db: AsyncSession = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    """일정 추가"""
    event = await EventService(db).create_event(event_data, session)
    return EventResponse.from_record(event, session)


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: uuid.UUID,
    update_data: EventUpdate,
    db: AsyncSession = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    event = await EventService(db).update_event(event_id, update_data, session)
    return EventResponse.from_record(event, session)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(
    event_id: uuid.UUID,
    confirm: bool = Query(False),
    db: AsyncSession = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    """일정 삭제 (?confirm=true 필요)"""
    service = EventService(db)
    await run_confirmed_delete("event", event_id, lambda: service.delete_event(event_id, session), confirm)
