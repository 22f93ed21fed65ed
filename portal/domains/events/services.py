import logging
from datetime import datetime
from typing import List, Optional
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.errors import ValidationError
from portal.db.models.event import CalendarEvent
from portal.db.repositories.event_repository import EventRepository
from portal.domains.common.permissions import SessionContext, ensure_can_modify
from portal.domains.events.schemas import EventCreate, EventUpdate, comparable

logger = logging.getLogger(__name__)


class EventService:
    """캘린더 일정"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repository = EventRepository(session)

    async def list_events(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[CalendarEvent]:
        """시작 시간 오름차순 (기간 지정 시 해당 구간만)"""
        if start and end and comparable(end) <= comparable(start):
            raise ValidationError("조회 기간이 올바르지 않습니다.")
        return await self.repository.list_between(start, end)

    async def get_event(self, event_id: uuid.UUID) -> CalendarEvent:
        return await self.repository.get_or_raise(event_id)

    async def create_event(self, event_data: EventCreate, session: SessionContext) -> CalendarEvent:
        fields = event_data.model_dump()
        fields["user_id"] = session.user_id
        return await self.repository.create(fields)

    async def update_event(
        self,
        event_id: uuid.UUID,
        update_data: EventUpdate,
        session: SessionContext,
    ) -> CalendarEvent:
        event = await self.repository.get_or_raise(event_id)
        ensure_can_modify(session, event.user_id)

        fields = update_data.model_dump(exclude_unset=True)
        start = fields.get("start_time", event.start_time)
        end = fields.get("end_time", event.end_time)
        if start is not None and end is not None and comparable(end) < comparable(start):
            raise ValidationError("종료 시간은 시작 시간보다 빠를 수 없습니다.")

        return await self.repository.update(event_id, fields)

    async def delete_event(self, event_id: uuid.UUID, session: SessionContext) -> None:
        event = await self.repository.get_or_raise(event_id)
        ensure_can_modify(session, event.user_id)
        await self.repository.delete_or_raise(event_id)
