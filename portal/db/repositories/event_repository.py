from datetime import datetime
from typing import List, Optional

from sqlalchemy import or_

from portal.db.models.event import CalendarEvent
from portal.db.repositories.base import ResourceRepository


class EventRepository(ResourceRepository[CalendarEvent]):
    model = CalendarEvent
    resource_name = "calendar_events"
    required_fields = ("title", "start_time", "end_time", "type")
    default_order = "start_time"
    default_ascending = True

    async def list_between(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[CalendarEvent]:
        """[start, end) 구간과 겹치는 일정

        start에 정확히 끝나는 일정은 제외하고, 길이 0인 일정은 시작 시각으로 판단한다.
        """
        where = []
        if end is not None:
            where.append(CalendarEvent.start_time < end)
        if start is not None:
            where.append(or_(CalendarEvent.end_time > start, CalendarEvent.start_time >= start))
        return await self.list(where=where)
