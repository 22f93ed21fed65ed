import uuid
from collections import defaultdict
from typing import Dict, Iterable, List

from sqlalchemy import select, update

from portal.db.base import utcnow
from portal.db.models.chat import Chat, ChatParticipant, ChatMessage
from portal.db.repositories.base import ResourceRepository


class ChatRepository(ResourceRepository[Chat]):
    """채팅방 (최근 활동순)"""

    model = Chat
    resource_name = "chats"
    required_fields = ("name", "creator_id")
    default_order = "updated_at"

    async def list_for_user(self, user_id: uuid.UUID) -> List[Chat]:
        joined = select(ChatParticipant.chat_id).where(ChatParticipant.user_id == user_id)
        return await self.list(where=[Chat.id.in_(joined)])

    async def touch(self, chat_id: uuid.UUID) -> None:
        """마지막 활동 시각 갱신"""
        stmt = (
            update(Chat)
            .where(Chat.id == chat_id)
            .values(updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        await self._execute("touch", stmt)
        await self._commit("touch")


class ChatParticipantRepository(ResourceRepository[ChatParticipant]):
    model = ChatParticipant
    resource_name = "chat_participants"
    required_fields = ("chat_id", "user_id")
    default_order = "joined_at"
    default_ascending = True

    async def by_chat(self, chat_ids: Iterable[uuid.UUID]) -> Dict[uuid.UUID, List[ChatParticipant]]:
        ids = list(chat_ids)
        grouped: Dict[uuid.UUID, List[ChatParticipant]] = defaultdict(list)
        if not ids:
            return grouped
        for participant in await self.list(where=[ChatParticipant.chat_id.in_(ids)]):
            grouped[participant.chat_id].append(participant)
        return grouped

    async def is_participant(self, chat_id: uuid.UUID, user_id: uuid.UUID) -> bool:
        return await self.count(chat_id=chat_id, user_id=user_id) > 0


class ChatMessageRepository(ResourceRepository[ChatMessage]):
    model = ChatMessage
    resource_name = "messages"
    required_fields = ("chat_id", "sender_id", "sender_name")
    default_ascending = True
