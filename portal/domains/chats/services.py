import logging
from typing import Dict, List, Optional, Tuple
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.errors import PermissionDeniedError, ValidationError
from portal.core.saga import Saga
from portal.core.storage import CHAT_FILES_BUCKET, ObjectStorage, prefixed_path
from portal.db.models.chat import Chat, ChatMessage, ChatParticipant
from portal.db.repositories.chat_repository import (
    ChatMessageRepository,
    ChatParticipantRepository,
    ChatRepository,
)
from portal.db.repositories.user_repository import UserRepository
from portal.domains.common.permissions import SessionContext

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"


class ChatService:
    """채팅방, 참여자, 메시지"""

    def __init__(self, session: AsyncSession, storage: ObjectStorage):
        self.session = session
        self.storage = storage
        self.repository = ChatRepository(session)
        self.participant_repository = ChatParticipantRepository(session)
        self.message_repository = ChatMessageRepository(session)
        self.user_repository = UserRepository(session)

    async def _ensure_participant(self, chat_id: uuid.UUID, session: SessionContext) -> Chat:
        chat = await self.repository.get_or_raise(chat_id)
        if not await self.participant_repository.is_participant(chat.id, session.user_id):
            raise PermissionDeniedError("채팅방 참여자만 사용할 수 있습니다.")
        return chat

    async def list_chats(self, session: SessionContext) -> List[Tuple[Chat, List[ChatParticipant]]]:
        """참여 중인 채팅방 (최근 활동순) + 참여자"""
        chats = await self.repository.list_for_user(session.user_id)
        participants = await self.participant_repository.by_chat(chat.id for chat in chats)
        return [(chat, participants.get(chat.id, [])) for chat in chats]

    async def get_chat(self, chat_id: uuid.UUID, session: SessionContext) -> Tuple[Chat, List[ChatParticipant]]:
        chat = await self._ensure_participant(chat_id, session)
        participants = await self.participant_repository.by_chat([chat.id])
        return chat, participants.get(chat.id, [])

    async def create_chat(self, name: str, session: SessionContext) -> Tuple[Chat, List[ChatParticipant]]:
        """채팅방 생성 → 생성자를 참여자로 추가"""
        created: Dict[str, Chat] = {}

        async def insert_chat():
            created["chat"] = await self.repository.create({"name": name, "creator_id": session.user_id})
            return created["chat"]

        async def remove_chat():
            await self.repository.delete(created["chat"].id)

        async def add_creator():
            return await self.participant_repository.create({
                "chat_id": created["chat"].id,
                "user_id": session.user_id,
            })

        saga = Saga("chat.create")
        saga.step("insert_chat", insert_chat, compensation=remove_chat)
        saga.step("add_creator", add_creator)
        chat, participant = await saga.run()
        return chat, [participant]

    async def add_participant(
        self,
        chat_id: uuid.UUID,
        user_id: uuid.UUID,
        session: SessionContext,
    ) -> List[ChatParticipant]:
        """참여자 추가 (이미 참여 중이면 그대로)"""
        chat = await self._ensure_participant(chat_id, session)
        if await self.user_repository.get(user_id) is None:
            raise ValidationError("존재하지 않는 사용자입니다.")
        if not await self.participant_repository.is_participant(chat.id, user_id):
            await self.participant_repository.create({"chat_id": chat.id, "user_id": user_id})
        participants = await self.participant_repository.by_chat([chat.id])
        return participants.get(chat.id, [])

    async def list_messages(self, chat_id: uuid.UUID, session: SessionContext) -> List[ChatMessage]:
        await self._ensure_participant(chat_id, session)
        return await self.message_repository.list(chat_id=chat_id)

    async def send_message(
        self,
        chat_id: uuid.UUID,
        session: SessionContext,
        content: Optional[str] = None,
        attachment: Optional[Tuple[str, Optional[str], bytes]] = None,
    ) -> ChatMessage:
        """메시지 전송 (내용 또는 파일 필수), 채팅방 활동 시각 갱신"""
        chat = await self._ensure_participant(chat_id, session)
        content = content.strip() if content else None
        if not content and attachment is None:
            raise ValidationError("메시지 내용 또는 파일이 필요합니다.")

        fields = {
            "chat_id": chat.id,
            "sender_id": session.user_id,
            "sender_name": session.email or str(session.user_id),
            "content": content,
        }

        saga = Saga("chat.send_message")
        if attachment is not None:
            filename, content_type, data = attachment
            if not data:
                raise ValidationError("빈 파일은 보낼 수 없습니다.")
            path = prefixed_path(chat.id, filename)
            fields.update({
                "file_path": path,
                "file_name": filename,
                "file_type": content_type or DEFAULT_MIME_TYPE,
                "file_size": len(data),
            })
            saga.step(
                "upload_file",
                lambda: self.storage.upload(CHAT_FILES_BUCKET, path, data),
                compensation=lambda: self.storage.remove(CHAT_FILES_BUCKET, [path]),
            )
        saga.step("insert_message", lambda: self.message_repository.create(fields))
        message = (await saga.run())[-1]
        await self.repository.touch(chat.id)
        return message

    def file_url(self, message: ChatMessage) -> Optional[str]:
        if not message.file_path:
            return None
        return self.storage.public_url(CHAT_FILES_BUCKET, message.file_path)
