from typing import List, Optional
import uuid

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.auth import get_current_session
from portal.core.db import get_db
from portal.core.storage import ObjectStorage, get_storage
from portal.domains.chats.schemas import (
    ChatCreate, ParticipantAdd, ParticipantResponse, ChatResponse, MessageResponse
)
from portal.domains.chats.services import ChatService
from portal.domains.common.permissions import SessionContext

router = APIRouter(prefix="/chats", tags=["chats"])


def chat_response(chat, participants) -> ChatResponse:
    return ChatResponse.from_record(
        chat,
        participants=[ParticipantResponse.model_validate(p) for p in participants],
    )


@router.get("/", response_model=List[ChatResponse])
async def list_chats(
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    session: SessionContext = Depends(get_current_session),
):
    """참여 중인 채팅방 (최근 활동순)"""
    chats = await ChatService(db, storage).list_chats(session)
    return [chat_response(chat, participants) for chat, participants in chats]


@router.post("/", response_model=ChatResponse, status_code=status.HTTP_201_CREATED)
async def create_chat(
    chat_data: ChatCreate,
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    session: SessionContext = Depends(get_current_session),
):
    """채팅방 생성 (생성자 자동 참여)"""
    chat, participants = await ChatService(db, storage).create_chat(chat_data.name, session)
    return chat_response(chat, participants)


@router.get("/{chat_id}", response_model=ChatResponse)
async def get_chat(
    chat_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    session: SessionContext = Depends(get_current_session),
):
    chat, participants = await ChatService(db, storage).get_chat(chat_id, session)
    return chat_response(chat, participants)


@router.post("/{chat_id}/participants", response_model=List[ParticipantResponse])
async def add_participant(
    chat_id: uuid.UUID,
    participant_data: ParticipantAdd,
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    session: SessionContext = Depends(get_current_session),
):
    """참여자 추가 (중복 추가는 무시)"""
    participants = await ChatService(db, storage).add_participant(chat_id, participant_data.user_id, session)
    return [ParticipantResponse.model_validate(p) for p in participants]


@router.get("/{chat_id}/messages", response_model=List[MessageResponse])
async def list_messages(
    chat_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    session: SessionContext = Depends(get_current_session),
):
    """메시지 목록 (오래된 순)"""
    service = ChatService(db, storage)
    messages = await service.list_messages(chat_id, session)
    return [MessageResponse.from_record(m, file_url=service.file_url(m)) for m in messages]


@router.post("/{chat_id}/messages", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def send_message(
    chat_id: uuid.UUID,
    content: Optional[str] = Form(None),
    file: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    session: SessionContext = Depends(get_current_session),
):
    """메시지 전송 (내용 또는 파일)"""
    attachment = None
    if file is not None and file.filename:
        attachment = (file.filename, file.content_type, await file.read())
    service = ChatService(db, storage)
    message = await service.send_message(chat_id, session, content, attachment)
    return MessageResponse.from_record(message, file_url=service.file_url(message))
