from typing import List, Optional
import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.auth import get_current_session, get_optional_session
from portal.core.db import get_db
from portal.domains.common.confirmation import run_confirmed_delete
from portal.domains.common.permissions import SessionContext
from portal.domains.common.schemas import CommentCreate
from portal.domains.freeboard.schemas import PostCreate, PostUpdate, PostResponse, PostCommentResponse
from portal.domains.freeboard.services import FreeBoardService

router = APIRouter(prefix="/free-posts", tags=["free-posts"])


@router.get("/", response_model=List[PostResponse])
async def list_posts(
    db: AsyncSession = Depends(get_db),
    session: Optional[SessionContext] = Depends(get_optional_session),
):
    """자유게시판 목록 (최신순)"""
    posts = await FreeBoardService(db).list_posts()
    return [PostResponse.from_record(post, session) for post in posts]


@router.post("/", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    db: AsyncSession = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    post = await FreeBoardService(db).create_post(post_data, session)
    return PostResponse.from_record(post, session)


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    session: Optional[SessionContext] = Depends(get_optional_session),
):
    """글 상세 (조회수 증가)"""
    post = await FreeBoardService(db).view_post(post_id)
    return PostResponse.from_record(post, session)


@router.put("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: uuid.UUID,
    update_data: PostUpdate,
    db: AsyncSession = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    post = await FreeBoardService(db).update_post(post_id, update_data, session)
    return PostResponse.from_record(post, session)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: uuid.UUID,
    confirm: bool = Query(False),
    db: AsyncSession = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    """글 삭제: 댓글 → 글 (?confirm=true 필요)"""
    service = FreeBoardService(db)
    await run_confirmed_delete("free_post", post_id, lambda: service.delete_post(post_id, session), confirm)


@router.get("/{post_id}/comments", response_model=List[PostCommentResponse])
async def list_comments(
    post_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    session: Optional[SessionContext] = Depends(get_optional_session),
):
    comments = await FreeBoardService(db).list_comments(post_id)
    return [PostCommentResponse.from_record(comment, session) for comment in comments]


@router.post("/{post_id}/comments", response_model=PostCommentResponse, status_code=status.HTTP_201_CREATED)
async def add_comment(
    post_id: uuid.UUID,
    comment_data: CommentCreate,
    db: AsyncSession = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    comment = await FreeBoardService(db).add_comment(post_id, comment_data.content, session)
    return PostCommentResponse.from_record(comment, session)


@router.delete("/{post_id}/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    post_id: uuid.UUID,
    comment_id: uuid.UUID,
    confirm: bool = Query(False),
    db: AsyncSession = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    service = FreeBoardService(db)
    await run_confirmed_delete(
        "free_post_comment", comment_id, lambda: service.delete_comment(post_id, comment_id, session), confirm
    )
