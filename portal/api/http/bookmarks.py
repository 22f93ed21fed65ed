from typing import List
import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.auth import get_current_session
from portal.core.db import get_db
from portal.domains.bookmarks.schemas import BookmarkCreate, BookmarkUpdate, BookmarkResponse
from portal.domains.bookmarks.services import BookmarkService
from portal.domains.common.confirmation import run_confirmed_delete
from portal.domains.common.permissions import SessionContext

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])


@router.get("/", response_model=List[BookmarkResponse])
async def list_bookmarks(
    db: AsyncSession = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    """내 즐겨찾기 (최신순)"""
    bookmarks = await BookmarkService(db).list_bookmarks(session)
    return [BookmarkResponse.from_record(bookmark, session) for bookmark in bookmarks]


@router.post("/", response_model=BookmarkResponse, status_code=status.HTTP_201_CREATED)
async def create_bookmark(
    bookmark_data: BookmarkCreate,
    db: AsyncSession = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    bookmark = await BookmarkService(db).create_bookmark(bookmark_data, session)
    return BookmarkResponse.from_record(bookmark, session)


@router.put("/{bookmark_id}", response_model=BookmarkResponse)
async def update_bookmark(
    bookmark_id: uuid.UUID,
    update_data: BookmarkUpdate,
    db: AsyncSession = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    bookmark = await BookmarkService(db).update_bookmark(bookmark_id, update_data, session)
    return BookmarkResponse.from_record(bookmark, session)


@router.delete("/{bookmark_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_bookmark(
    bookmark_id: uuid.UUID,
    confirm: bool = Query(False),
    db: AsyncSession = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    service = BookmarkService(db)
    await run_confirmed_delete(
        "bookmark", bookmark_id, lambda: service.delete_bookmark(bookmark_id, session), confirm
    )
