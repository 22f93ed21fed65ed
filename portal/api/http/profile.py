from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.auth import get_current_session
from portal.core.db import get_db
from portal.domains.common.permissions import SessionContext
from portal.domains.members.schemas import ProfileResponse, ProfileUpdate
from portal.domains.members.services import ProfileService

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    db: AsyncSession = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    """내 프로필"""
    return await ProfileService(db).get_my_profile(session)


@router.put("/me", response_model=ProfileResponse)
async def update_my_profile(
    update_data: ProfileUpdate,
    db: AsyncSession = Depends(get_db),
    session: SessionContext = Depends(get_current_session),
):
    """내 프로필 저장 (없으면 생성)"""
    return await ProfileService(db).upsert_my_profile(update_data, session)
