from typing import List, Optional
import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.auth import get_optional_session, require_admin
from portal.core.db import get_db
from portal.domains.common.confirmation import run_confirmed_delete
from portal.domains.common.permissions import SessionContext
from portal.domains.members.schemas import MemberCreate, MemberUpdate, MemberResponse
from portal.domains.members.services import MemberService

router = APIRouter(prefix="/members", tags=["members"])


@router.get("/", response_model=List[MemberResponse])
async def list_members(
    q: Optional[str] = Query(None, max_length=100),
    db: AsyncSession = Depends(get_db),
    session: Optional[SessionContext] = Depends(get_optional_session),
):
    """임직원 목록 (이름순, q로 검색)"""
    members = await MemberService(db).list_members(q)
    return [MemberResponse.from_record(member, session) for member in members]


@router.get("/{member_id}", response_model=MemberResponse)
async def get_member(
    member_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    session: Optional[SessionContext] = Depends(get_optional_session),
):
    member = await MemberService(db).get_member(member_id)
    return MemberResponse.from_record(member, session)


@router.post("/", response_model=MemberResponse, status_code=status.HTTP_201_CREATED)
async def create_member(
    member_data: MemberCreate,
    db: AsyncSession = Depends(get_db),
    session: SessionContext = Depends(require_admin),
):
    member = await MemberService(db).create_member(member_data)
    return MemberResponse.from_record(member, session)


@router.put("/{member_id}", response_model=MemberResponse)
async def update_member(
    member_id: uuid.UUID,
    update_data: MemberUpdate,
    db: AsyncSession = Depends(get_db),
    session: SessionContext = Depends(require_admin),
):
    member = await MemberService(db).update_member(member_id, update_data)
    return MemberResponse.from_record(member, session)


@router.delete("/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_member(
    member_id: uuid.UUID,
    confirm: bool = Query(False),
    db: AsyncSession = Depends(get_db),
    session: SessionContext = Depends(require_admin),
):
    service = MemberService(db)
    await run_confirmed_delete("member", member_id, lambda: service.delete_member(member_id), confirm)
