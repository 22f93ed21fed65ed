from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.db import get_db

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(db: AsyncSession = Depends(get_db)):
    """서비스 및 DB 상태"""
    await db.execute(text("SELECT 1"))
    return {"status": "ok", "database": "ok"}
