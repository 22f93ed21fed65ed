from contextlib import asynccontextmanager
import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from portal.api.http import (
    health_router,
    auth_router,
    events_router,
    documents_router,
    notices_router,
    receipts_router,
    members_router,
    profile_router,
    chats_router,
    free_posts_router,
    board_meetings_router,
    bookmarks_router,
)
from portal.core.config import settings
from portal.core.db import init_models
from portal.core.errors import register_exception_handlers
from portal.core.logging import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.log_level)
    if settings.create_tables_on_startup:
        await init_models()
    logger.info("portal started (storage=%s)", settings.storage_root)
    yield
    logger.info("portal stopped")


app = FastAPI(
    title="Portal",
    description="사내 포털: 일정, 문서함, 공지사항, 기부금 영수증, 임직원 디렉터리, 채팅, 자유게시판, 이사회, 즐겨찾기",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# 업로드 파일 공개 URL
os.makedirs(settings.storage_root, exist_ok=True)
app.mount(settings.storage_public_url, StaticFiles(directory=settings.storage_root), name="storage")

app.include_router(health_router)
app.include_router(auth_router)
app.include_router(events_router)
app.include_router(documents_router)
app.include_router(notices_router)
app.include_router(receipts_router)
app.include_router(members_router)
app.include_router(profile_router)
app.include_router(chats_router)
app.include_router(free_posts_router)
app.include_router(board_meetings_router)
app.include_router(bookmarks_router)


@app.get("/")
async def root():
    """루트 엔드포인트"""
    return {
        "message": "Portal API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }
