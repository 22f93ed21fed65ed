import os
import tempfile

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# 앱 임포트 전에 설정 (정적 마운트 디렉터리)
os.environ.setdefault("STORAGE_ROOT", tempfile.mkdtemp(prefix="portal-storage-"))

from portal.core.db import Base, get_db
from portal.core.security import create_access_token
from portal.core.storage import ObjectStorage, get_storage
from portal.db.repositories.profile_repository import ProfileRepository
from portal.db.repositories.user_repository import UserRepository
from portal.domains.common.permissions import ADMIN_ROLE, SessionContext
from portal.main import app


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def storage(tmp_path):
    return ObjectStorage(str(tmp_path / "storage"), "/storage")


@pytest_asyncio.fixture
async def api_client(session_factory, storage):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client
    finally:
        app.dependency_overrides.clear()


async def create_account(db_session, email, name=None, role="member") -> SessionContext:
    """테스트용 계정 + 프로필"""
    user = await UserRepository(db_session).create({
        "email": email,
        "password_hash": "not-a-real-hash",
        "is_active": True,
    })
    await ProfileRepository(db_session).create({"id": user.id, "email": email, "name": name, "role": role})
    return SessionContext(user_id=user.id, email=email, role=role, name=name)


def auth_headers(session: SessionContext) -> dict:
    token = create_access_token({"sub": str(session.user_id), "email": session.email})
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def member(db_session):
    return await create_account(db_session, "kim@example.com", name="김철수")


@pytest_asyncio.fixture
async def other_member(db_session):
    return await create_account(db_session, "lee@example.com", name="이영희")


@pytest_asyncio.fixture
async def admin(db_session):
    return await create_account(db_session, "admin@example.com", name="관리자", role=ADMIN_ROLE)
