from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from portal.core.config import settings

# 모든 모델의 베이스 클래스
Base = declarative_base()

# 비동기 엔진
engine = create_async_engine(settings.database_url, future=True, echo=settings.sql_echo)

# 세션 팩토리
SessionLocal = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


# FastAPI 의존성 주입용
async def get_db():
    async with SessionLocal() as session:
        yield session


async def init_models() -> None:
    """개발 환경에서 스키마 생성 (운영은 alembic 사용)"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
