"""테이블 하나에 대한 공통 CRUD 저장소.

리소스별 저장소는 모델과 필수 필드, 기본 정렬만 지정하고 나머지 동작
(빈 문자열 정규화, 필수 필드 검증, 오류 변환, 로깅)은 여기서 공유한다.
"""

import logging
import uuid
from typing import Any, Dict, Generic, List, Mapping, Optional, Sequence, Type, TypeVar

from sqlalchemy import select, update, delete, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.errors import BackendError, NotFoundError, ValidationError
from portal.db.base import BaseModel, utcnow

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# 서버가 관리하는 필드는 입력에서 무시
SERVER_MANAGED = ("created_at", "updated_at")


def coerce_id(record_id: Any) -> uuid.UUID:
    """ID 검증 (빈 값/형식 오류는 쿼리 전에 ValidationError)"""
    if record_id is None or (isinstance(record_id, str) and not record_id.strip()):
        raise ValidationError("유효하지 않은 ID입니다.")
    if isinstance(record_id, uuid.UUID):
        return record_id
    try:
        return uuid.UUID(str(record_id))
    except (ValueError, TypeError) as e:
        raise ValidationError(f"유효하지 않은 ID입니다: {record_id}") from e


class ResourceRepository(Generic[ModelT]):
    """list / get / create / update / delete"""

    model: Type[ModelT]
    resource_name: str = "resource"
    required_fields: Sequence[str] = ()
    default_order: str = "created_at"
    default_ascending: bool = False

    def __init__(self, session: AsyncSession):
        self.session = session

    # --- 내부 도우미 ---

    def _column_names(self) -> set:
        return {column.key for column in self.model.__table__.columns}

    def _column(self, name: str):
        if name not in self._column_names():
            raise ValidationError(f"알 수 없는 필드입니다: {name}")
        return getattr(self.model, name)

    def normalize(self, fields: Mapping[str, Any]) -> Dict[str, Any]:
        """빈 문자열 → None, 알 수 없는 필드는 거부"""
        columns = self._column_names()
        unknown = sorted(set(fields) - columns)
        if unknown:
            raise ValidationError(f"알 수 없는 필드입니다: {', '.join(unknown)}")

        data = {}
        for key, value in fields.items():
            if key in SERVER_MANAGED:
                continue
            if isinstance(value, str) and not value.strip():
                value = None
            data[key] = value
        return data

    def _criteria(self, filters: Mapping[str, Any]) -> List[Any]:
        return [self._column(name) == value for name, value in filters.items()]

    def _ordering(self, order_by: Optional[str], ascending: Optional[bool]):
        column = self._column(order_by or self.default_order)
        if ascending is None:
            ascending = self.default_ascending
        return column.asc() if ascending else column.desc()

    async def _commit(self, action: str) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("%s.%s failed: %s", self.resource_name, action, e)
            raise BackendError() from e

    async def _execute(self, action: str, stmt):
        try:
            return await self.session.execute(stmt)
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("%s.%s failed: %s", self.resource_name, action, e)
            raise BackendError() from e

    # --- 조회 ---

    async def list(
        self,
        order_by: Optional[str] = None,
        ascending: Optional[bool] = None,
        where: Sequence[Any] = (),
        **filters,
    ) -> List[ModelT]:
        logger.debug("%s.list order_by=%s ascending=%s filters=%s", self.resource_name, order_by, ascending, filters)
        stmt = (
            select(self.model)
            .where(*where, *self._criteria(filters))
            .order_by(self._ordering(order_by, ascending))
        )
        result = await self._execute("list", stmt)
        records = list(result.scalars().all())
        logger.debug("%s.list -> %d rows", self.resource_name, len(records))
        return records

    async def page(
        self,
        offset: int = 0,
        limit: int = 10,
        order_by: Optional[str] = None,
        ascending: Optional[bool] = None,
        **filters,
    ) -> List[ModelT]:
        stmt = (
            select(self.model)
            .where(*self._criteria(filters))
            .order_by(self._ordering(order_by, ascending))
            .offset(offset)
            .limit(limit)
        )
        result = await self._execute("page", stmt)
        return list(result.scalars().all())

    async def count(self, **filters) -> int:
        stmt = select(func.count(self.model.id)).where(*self._criteria(filters))
        result = await self._execute("count", stmt)
        return result.scalar() or 0

    async def get(self, record_id: Any) -> Optional[ModelT]:
        rid = coerce_id(record_id)
        stmt = select(self.model).where(self.model.id == rid).execution_options(populate_existing=True)
        result = await self._execute("get", stmt)
        return result.scalar_one_or_none()

    async def get_or_raise(self, record_id: Any) -> ModelT:
        record = await self.get(record_id)
        if record is None:
            raise NotFoundError()
        return record

    # --- 변경 ---

    async def create(self, fields: Mapping[str, Any]) -> ModelT:
        logger.info("%s.create fields=%s", self.resource_name, sorted(fields))
        data = self.normalize(fields)

        missing = [name for name in self.required_fields if data.get(name) is None]
        if missing:
            raise ValidationError(f"필수 필드가 누락되었습니다: {', '.join(missing)}")

        record = self.model(**data)
        self.session.add(record)
        await self._commit("create")
        try:
            await self.session.refresh(record)
        except SQLAlchemyError as e:
            raise BackendError() from e

        logger.info("%s.create -> id=%s", self.resource_name, record.id)
        return record

    async def update(self, record_id: Any, partial_fields: Mapping[str, Any]) -> ModelT:
        rid = coerce_id(record_id)
        logger.info("%s.update id=%s fields=%s", self.resource_name, rid, sorted(partial_fields))
        data = self.normalize(partial_fields)
        data.pop("id", None)

        emptied = [name for name in self.required_fields if name in data and data[name] is None]
        if emptied:
            raise ValidationError(f"필수 필드가 누락되었습니다: {', '.join(emptied)}")

        data["updated_at"] = utcnow()
        stmt = (
            update(self.model)
            .where(self.model.id == rid)
            .values(**data)
            .execution_options(synchronize_session=False)
        )
        result = await self._execute("update", stmt)
        await self._commit("update")
        if result.rowcount == 0:
            logger.info("%s.update id=%s matched no rows", self.resource_name, rid)
            raise NotFoundError()

        record = await self.get(rid)
        if record is None:
            raise NotFoundError()
        logger.info("%s.update -> id=%s", self.resource_name, rid)
        return record

    async def delete(self, record_id: Any) -> bool:
        rid = coerce_id(record_id)
        logger.info("%s.delete id=%s", self.resource_name, rid)
        stmt = delete(self.model).where(self.model.id == rid).execution_options(synchronize_session=False)
        result = await self._execute("delete", stmt)
        await self._commit("delete")
        deleted = result.rowcount > 0
        logger.info("%s.delete id=%s -> %s", self.resource_name, rid, "deleted" if deleted else "no rows")
        return deleted

    async def increment(self, record_id: Any, field: str, by: int = 1) -> None:
        """숫자 컬럼을 DB 측에서 증가"""
        rid = coerce_id(record_id)
        column = self._column(field)
        stmt = (
            update(self.model)
            .where(self.model.id == rid)
            .values(**{field: column + by})
            .execution_options(synchronize_session=False)
        )
        await self._execute("increment", stmt)
        await self._commit("increment")

    async def delete_or_raise(self, record_id: Any) -> None:
        """삭제된 행이 없으면 NotFoundError (동시 삭제로 이미 사라진 경우 포함)"""
        if not await self.delete(record_id):
            raise NotFoundError()

    async def delete_where(self, **filters) -> int:
        """조건에 맞는 행 일괄 삭제 (조건 없는 전체 삭제는 금지)"""
        if not filters:
            raise ValidationError("삭제 조건이 필요합니다.")
        logger.info("%s.delete_where %s", self.resource_name, filters)
        stmt = delete(self.model).where(*self._criteria(filters)).execution_options(synchronize_session=False)
        result = await self._execute("delete_where", stmt)
        await self._commit("delete_where")
        return result.rowcount
