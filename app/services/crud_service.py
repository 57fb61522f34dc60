"""제네릭 CRUD 서비스 — add/update/delete/info/list/page.

Generic CRUD service shared by the user, role and menu services.
Composed with an explicit repository (storage port) rather than inherited;
every operation receives the AsyncSession as an explicit argument.

Request bodies arrive as camelCase dicts. Filter keys are converted to
snake_case column names; `page` and `size` are consumed by `page`.
"""

from typing import Any, Awaitable, Callable, Generic, Sequence, TypeVar

from pydantic import BaseModel
from pydantic.alias_generators import to_snake
from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.base import BaseRepository, ModelType
from app.schemas.common import PageQuery
from app.utils.exceptions import CommonError
from app.utils.pagination import PageResult, Pagination

ResponseType = TypeVar("ResponseType", bound=BaseModel)

# 레코드 목록 → 응답 목록 변환기 — Batch converter from records to responses
Serializer = Callable[[AsyncSession, Sequence[Any]], Awaitable[list[Any]]]

# 페이지 파라미터 키 — Keys consumed by the page query
_PAGE_KEYS: frozenset[str] = frozenset({"page", "size"})


def to_filters(
    params: dict[str, Any] | None,
    hidden: frozenset[str] = frozenset(),
) -> dict[str, Any]:
    """요청 본문을 컬럼 필터로 변환합니다.

    Convert a camelCase request body into a snake_case column filter,
    dropping page/size, null values and the `hidden` (snake_case) columns.
    """
    if not params:
        return {}
    filters: dict[str, Any] = {}
    for key, value in params.items():
        column: str = to_snake(key)
        if key in _PAGE_KEYS or value is None or column in hidden:
            continue
        filters[column] = value
    return filters


class CrudService(Generic[ModelType, ResponseType]):
    """제네릭 CRUD 서비스.

    Generic CRUD operations over one repository.

    Attributes:
        repository: 저장소 포트 (Storage port for the model)
        response_schema: 응답 스키마 (Response schema built from ORM records)
        hidden_filters: 필터로 쓸 수 없는 컬럼 (Columns that never act as filters)
    """

    def __init__(
        self,
        repository: BaseRepository[ModelType],
        response_schema: type[ResponseType],
        serializer: Serializer | None = None,
        hidden_filters: frozenset[str] = frozenset(),
    ) -> None:
        self.repository: BaseRepository[ModelType] = repository
        self.response_schema: type[ResponseType] = response_schema
        self._serializer: Serializer | None = serializer
        self.hidden_filters: frozenset[str] = hidden_filters

    async def to_responses(
        self,
        db: AsyncSession,
        records: Sequence[ModelType],
    ) -> list[ResponseType]:
        """레코드 목록을 응답 스키마 목록으로 변환합니다.

        Convert records to response schemas, using the custom serializer
        when one is configured.
        """
        if self._serializer is not None:
            return await self._serializer(db, records)
        return [self.response_schema.model_validate(record) for record in records]

    async def to_response(self, db: AsyncSession, record: ModelType) -> ResponseType:
        """단일 레코드 변환 — Convert a single record."""
        return (await self.to_responses(db, [record]))[0]

    async def add(self, db: AsyncSession, data: dict[str, Any]) -> ResponseType:
        """레코드를 생성합니다.

        Insert a record and return it with its id and audit fields.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 컬럼 값 딕셔너리 (Column values, snake_case)

        Returns:
            ResponseType: 생성된 레코드 응답 (Created record)
        """
        record: ModelType = await self.repository.create(db, data)
        return await self.to_response(db, record)

    async def update(self, db: AsyncSession, data: dict[str, Any]) -> ResponseType:
        """ID 기준 부분 업데이트.

        Partial update keyed by `id`; only the supplied fields change.

        Raises:
            CommonError: id 누락 또는 레코드 없음 (Missing id or unknown record)
        """
        record_id: int | None = data.get("id")
        if record_id is None:
            raise CommonError("id不能为空")

        changes: dict[str, Any] = {key: value for key, value in data.items() if key != "id"}
        record: ModelType | None = await self.repository.update(db, record_id, changes)
        if record is None:
            raise CommonError("数据不存在")
        return await self.to_response(db, record)

    async def delete(self, db: AsyncSession, ids: list[int]) -> int:
        """하나 이상의 레코드 삭제 — Delete one or more records by id."""
        return await self.repository.delete(db, ids)

    async def info(
        self,
        db: AsyncSession,
        params: dict[str, Any] | None = None,
    ) -> ResponseType | None:
        """필터에 맞는 첫 레코드 또는 None — First match or None."""
        record: ModelType | None = await self.repository.get_one(db, to_filters(params, self.hidden_filters))
        if record is None:
            return None
        return await self.to_response(db, record)

    async def list(
        self,
        db: AsyncSession,
        params: dict[str, Any] | None = None,
    ) -> list[ResponseType]:
        """필터에 맞는 모든 레코드 — All matches."""
        records = await self.repository.get_all(db, to_filters(params, self.hidden_filters))
        return await self.to_responses(db, records)

    async def page(
        self,
        db: AsyncSession,
        params: dict[str, Any] | None = None,
    ) -> PageResult:
        """페이지 조회.

        Return one page of matches plus pagination metadata.
        `page` defaults to 1 and `size` to 20; `total` counts every match.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            params: 필터 및 page/size (Filters plus page/size)

        Returns:
            PageResult: {"list": [...], "pagination": {"page", "size", "total"}}
        """
        query: PageQuery = PageQuery.model_validate(
            {key: value for key, value in (params or {}).items() if key in _PAGE_KEYS and value is not None}
        )
        records, total = await self.repository.get_paginated(
            db, to_filters(params, self.hidden_filters), page=query.page, size=query.size
        )
        return PageResult(
            list=await self.to_responses(db, records),
            pagination=Pagination(page=query.page, size=query.size, total=total),
        )
