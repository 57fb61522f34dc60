"""기본 CRUD 레포지토리 — 모든 레포지토리의 부모 클래스.

Base CRUD Repository — Parent class for all domain repositories.
This is the storage port the generic CRUD service talks to:
create / update / delete / get_one / get_all / get_paginated / exists / count.
The session is always passed explicitly by the caller.

Usage:
    class MenuRepository(BaseRepository[Menu]):
        def __init__(self) -> None:
            super().__init__(Menu)
"""

from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import Select, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Base
from app.utils.pagination import paginate

# 제네릭 타입 변수 — SQLAlchemy 모델을 나타냄
# Generic type variable representing a SQLAlchemy model
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """제네릭 CRUD 레포지토리.

    Generic CRUD repository providing common database operations.
    Filters are equality matches on model columns; unknown columns and
    None values are ignored.

    Attributes:
        model: SQLAlchemy 모델 클래스 (The SQLAlchemy model class)
    """

    def __init__(self, model: type[ModelType]) -> None:
        """레포지토리를 초기화합니다.

        Initialize the repository with a model class.

        Args:
            model: 이 레포지토리가 관리할 SQLAlchemy 모델 클래스
                   (SQLAlchemy model class this repository manages)
        """
        self.model: type[ModelType] = model

    def default_order(self) -> list[Any]:
        """기본 정렬 기준 — Default ordering (by id)."""
        return [self.model.id]

    def build_query(self, filters: dict[str, Any] | None = None) -> Select:
        """필터가 적용된 SELECT 쿼리를 생성합니다.

        Build a SELECT query with equality filters and the default ordering.

        Args:
            filters: 필터 딕셔너리 {'컬럼명': 값} (Filter dict {'column_name': value})

        Returns:
            Select: 필터와 정렬이 적용된 쿼리 (Filtered, ordered query)
        """
        query: Select = select(self.model)

        # 동적 필터 적용 — Dynamic filter application
        columns = self.model.__table__.columns
        if filters:
            for column_name, value in filters.items():
                if column_name in columns and value is not None:
                    query = query.where(getattr(self.model, column_name) == value)

        return query.order_by(*self.default_order())

    async def get_by_id(
        self,
        db: AsyncSession,
        record_id: int,
    ) -> ModelType | None:
        """ID로 단일 레코드를 조회합니다.

        Retrieve a single record by its id.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            record_id: 조회할 레코드 ID (Id of the record to retrieve)

        Returns:
            ModelType | None: 조회된 레코드 또는 None (Found record or None)
        """
        return await db.get(self.model, record_id)

    async def get_one(
        self,
        db: AsyncSession,
        filters: dict[str, Any] | None = None,
    ) -> ModelType | None:
        """조건에 맞는 첫 번째 레코드를 조회합니다.

        Retrieve the first record matching the given filters.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            filters: 필터 딕셔너리 (Filter dict)

        Returns:
            ModelType | None: 첫 번째 레코드 또는 None (First match or None)
        """
        result = await db.execute(self.build_query(filters).limit(1))
        return result.scalars().first()

    async def get_all(
        self,
        db: AsyncSession,
        filters: dict[str, Any] | None = None,
    ) -> Sequence[ModelType]:
        """조건에 맞는 모든 레코드를 조회합니다.

        Retrieve all records matching the given filters.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            filters: 필터 딕셔너리 (Filter dict)

        Returns:
            Sequence[ModelType]: 조회된 레코드 목록 (List of matching records)
        """
        result = await db.execute(self.build_query(filters))
        return result.scalars().all()

    async def get_by_ids(
        self,
        db: AsyncSession,
        record_ids: list[int],
    ) -> Sequence[ModelType]:
        """ID 목록으로 레코드를 조회합니다 — Retrieve records by a list of ids."""
        if not record_ids:
            return []
        result = await db.execute(
            select(self.model).where(self.model.id.in_(record_ids)).order_by(*self.default_order())
        )
        return result.scalars().all()

    async def get_paginated(
        self,
        db: AsyncSession,
        filters: dict[str, Any] | None = None,
        page: int = 1,
        size: int = 20,
    ) -> tuple[Sequence[ModelType], int]:
        """페이지네이션이 적용된 레코드 목록을 조회합니다.

        Retrieve a paginated list of records.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            filters: 필터 딕셔너리 (Filter dict)
            page: 현재 페이지 번호, 1부터 시작 (Current page number, 1-based)
            size: 페이지당 레코드 수 (Number of records per page)

        Returns:
            tuple[Sequence[ModelType], int]: (레코드 목록, 전체 개수)
                                             (List of records, total count)
        """
        return await paginate(db, self.build_query(filters), page=page, size=size)

    async def create(
        self,
        db: AsyncSession,
        obj_data: dict[str, Any],
    ) -> ModelType:
        """새 레코드를 생성합니다.

        Create a new record in the database.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            obj_data: 생성할 레코드의 데이터 딕셔너리
                      (Dictionary of data for the new record)

        Returns:
            ModelType: 생성된 레코드 (The created record)
        """
        db_obj: ModelType = self.model(**obj_data)
        db.add(db_obj)
        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def update(
        self,
        db: AsyncSession,
        record_id: int,
        update_data: dict[str, Any],
    ) -> ModelType | None:
        """기존 레코드를 업데이트합니다.

        Update an existing record by its id.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            record_id: 업데이트할 레코드 ID (Id of the record to update)
            update_data: 업데이트할 필드와 값의 딕셔너리
                         (Dictionary of fields and values to update)

        Returns:
            ModelType | None: 업데이트된 레코드 또는 None (Updated record or None)
        """
        # 먼저 레코드 존재 여부 확인 — First verify record exists
        db_obj: ModelType | None = await self.get_by_id(db, record_id)
        if db_obj is None:
            return None

        # Pydantic exclude_unset으로 전달된 필드만 업데이트 (None 값도 허용)
        # Update all fields passed via exclude_unset (allows setting to None)
        for field, value in update_data.items():
            if field != "id" and hasattr(db_obj, field):
                setattr(db_obj, field, value)

        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def delete(
        self,
        db: AsyncSession,
        record_ids: list[int],
    ) -> int:
        """레코드를 삭제합니다.

        Delete one or more records by id.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            record_ids: 삭제할 레코드 ID 목록 (Ids of the records to delete)

        Returns:
            int: 삭제된 레코드 수 (Number of deleted records)
        """
        if not record_ids:
            return 0
        result = await db.execute(delete(self.model).where(self.model.id.in_(record_ids)))
        await db.flush()
        return result.rowcount or 0

    async def exists(
        self,
        db: AsyncSession,
        filters: dict[str, Any],
        exclude_id: int | None = None,
    ) -> bool:
        """주어진 조건에 일치하는 레코드가 존재하는지 확인합니다.

        Check if a record matching the given filters exists.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            filters: 검색 조건 딕셔너리 (Filter criteria dictionary)
            exclude_id: 제외할 레코드 ID (Record id to ignore, e.g. the one being updated)

        Returns:
            bool: 레코드 존재 여부 (Whether a matching record exists)
        """
        query: Select = select(func.count()).select_from(self.model)
        for column_name, value in filters.items():
            if hasattr(self.model, column_name):
                query = query.where(getattr(self.model, column_name) == value)
        if exclude_id is not None:
            query = query.where(self.model.id != exclude_id)

        count: int = (await db.execute(query)).scalar() or 0
        return count > 0

    async def count(
        self,
        db: AsyncSession,
        filters: dict[str, Any] | None = None,
    ) -> int:
        """조건에 맞는 레코드 수 — Count records matching the filters."""
        query = self.build_query(filters).order_by(None)
        return (await db.execute(select(func.count()).select_from(query.subquery()))).scalar() or 0
