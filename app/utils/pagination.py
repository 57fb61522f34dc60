"""페이지네이션 유틸리티 모듈.

Pagination utility module for SQLAlchemy async queries.
Provides a generic paginate function and the page response models
for consistent pagination across all page endpoints.
"""

from typing import Any, Sequence

from pydantic import BaseModel
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession


class Pagination(BaseModel):
    """페이지네이션 메타데이터.

    Attributes:
        page: 현재 페이지 번호 (Current page, 1-indexed)
        size: 페이지당 항목 수 (Items per page)
        total: 전체 항목 수 (Total count of matching records)
    """

    page: int
    size: int
    total: int


class PageResult(BaseModel):
    """페이지네이션 결과 모델 — {"list": [...], "pagination": {...}}."""

    list: list[Any]  # 현재 페이지 항목 목록 (Paginated items)
    pagination: Pagination


async def paginate(
    db: AsyncSession,
    query: Select[Any],
    page: int = 1,
    size: int = 20,
) -> tuple[Sequence[Any], int]:
    """SQLAlchemy 쿼리에 대한 페이지네이션을 수행합니다.

    Execute a paginated SQLAlchemy query, returning items and total count.
    Runs two queries: one for the total count (via subquery) and one for
    the actual page of results with OFFSET/LIMIT.

    Args:
        db: 비동기 DB 세션 (Async database session)
        query: SQLAlchemy Select 쿼리 (Base query to paginate)
        page: 요청 페이지 번호, 1부터 시작 (Page number, 1-indexed, default: 1)
        size: 페이지당 항목 수 (Items per page, default: 20)

    Returns:
        tuple[Sequence[Any], int]: (항목 목록, 전체 개수) 튜플
            (Tuple of paginated items and total count)
    """
    # 전체 개수 조회 — 서브쿼리로 감싸서 COUNT 실행 (Count total via subquery)
    count_query = select(func.count()).select_from(query.order_by(None).subquery())
    total: int = (await db.execute(count_query)).scalar() or 0

    # 페이지 항목 조회 — OFFSET/LIMIT 적용 (Fetch page items with offset/limit)
    offset: int = (page - 1) * size
    result = await db.execute(query.offset(offset).limit(size))
    items: Sequence[Any] = result.scalars().all()

    return items, total
