"""명시적 라우트 테이블 등록 도우미.

Explicit route table registration helper.
Each resource module declares a table of (path, handler, protected) rows;
every route is a POST answering with the response envelope.
"""

from typing import Any, Callable

from fastapi import APIRouter, Depends

from app.api.deps import get_current_user
from app.schemas.common import ApiResponse

# (경로, 핸들러, 인증 필요 여부) — (path, handler, requires a token)
RouteTable = list[tuple[str, Callable[..., Any], bool]]


def register_routes(router: APIRouter, routes: RouteTable) -> APIRouter:
    """라우트 테이블을 라우터에 등록합니다.

    Register every row of a route table as a POST endpoint.

    Args:
        router: 대상 라우터 (Router receiving the routes)
        routes: 라우트 테이블 (Route table)

    Returns:
        APIRouter: 등록이 끝난 라우터 (The same router)
    """
    for path, endpoint, protected in routes:
        router.add_api_route(
            path,
            endpoint,
            methods=["POST"],
            response_model=ApiResponse,
            dependencies=[Depends(get_current_user)] if protected else None,
        )
    return router
