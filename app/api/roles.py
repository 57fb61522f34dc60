"""역할 라우터 — 역할 CRUD 엔드포인트.

Role Router — CRUD endpoints for role management.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.routing import RouteTable, register_routes
from app.database import get_db
from app.schemas.common import ApiResponse, DeleteRequest
from app.schemas.user import RoleCreate, RoleUpdate
from app.services.role_service import role_service


async def list_roles(
    db: Annotated[AsyncSession, Depends(get_db)],
    params: Annotated[dict[str, Any] | None, Body()] = None,
) -> ApiResponse:
    return ApiResponse.success(await role_service.list(db, params))


async def page_roles(
    db: Annotated[AsyncSession, Depends(get_db)],
    params: Annotated[dict[str, Any] | None, Body()] = None,
) -> ApiResponse:
    return ApiResponse.success(await role_service.page(db, params))


async def get_role_info(
    db: Annotated[AsyncSession, Depends(get_db)],
    params: Annotated[dict[str, Any] | None, Body()] = None,
) -> ApiResponse:
    return ApiResponse.success(await role_service.info(db, params))


async def add_role(
    data: RoleCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse:
    """역할 생성 — Create a role with its menu grants."""
    result = await role_service.add(db, data)
    await db.commit()
    return ApiResponse.success(result)


async def update_role(
    data: RoleUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse:
    """역할 수정 — Partially update a role."""
    result = await role_service.update(db, data)
    await db.commit()
    return ApiResponse.success(result)


async def delete_roles(
    data: DeleteRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse:
    """역할 삭제 — Delete roles and their grants."""
    await role_service.delete(db, data.ids)
    await db.commit()
    return ApiResponse.success()


ROUTES: RouteTable = [
    ("/list", list_roles, True),
    ("/page", page_roles, True),
    ("/info", get_role_info, True),
    ("/add", add_role, True),
    ("/update", update_role, True),
    ("/delete", delete_roles, True),
]

router: APIRouter = register_routes(APIRouter(prefix="/role", tags=["Role"]), ROUTES)
