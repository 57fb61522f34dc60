"""메뉴 라우터 — 메뉴 CRUD 및 트리 엔드포인트.

Menu Router — CRUD and tree endpoints for menu (permission node) management.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.routing import RouteTable, register_routes
from app.database import get_db
from app.schemas.common import ApiResponse, DeleteRequest
from app.schemas.menu import MenuCreate, MenuUpdate
from app.services.menu_service import menu_service


async def list_menus(
    db: Annotated[AsyncSession, Depends(get_db)],
    params: Annotated[dict[str, Any] | None, Body()] = None,
) -> ApiResponse:
    return ApiResponse.success(await menu_service.list(db, params))


async def page_menus(
    db: Annotated[AsyncSession, Depends(get_db)],
    params: Annotated[dict[str, Any] | None, Body()] = None,
) -> ApiResponse:
    return ApiResponse.success(await menu_service.page(db, params))


async def get_menu_info(
    db: Annotated[AsyncSession, Depends(get_db)],
    params: Annotated[dict[str, Any] | None, Body()] = None,
) -> ApiResponse:
    return ApiResponse.success(await menu_service.info(db, params))


async def add_menu(
    data: MenuCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse:
    """메뉴 생성 — Create a menu."""
    result = await menu_service.add(db, data)
    await db.commit()
    return ApiResponse.success(result)


async def update_menu(
    data: MenuUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse:
    """메뉴 수정 — Partially update a menu."""
    result = await menu_service.update(db, data)
    await db.commit()
    return ApiResponse.success(result)


async def delete_menus(
    data: DeleteRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse:
    """메뉴 삭제 — Delete childless menus."""
    await menu_service.delete(db, data.ids)
    await db.commit()
    return ApiResponse.success()


async def get_menu_tree(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse:
    """메뉴 트리 — All menus nested by parent."""
    return ApiResponse.success(await menu_service.tree(db))


ROUTES: RouteTable = [
    ("/list", list_menus, True),
    ("/page", page_menus, True),
    ("/info", get_menu_info, True),
    ("/add", add_menu, True),
    ("/update", update_menu, True),
    ("/delete", delete_menus, True),
    ("/tree", get_menu_tree, True),
]

router: APIRouter = register_routes(APIRouter(prefix="/menu", tags=["Menu"]), ROUTES)
