"""사용자 라우터 — 사용자 CRUD, 로그인, 캡차, 내 정보.

User Router — User CRUD, login, captcha and current user endpoints.
Registration (/user/add), login and captcha issuance are public.
Anonymous registration ignores `roleId`.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_captcha_service, get_current_user, get_optional_user
from app.api.routing import RouteTable, register_routes
from app.database import get_db
from app.models.user import User
from app.schemas.auth import CaptchaRequest, LoginRequest
from app.schemas.common import ApiResponse, DeleteRequest
from app.schemas.user import UserCreate, UserUpdate
from app.services.captcha_service import CaptchaService
from app.services.user_service import user_service


async def list_users(
    db: Annotated[AsyncSession, Depends(get_db)],
    params: Annotated[dict[str, Any] | None, Body()] = None,
) -> ApiResponse:
    """사용자 목록 — List users matching the filter."""
    return ApiResponse.success(await user_service.list(db, params))


async def page_users(
    db: Annotated[AsyncSession, Depends(get_db)],
    params: Annotated[dict[str, Any] | None, Body()] = None,
) -> ApiResponse:
    """사용자 페이지 — One page of users."""
    return ApiResponse.success(await user_service.page(db, params))


async def get_user_info(
    db: Annotated[AsyncSession, Depends(get_db)],
    params: Annotated[dict[str, Any] | None, Body()] = None,
) -> ApiResponse:
    """사용자 단건 — First user matching the filter, or null."""
    return ApiResponse.success(await user_service.info(db, params))


async def add_user(
    data: UserCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User | None, Depends(get_optional_user)],
) -> ApiResponse:
    """사용자 등록 — Register a user.

    Anonymous registration never assigns roles; only an authenticated
    caller may set `roleId`.
    """
    result = await user_service.add(db, data, assign_roles=current_user is not None)
    await db.commit()
    return ApiResponse.success(result)


async def update_user(
    data: UserUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse:
    """사용자 수정 — Partially update a user."""
    result = await user_service.update(db, data)
    await db.commit()
    return ApiResponse.success(result)


async def delete_users(
    data: DeleteRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse:
    """사용자 삭제 — Delete one or more users."""
    await user_service.delete(db, data.ids)
    await db.commit()
    return ApiResponse.success()


async def login(
    data: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    captcha: Annotated[CaptchaService, Depends(get_captcha_service)],
) -> ApiResponse:
    """로그인 — Verify captcha and credentials, issue an access token."""
    return ApiResponse.success(await user_service.login(db, captcha, data))


async def get_captcha_image(
    captcha: Annotated[CaptchaService, Depends(get_captcha_service)],
    data: Annotated[CaptchaRequest | None, Body()] = None,
) -> ApiResponse:
    """캡차 이미지 발급 — Issue an SVG captcha image."""
    captcha_id: str | None = data.captcha_id if data else None
    return ApiResponse.success(await user_service.get_image_captcha(captcha, captcha_id))


async def get_me(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ApiResponse:
    """내 정보 — Current user with roles, permissions and menus."""
    return ApiResponse.success(await user_service.me(db, current_user))


ROUTES: RouteTable = [
    ("/list", list_users, True),
    ("/page", page_users, True),
    ("/info", get_user_info, True),
    ("/add", add_user, False),
    ("/update", update_user, True),
    ("/delete", delete_users, True),
    ("/login", login, False),
    ("/getCaptchaImage", get_captcha_image, False),
    ("/me", get_me, True),
]

router: APIRouter = register_routes(APIRouter(prefix="/user", tags=["User"]), ROUTES)
