"""API 라우터 패키지 — 모든 엔드포인트 통합.

API Router package — Aggregates the user, role and menu route tables
into a single router for inclusion in the FastAPI application.

Included routers:
    - users: 사용자, 로그인, 캡차 (Users, login and captcha) — /user
    - roles: 역할 관리 (Role management) — /role
    - menus: 메뉴/권한 관리 (Menu and permission management) — /menu
"""

from fastapi import APIRouter

from app.api.menus import router as menus_router
from app.api.roles import router as roles_router
from app.api.users import router as users_router

api_router: APIRouter = APIRouter()

api_router.include_router(users_router)
api_router.include_router(roles_router)
api_router.include_router(menus_router)
