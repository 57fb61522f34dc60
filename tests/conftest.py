"""테스트 인프라 — 임시 SQLite DB, fakeredis, httpx 클라이언트 픽스처.

Test infrastructure — Temporary SQLite DB, fake Redis and httpx client fixtures.
Each test gets a fresh SQLite file (aiosqlite) with the schema created from
ORM metadata, and an in-memory fakeredis client in place of Redis.
"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from fakeredis import FakeAsyncRedis
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.cache import get_cache
from app.config import settings
from app.database import Base, get_db
from app.main import app
from app.models import *  # noqa: F401,F403 — register all models with metadata
from app.models.menu import MENU_TYPE_BUTTON, MENU_TYPE_DIRECTORY, MENU_TYPE_MENU
from app.utils.jwt import create_access_token
from app.utils.password import hash_password


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 캐시, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진 — 테스트마다 새 SQLite 파일."""
    eng = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def cache() -> AsyncGenerator[FakeAsyncRedis, None]:
    """메모리 Redis 대체 — In-memory Redis replacement."""
    client = FakeAsyncRedis(decode_responses=True)
    yield client
    await client.flushall()
    await client.aclose()


@pytest.fixture
def captcha_disabled(monkeypatch: pytest.MonkeyPatch) -> None:
    """로그인 캡차 검증 끄기 — Disable captcha verification on login."""
    monkeypatch.setattr(settings, "CAPTCHA_ENABLED", False)


@pytest_asyncio.fixture
async def client(db: AsyncSession, cache: FakeAsyncRedis) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션과 캐시를 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    async def _override_get_cache() -> FakeAsyncRedis:
        return cache

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_cache] = _override_get_cache

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def menus(db: AsyncSession) -> dict:
    """시스템 > 사용자 관리 > 추가 버튼 메뉴 트리를 생성합니다."""
    from app.models.menu import Menu
    system = Menu(name="系统管理", router="/system", type=MENU_TYPE_DIRECTORY, order_num=1)
    db.add(system)
    await db.flush()
    user_page = Menu(
        parent_id=system.id, name="用户管理", router="/system/user",
        view_path="system/user/index", type=MENU_TYPE_MENU, order_num=1,
    )
    db.add(user_page)
    await db.flush()
    add_button = Menu(
        parent_id=user_page.id, name="新增", perms="user:add,user:update",
        type=MENU_TYPE_BUTTON, order_num=1, is_show=False,
    )
    db.add(add_button)
    await db.commit()
    return {"system": system, "user_page": user_page, "add_button": add_button}


@pytest_asyncio.fixture
async def admin_role(db: AsyncSession, menus):
    """모든 메뉴가 부여된 admin 역할을 생성합니다."""
    from app.models.role import Role, RoleMenu
    role = Role(name="admin", remark="超级管理员")
    db.add(role)
    await db.flush()
    for menu in menus.values():
        db.add(RoleMenu(role_id=role.id, menu_id=menu.id))
    await db.commit()
    return role


@pytest_asyncio.fixture
async def admin_user(db: AsyncSession, admin_role):
    """관리자 사용자를 생성합니다 (admin / admin123)."""
    from app.models.user import User
    user = User(
        username="admin",
        password=hash_password("admin123"),
        realname="管理员",
        nickname="admin",
        role_id=str(admin_role.id),
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


def make_token(user) -> str:
    """테스트용 JWT 액세스 토큰을 생성합니다."""
    return create_access_token({"sub": str(user.id), "username": user.username})


@pytest.fixture
def admin_token(admin_user) -> str:
    return make_token(admin_user)


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
