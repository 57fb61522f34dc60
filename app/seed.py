"""초기 데이터 시드 스크립트 — 메뉴 트리, 관리자 역할, 관리자 계정 생성.

Seed script — Creates the default menu tree, the admin role and an admin user.
Run this script once to bootstrap the database with required initial data.

Usage:
    python -m app.seed

Creates:
    - 기본 메뉴 트리: 시스템 관리 > 사용자/역할/메뉴 + 버튼 권한
      (Default menu tree: system > user/role/menu pages with button permissions)
    - 1개 역할: admin (모든 메뉴 부여, granted every menu)
    - 1개 관리자 계정: admin / admin123
"""

import asyncio

from sqlalchemy import select

from app.database import async_session, engine, Base
from app.models import Menu, Role, RoleMenu, User
from app.models.menu import MENU_TYPE_BUTTON, MENU_TYPE_DIRECTORY, MENU_TYPE_MENU
from app.utils.password import hash_password

# (이름, 라우터, 뷰 경로, 아이콘, 권한 접두사) — (name, router, view path, icon, perms prefix)
_PAGES: list[tuple[str, str, str, str, str]] = [
    ("用户管理", "/system/user", "system/user/index", "user", "user"),
    ("角色管理", "/system/role", "system/role/index", "peoples", "role"),
    ("菜单管理", "/system/menu", "system/menu/index", "tree-table", "menu"),
]

# 페이지별 버튼 권한 — Button permissions created under each page
_ACTIONS: list[tuple[str, str]] = [
    ("新增", "add"),
    ("修改", "update"),
    ("删除", "delete"),
    ("查询", "page,list,info"),
]


async def seed() -> None:
    """데이터베이스를 초기 데이터로 시드합니다.

    Seed the database with initial data.
    Creates tables if they don't exist, then inserts the menu tree,
    the admin role and the admin user.

    Idempotent: 이미 시드된 경우 건너뜁니다 (Skips if already seeded).
    """
    # 테이블 생성 — DDL 실행 (Create all tables from ORM metadata)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        # 이미 시드되었는지 확인 — admin 계정이 있으면 건너뜀
        # (Check if already seeded by looking for the admin user)
        result = await db.execute(select(User).where(User.username == "admin"))
        if result.scalar_one_or_none():
            print("Already seeded. Skipping.")
            return

        # 메뉴 트리 생성 — Create the menu tree
        root: Menu = Menu(
            name="系统管理", router="/system", icon="system", type=MENU_TYPE_DIRECTORY, order_num=1
        )
        db.add(root)
        await db.flush()  # flush로 root.id 생성 (Flush to generate root.id)

        menus: list[Menu] = [root]
        for order, (name, router, view_path, icon, prefix) in enumerate(_PAGES, start=1):
            page: Menu = Menu(
                parent_id=root.id,
                name=name,
                router=router,
                view_path=view_path,
                icon=icon,
                type=MENU_TYPE_MENU,
                order_num=order,
            )
            db.add(page)
            await db.flush()
            menus.append(page)

            for button_order, (label, actions) in enumerate(_ACTIONS, start=1):
                perms: str = ",".join(f"{prefix}:{action}" for action in actions.split(","))
                button: Menu = Menu(
                    parent_id=page.id,
                    name=label,
                    perms=perms,
                    type=MENU_TYPE_BUTTON,
                    order_num=button_order,
                    is_show=False,
                )
                db.add(button)
                menus.append(button)
        await db.flush()

        # 관리자 역할 — Admin role granted every menu
        role: Role = Role(name="admin", remark="超级管理员")
        db.add(role)
        await db.flush()
        for menu in menus:
            db.add(RoleMenu(role_id=role.id, menu_id=menu.id))

        # 관리자 계정 생성 — Admin account
        # 비밀번호: admin123 (운영 환경에서 반드시 변경) (MUST change in production)
        admin: User = User(
            username="admin",
            password=hash_password("admin123"),
            realname="管理员",
            nickname="admin",
            role_id=str(role.id),
        )
        db.add(admin)

        await db.commit()
        print(f"Seed complete: {len(menus)} menus, role 'admin', user 'admin' (password: admin123)")


if __name__ == "__main__":
    asyncio.run(seed())
