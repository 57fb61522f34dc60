"""역할 레포지토리 — 역할 CRUD 및 역할-메뉴 매핑 쿼리.

Role Repository — CRUD and role-menu mapping queries.
Extends BaseRepository with Role-specific database operations.
"""

from collections import defaultdict

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.role import Role, RoleMenu
from app.repositories.base import BaseRepository


class RoleRepository(BaseRepository[Role]):
    """역할 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the role and role_menu tables.
    """

    def __init__(self) -> None:
        """RoleRepository를 초기화합니다.

        Initialize the RoleRepository with the Role model.
        """
        super().__init__(Role)

    async def get_by_name(
        self,
        db: AsyncSession,
        name: str,
    ) -> Role | None:
        """이름으로 역할을 조회합니다 — Retrieve a role by name."""
        result = await db.execute(select(Role).where(Role.name == name))
        return result.scalar_one_or_none()

    async def get_menu_ids(
        self,
        db: AsyncSession,
        role_ids: list[int],
    ) -> dict[int, list[int]]:
        """역할별 부여된 메뉴 ID 목록을 조회합니다.

        Retrieve the granted menu ids for each given role.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            role_ids: 역할 ID 목록 (Role ids)

        Returns:
            dict[int, list[int]]: {역할 ID: 메뉴 ID 목록} ({role id: menu ids})
        """
        mapping: dict[int, list[int]] = defaultdict(list)
        if not role_ids:
            return mapping

        result = await db.execute(
            select(RoleMenu.role_id, RoleMenu.menu_id)
            .where(RoleMenu.role_id.in_(role_ids))
            .order_by(RoleMenu.menu_id)
        )
        for role_id, menu_id in result.all():
            mapping[role_id].append(menu_id)
        return mapping

    async def set_menus(
        self,
        db: AsyncSession,
        role_id: int,
        menu_ids: list[int],
    ) -> None:
        """역할의 메뉴 매핑을 교체합니다.

        Replace the menu grants of a role with the given menu ids.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            role_id: 역할 ID (Role id)
            menu_ids: 새 메뉴 ID 목록 (New menu ids)
        """
        await db.execute(delete(RoleMenu).where(RoleMenu.role_id == role_id))
        for menu_id in menu_ids:
            db.add(RoleMenu(role_id=role_id, menu_id=menu_id))
        await db.flush()

    async def delete_menus_by_roles(
        self,
        db: AsyncSession,
        role_ids: list[int],
    ) -> None:
        """역할들의 메뉴 매핑을 삭제합니다 — Remove role_menu rows of the given roles."""
        if not role_ids:
            return
        await db.execute(delete(RoleMenu).where(RoleMenu.role_id.in_(role_ids)))
        await db.flush()


# 싱글턴 인스턴스 — Singleton instance
role_repository: RoleRepository = RoleRepository()
