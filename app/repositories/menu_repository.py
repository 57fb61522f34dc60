"""메뉴 레포지토리 — 메뉴 트리 및 권한 조회 쿼리.

Menu Repository — Menu tree and permission queries.
Menus are ordered by order_num, then id.
"""

from typing import Any, Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.menu import Menu
from app.models.role import RoleMenu
from app.repositories.base import BaseRepository


class MenuRepository(BaseRepository[Menu]):
    """메뉴 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the menu table.
    """

    def __init__(self) -> None:
        """MenuRepository를 초기화합니다.

        Initialize the MenuRepository with the Menu model.
        """
        super().__init__(Menu)

    def default_order(self) -> list[Any]:
        """정렬 순서, ID 순 — Order by order_num, then id."""
        return [Menu.order_num, Menu.id]

    async def has_children(
        self,
        db: AsyncSession,
        menu_ids: list[int],
    ) -> bool:
        """삭제 대상 외의 하위 메뉴가 있는지 확인합니다.

        Check whether any of the given menus has a child that is not
        itself part of the same deletion.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            menu_ids: 메뉴 ID 목록 (Menu ids)

        Returns:
            bool: 하위 메뉴 존재 여부 (Whether a remaining child exists)
        """
        if not menu_ids:
            return False
        query = (
            select(func.count())
            .select_from(Menu)
            .where(Menu.parent_id.in_(menu_ids), Menu.id.not_in(menu_ids))
        )
        count: int = (await db.execute(query)).scalar() or 0
        return count > 0

    async def get_parent_map(self, db: AsyncSession) -> dict[int, int | None]:
        """전체 메뉴의 {ID: 상위 ID} 맵 — Map of every menu id to its parent id."""
        result = await db.execute(select(Menu.id, Menu.parent_id))
        return {menu_id: parent_id for menu_id, parent_id in result.all()}

    async def get_by_roles(
        self,
        db: AsyncSession,
        role_ids: list[int],
    ) -> Sequence[Menu]:
        """역할들에게 부여된 메뉴 목록을 조회합니다.

        Retrieve the distinct menus granted to any of the given roles.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            role_ids: 역할 ID 목록 (Role ids)

        Returns:
            Sequence[Menu]: 정렬된 메뉴 목록 (Ordered menus)
        """
        if not role_ids:
            return []
        granted = select(RoleMenu.menu_id).where(RoleMenu.role_id.in_(role_ids))
        result = await db.execute(
            select(Menu).where(Menu.id.in_(granted)).order_by(*self.default_order())
        )
        return result.scalars().all()

    async def delete_role_links(
        self,
        db: AsyncSession,
        menu_ids: list[int],
    ) -> None:
        """메뉴들의 역할 매핑을 삭제합니다 — Remove role_menu rows of the given menus."""
        if not menu_ids:
            return
        await db.execute(delete(RoleMenu).where(RoleMenu.menu_id.in_(menu_ids)))
        await db.flush()


# 싱글턴 인스턴스 — Singleton instance
menu_repository: MenuRepository = MenuRepository()
