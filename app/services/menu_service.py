"""메뉴 서비스 — 메뉴 CRUD 및 트리 구성.

Menu Service — Menu CRUD and tree building.
Keeps the parent/child structure a valid tree: parents must exist,
a menu may not become its own ancestor, and menus with children
cannot be deleted.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.menu import MENU_TYPES, Menu
from app.repositories.menu_repository import menu_repository
from app.schemas.menu import MenuCreate, MenuResponse, MenuTreeNode, MenuUpdate
from app.services.crud_service import CrudService
from app.utils.exceptions import CommonError
from app.utils.pagination import PageResult

# null로 설정 가능한 컬럼 — Columns an update may clear
_NULLABLE_FIELDS: frozenset[str] = frozenset({"parent_id", "router", "perms", "icon", "view_path"})


class MenuService:
    """메뉴 관련 비즈니스 로직을 처리하는 서비스.

    Service handling menu business logic.
    """

    def __init__(self) -> None:
        self.crud: CrudService[Menu, MenuResponse] = CrudService(menu_repository, MenuResponse)

    def _check_type(self, menu_type: int | None) -> None:
        if menu_type is not None and menu_type not in MENU_TYPES:
            raise CommonError("菜单类型错误")

    async def add(self, db: AsyncSession, data: MenuCreate) -> MenuResponse:
        """메뉴를 생성합니다.

        Create a menu under an existing parent (or as a root).

        Raises:
            CommonError: 유형 오류 또는 상위 메뉴 없음 (Bad type or unknown parent)
        """
        self._check_type(data.type)
        if data.parent_id is not None and await menu_repository.get_by_id(db, data.parent_id) is None:
            raise CommonError("上级菜单不存在")
        return await self.crud.add(db, data.model_dump())

    async def update(self, db: AsyncSession, data: MenuUpdate) -> MenuResponse:
        """메뉴를 부분 수정합니다.

        Partially update a menu. Moving it under itself or one of its
        descendants is refused.

        Raises:
            CommonError: 유형 오류, 상위 메뉴 없음, 순환 참조, 메뉴 없음
        """
        values: dict[str, Any] = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key in _NULLABLE_FIELDS
        }
        self._check_type(values.get("type"))

        parent_id: int | None = values.get("parent_id")
        if parent_id is not None:
            parents: dict[int, int | None] = await menu_repository.get_parent_map(db)
            if parent_id not in parents:
                raise CommonError("上级菜单不存在")
            # 새 상위 메뉴부터 루트까지 거슬러 올라가며 자기 자신을 찾음
            # Walk from the new parent up to the root looking for this menu
            node: int | None = parent_id
            seen: set[int] = set()
            while node is not None and node not in seen:
                if node == data.id:
                    raise CommonError("上级菜单不能为自身或子菜单")
                seen.add(node)
                node = parents.get(node)

        return await self.crud.update(db, values)

    async def delete(self, db: AsyncSession, ids: list[int]) -> int:
        """메뉴 삭제 — 하위 메뉴가 남아 있으면 거부.

        Delete menus and their role grants; refused while children remain.
        """
        if await menu_repository.has_children(db, ids):
            raise CommonError("请先删除子菜单")
        await menu_repository.delete_role_links(db, ids)
        return await self.crud.delete(db, ids)

    async def tree(self, db: AsyncSession) -> list[MenuTreeNode]:
        """메뉴 트리를 구성합니다.

        Nest all menus by parent id, siblings ordered by order_num then id.
        Menus whose parent is missing are returned as roots.

        Returns:
            list[MenuTreeNode]: 루트 노드 목록 (Root nodes)
        """
        menus = await menu_repository.get_all(db)
        nodes: dict[int, MenuTreeNode] = {
            menu.id: MenuTreeNode.model_validate(menu) for menu in menus
        }
        roots: list[MenuTreeNode] = []
        for menu in menus:
            node = nodes[menu.id]
            parent = nodes.get(menu.parent_id) if menu.parent_id is not None else None
            if parent is None:
                roots.append(node)
            else:
                parent.children.append(node)
        return roots

    async def info(self, db: AsyncSession, params: dict[str, Any] | None) -> MenuResponse | None:
        return await self.crud.info(db, params)

    async def list(self, db: AsyncSession, params: dict[str, Any] | None) -> list[MenuResponse]:
        return await self.crud.list(db, params)

    async def page(self, db: AsyncSession, params: dict[str, Any] | None) -> PageResult:
        return await self.crud.page(db, params)


# 싱글턴 인스턴스 — Singleton instance
menu_service: MenuService = MenuService()
