"""역할 서비스 — 역할 CRUD 및 메뉴(권한) 부여.

Role Service — Role CRUD with menu (permission) grants.
Role names are unique; granted menus live in the role_menu table and are
exposed as `menuIds`.
"""

from typing import Any, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.role import Role
from app.repositories.menu_repository import menu_repository
from app.repositories.role_repository import role_repository
from app.repositories.user_repository import user_repository
from app.schemas.user import RoleCreate, RoleResponse, RoleUpdate
from app.services.crud_service import CrudService
from app.utils.exceptions import CommonError
from app.utils.pagination import PageResult


class RoleService:
    """역할 관련 비즈니스 로직을 처리하는 서비스.

    Service handling role business logic.
    Provides CRUD operations with name uniqueness and menu validation.
    """

    def __init__(self) -> None:
        self.crud: CrudService[Role, RoleResponse] = CrudService(
            role_repository, RoleResponse, serializer=self._to_responses
        )

    async def _to_responses(self, db: AsyncSession, roles: Sequence[Role]) -> list[RoleResponse]:
        """역할 목록을 menuIds가 포함된 응답으로 변환합니다.

        Convert roles to responses carrying their granted menu ids.
        """
        menu_map: dict[int, list[int]] = await role_repository.get_menu_ids(db, [r.id for r in roles])
        return [
            RoleResponse(
                id=role.id,
                create_time=role.create_time,
                update_time=role.update_time,
                name=role.name,
                remark=role.remark,
                menu_ids=menu_map.get(role.id, []),
            )
            for role in roles
        ]

    async def _validate_menu_ids(self, db: AsyncSession, menu_ids: list[int]) -> list[int]:
        """메뉴 ID 중복 제거 및 존재 확인.

        De-duplicate menu ids and check each references an existing menu.

        Raises:
            CommonError: 존재하지 않는 메뉴 (A menu id does not exist)
        """
        unique_ids: list[int] = list(dict.fromkeys(menu_ids))
        menus = await menu_repository.get_by_ids(db, unique_ids)
        if len(menus) != len(unique_ids):
            raise CommonError("菜单不存在")
        return unique_ids

    async def add(self, db: AsyncSession, data: RoleCreate) -> RoleResponse:
        """새 역할을 생성합니다.

        Create a role and grant it the given menus.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 역할 생성 데이터 (Role creation data)

        Returns:
            RoleResponse: 생성된 역할 응답 (Created role response)

        Raises:
            CommonError: 같은 이름의 역할 존재 또는 메뉴 없음
                         (Duplicate role name or unknown menu)
        """
        if await role_repository.get_by_name(db, data.name) is not None:
            raise CommonError("角色已存在")
        menu_ids: list[int] = await self._validate_menu_ids(db, data.menu_ids)

        role: Role = await role_repository.create(db, {"name": data.name, "remark": data.remark})
        await role_repository.set_menus(db, role.id, menu_ids)
        return await self.crud.to_response(db, role)

    async def update(self, db: AsyncSession, data: RoleUpdate) -> RoleResponse:
        """역할 정보를 수정합니다.

        Partially update a role; a supplied `menuIds` replaces the grants.

        Raises:
            CommonError: 이름 중복, 메뉴 없음, 역할 없음
                         (Duplicate name, unknown menu or unknown role)
        """
        values: dict[str, Any] = data.model_dump(exclude_unset=True)
        menu_ids: list[int] | None = values.pop("menu_ids", None)
        if values.get("name") is None:
            values.pop("name", None)

        if "name" in values and await role_repository.exists(db, {"name": values["name"]}, exclude_id=data.id):
            raise CommonError("角色已存在")
        if menu_ids is not None:
            menu_ids = await self._validate_menu_ids(db, menu_ids)

        await self.crud.update(db, values)
        if menu_ids is not None:
            await role_repository.set_menus(db, data.id, menu_ids)

        role: Role | None = await role_repository.get_by_id(db, data.id)
        return await self.crud.to_response(db, role)

    async def delete(self, db: AsyncSession, ids: list[int]) -> int:
        """역할 삭제 — Delete roles with their grants and detach them from users."""
        await role_repository.delete_menus_by_roles(db, ids)
        await user_repository.remove_role_ids(db, ids)
        return await self.crud.delete(db, ids)

    async def info(self, db: AsyncSession, params: dict[str, Any] | None) -> RoleResponse | None:
        return await self.crud.info(db, params)

    async def list(self, db: AsyncSession, params: dict[str, Any] | None) -> list[RoleResponse]:
        return await self.crud.list(db, params)

    async def page(self, db: AsyncSession, params: dict[str, Any] | None) -> PageResult:
        return await self.crud.page(db, params)


# 싱글턴 인스턴스 — Singleton instance
role_service: RoleService = RoleService()
