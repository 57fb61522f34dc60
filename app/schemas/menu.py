"""메뉴(권한 노드) Pydantic 요청/응답 스키마 정의.

Menu (permission node) request/response schema definitions.
"""

from pydantic import Field

from app.schemas.common import CamelModel, EntityResponse


class MenuCreate(CamelModel):
    """메뉴 생성 요청 스키마.

    Attributes:
        parent_id: 상위 메뉴 ID (Parent menu id, None for a root node)
        name: 메뉴 이름 (Menu name)
        router: 라우터 경로 (Frontend router path)
        perms: 권한 식별자 (Permission string)
        type: 0=디렉터리 1=메뉴 2=버튼 (0=directory, 1=menu, 2=button)
        icon: 아이콘 (Icon)
        order_num: 정렬 순서 (Sort order)
        view_path: 뷰 경로 (View component path)
        keep_alive: 라우터 캐시 (Keep alive)
        is_show: 표시 여부 (Visible)
    """

    parent_id: int | None = None
    name: str = Field(..., min_length=1, max_length=100)
    router: str | None = None
    perms: str | None = None
    type: int = 0
    icon: str | None = None
    order_num: int = 0
    view_path: str | None = None
    keep_alive: bool = True
    is_show: bool = True


class MenuUpdate(CamelModel):
    """메뉴 수정 요청 스키마 (부분 업데이트)."""

    id: int
    parent_id: int | None = None
    name: str | None = Field(None, min_length=1, max_length=100)
    router: str | None = None
    perms: str | None = None
    type: int | None = None
    icon: str | None = None
    order_num: int | None = None
    view_path: str | None = None
    keep_alive: bool | None = None
    is_show: bool | None = None


class MenuResponse(EntityResponse):
    """메뉴 응답 스키마."""

    parent_id: int | None = None
    name: str
    router: str | None = None
    perms: str | None = None
    type: int
    icon: str | None = None
    order_num: int
    view_path: str | None = None
    keep_alive: bool
    is_show: bool


class MenuTreeNode(MenuResponse):
    """트리 노드 — 하위 메뉴 포함 (Menu with nested children)."""

    children: list["MenuTreeNode"] = Field(default_factory=list)
