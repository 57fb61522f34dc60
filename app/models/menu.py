"""메뉴(권한 노드) SQLAlchemy ORM 모델 정의.

Menu SQLAlchemy ORM model definition.
A menu row is both a navigation entry and a grantable permission node.

Tables:
    - menu: 디렉터리/메뉴/버튼 트리 (Directory/menu/button tree)
"""

from sqlalchemy import Boolean, Integer, SmallInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.models.base import BaseEntity, IdType

# 메뉴 유형 — Menu type flags
MENU_TYPE_DIRECTORY: int = 0
MENU_TYPE_MENU: int = 1
MENU_TYPE_BUTTON: int = 2
MENU_TYPES: frozenset[int] = frozenset({MENU_TYPE_DIRECTORY, MENU_TYPE_MENU, MENU_TYPE_BUTTON})


class Menu(BaseEntity, Base):
    """메뉴 모델 — 트리 구조의 내비게이션/권한 노드.

    Menu model — Navigation and permission node forming a tree via parent_id.

    Attributes:
        parent_id: 상위 메뉴 ID (Parent menu id, None for root nodes)
        name: 메뉴 이름 (Menu name)
        router: 라우터 경로 (Frontend router path)
        perms: 권한 식별자 (Permission string, e.g. "user:add")
        type: 유형 0=디렉터리 1=메뉴 2=버튼 (0=directory, 1=menu, 2=button)
        icon: 아이콘 (Icon name)
        order_num: 정렬 순서 (Sort order)
        view_path: 뷰 경로 (Frontend view component path)
        keep_alive: 라우터 캐시 여부 (Keep the route alive in the frontend)
        is_show: 표시 여부 (Visible in navigation)
    """

    __tablename__ = "menu"

    # 상위 메뉴 ID — 존재 여부는 서비스 계층에서 검증 (Existence validated in the service layer)
    parent_id: Mapped[int | None] = mapped_column(IdType, nullable=True, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    router: Mapped[str | None] = mapped_column(String(255), nullable=True)
    perms: Mapped[str | None] = mapped_column(String(255), nullable=True)
    type: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=MENU_TYPE_DIRECTORY)
    icon: Mapped[str | None] = mapped_column(String(100), nullable=True)
    order_num: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    view_path: Mapped[str | None] = mapped_column(String(255), nullable=True)
    keep_alive: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_show: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
