"""Role 및 RoleMenu SQLAlchemy ORM 모델 정의.

역할과 역할-메뉴(권한 노드) 매핑 테이블.

Tables:
    - role: 역할 (Roles)
    - role_menu: 역할별 메뉴/권한 매핑 (role ↔ menu)
"""

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.base import BaseEntity, IdType


class Role(BaseEntity, Base):
    """역할 모델.

    Attributes:
        name: 역할 이름 (Role name, unique)
        remark: 비고 (Free-form remark)
    """

    __tablename__ = "role"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    remark: Mapped[str | None] = mapped_column(String(255), nullable=True)

    role_menus = relationship("RoleMenu", back_populates="role", cascade="all, delete-orphan")


class RoleMenu(BaseEntity, Base):
    """역할-메뉴 매핑 모델.

    Attributes:
        role_id: 역할 FK
        menu_id: 메뉴 FK
    """

    __tablename__ = "role_menu"

    role_id: Mapped[int] = mapped_column(IdType, ForeignKey("role.id", ondelete="CASCADE"), nullable=False)
    menu_id: Mapped[int] = mapped_column(IdType, ForeignKey("menu.id", ondelete="CASCADE"), nullable=False)

    __table_args__ = (
        UniqueConstraint("role_id", "menu_id", name="uq_role_menu"),
    )

    role = relationship("Role", back_populates="role_menus")
