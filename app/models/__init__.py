"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for Alembic migrations and
relationship resolution.

Modules:
    base: 공통 감사 필드 (BaseEntity audit fields)
    user: 사용자 (User accounts)
    role: 역할 및 역할-메뉴 매핑 (Role and RoleMenu)
    menu: 메뉴/권한 노드 (Menu permission nodes)
"""

from app.models.user import User
from app.models.role import Role, RoleMenu
from app.models.menu import Menu

__all__ = [
    "User",
    "Role", "RoleMenu",
    "Menu",
]
