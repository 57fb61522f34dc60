"""사용자 및 역할 관련 Pydantic 요청/응답 스키마 정의.

User and Role Pydantic request/response schema definitions.
Wire format is camelCase (roleId, menuIds, createTime); attributes are snake_case.
"""

from pydantic import Field

from app.schemas.common import CamelModel, EntityResponse


# === 역할 (Role) 스키마 ===

class RoleCreate(CamelModel):
    """역할 생성 요청 스키마.

    Role creation request schema.

    Attributes:
        name: 역할 이름 (Role name, unique)
        remark: 비고 (Optional remark)
        menu_ids: 부여할 메뉴/권한 ID 목록 (Menu ids granted to the role)
    """

    name: str = Field(..., min_length=1, max_length=100)
    remark: str | None = None
    menu_ids: list[int] = Field(default_factory=list)


class RoleUpdate(CamelModel):
    """역할 수정 요청 스키마 (부분 업데이트)."""

    id: int
    name: str | None = Field(None, min_length=1, max_length=100)
    remark: str | None = None
    menu_ids: list[int] | None = None


class RoleResponse(EntityResponse):
    """역할 응답 스키마."""

    name: str
    remark: str | None = None
    menu_ids: list[int] = Field(default_factory=list)


# === 사용자 (User) 스키마 ===

class UserCreate(CamelModel):
    """사용자 생성(회원가입) 요청 스키마.

    User creation / registration request schema.

    Attributes:
        username: 로그인 아이디 (Login username, unique)
        password: 비밀번호 (Plain text, will be bcrypt-hashed)
        realname: 실명 (Optional real name)
        nickname: 닉네임 (Optional nickname)
        role_id: 역할 ID 문자열 (Comma separated role ids, e.g. "1,2")
    """

    username: str = Field(..., min_length=1, max_length=100)  # 로그인 아이디 (Login ID)
    password: str = Field(..., min_length=1)  # 비밀번호 — 평문, 서버에서 해싱 (Plain text, hashed server-side)
    realname: str | None = None
    nickname: str | None = None
    role_id: str | None = None


class UserUpdate(CamelModel):
    """사용자 수정 요청 스키마 (부분 업데이트).

    User update request schema (partial update keyed by id).
    Only provided fields are updated; a provided password is re-hashed.
    """

    id: int
    username: str | None = Field(None, min_length=1, max_length=100)
    password: str | None = None
    realname: str | None = None
    nickname: str | None = None
    role_id: str | None = None


class UserResponse(EntityResponse):
    """사용자 응답 스키마 — password는 항상 bcrypt 해시 (password is always the stored hash)."""

    username: str
    password: str
    realname: str | None = None
    nickname: str | None = None
    role_id: str | None = None
