"""사용자 서비스 — 사용자 CRUD, 로그인, 캡차, 내 정보.

User Service — User CRUD, login, image captcha and current user profile.
Passwords are bcrypt-hashed before they reach the repository; role ids are
kept as a comma separated string and validated against existing roles.
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.menu import MENU_TYPE_BUTTON
from app.models.user import User
from app.repositories.menu_repository import menu_repository
from app.repositories.role_repository import role_repository
from app.repositories.user_repository import user_repository
from app.schemas.auth import CaptchaResponse, LoginRequest, TokenResponse, UserMeResponse
from app.schemas.menu import MenuResponse
from app.schemas.user import UserCreate, UserResponse, UserUpdate
from app.services.captcha_service import CaptchaService
from app.services.crud_service import CrudService
from app.utils.exceptions import CommonError
from app.utils.jwt import create_access_token
from app.utils.pagination import PageResult
from app.utils.password import hash_password, verify_password

logger = logging.getLogger(__name__)

# null로 설정 가능한 컬럼 — Columns an update may clear
_NULLABLE_FIELDS: frozenset[str] = frozenset({"realname", "nickname", "role_id"})


class UserService:
    """사용자 관련 비즈니스 로직을 처리하는 서비스.

    Service handling user business logic on top of the generic CRUD service.
    """

    def __init__(self) -> None:
        self.crud: CrudService[User, UserResponse] = CrudService(
            user_repository, UserResponse, hidden_filters=frozenset({"password"})
        )

    async def _normalize_role_id(self, db: AsyncSession, role_id: str | None) -> str | None:
        """역할 ID 문자열을 정규화하고 검증합니다.

        Trim and de-duplicate a comma separated role id string and check
        that every id references an existing role.

        Raises:
            CommonError: 존재하지 않는 역할 (An id does not reference a role)
        """
        if role_id is None:
            return None

        ids: list[int] = []
        for part in role_id.split(","):
            part = part.strip()
            if not part:
                continue
            if not (part.isascii() and part.isdigit()):
                raise CommonError("角色不存在")
            if int(part) not in ids:
                ids.append(int(part))

        if not ids:
            return None
        roles = await role_repository.get_by_ids(db, ids)
        if len(roles) != len(ids):
            raise CommonError("角色不存在")
        return ",".join(str(i) for i in ids)

    async def add(self, db: AsyncSession, data: UserCreate, assign_roles: bool = False) -> UserResponse:
        """사용자를 생성합니다 (회원가입).

        Register a user. The username must be unused; the password is hashed.
        `role_id` is only stored when `assign_roles` is set (authenticated caller).

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 사용자 생성 데이터 (User creation data)
            assign_roles: 역할 지정 허용 여부 (Whether role ids may be assigned)

        Returns:
            UserResponse: 생성된 사용자 (Created user, password is the hash)

        Raises:
            CommonError: 아이디 중복 또는 역할 없음 (Duplicate username or unknown role)
        """
        if await user_repository.get_by_username(db, data.username) is not None:
            raise CommonError("用户已存在")

        values: dict[str, Any] = data.model_dump()
        values["password"] = hash_password(data.password)
        values["role_id"] = await self._normalize_role_id(db, data.role_id) if assign_roles else None
        return await self.crud.add(db, values)

    async def update(self, db: AsyncSession, data: UserUpdate) -> UserResponse:
        """사용자 정보를 부분 수정합니다.

        Partially update a user. A supplied non-empty password is re-hashed
        unless it equals the stored hash (a client echoing back `info`).

        Raises:
            CommonError: 아이디 중복, 역할 없음, 사용자 없음
                         (Duplicate username, unknown role or unknown user)
        """
        values: dict[str, Any] = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key in _NULLABLE_FIELDS
        }

        username: str | None = values.get("username")
        if username is not None and await user_repository.exists(db, {"username": username}, exclude_id=data.id):
            raise CommonError("用户已存在")

        password: str | None = values.pop("password", None)
        if password:
            user: User | None = await user_repository.get_by_id(db, data.id) if data.id is not None else None
            if user is None or password != user.password:
                values["password"] = hash_password(password)

        if "role_id" in values:
            values["role_id"] = await self._normalize_role_id(db, values["role_id"])

        return await self.crud.update(db, values)

    async def delete(self, db: AsyncSession, ids: list[int]) -> int:
        """사용자 삭제 — Delete users."""
        return await self.crud.delete(db, ids)

    async def info(self, db: AsyncSession, params: dict[str, Any] | None) -> UserResponse | None:
        return await self.crud.info(db, params)

    async def list(self, db: AsyncSession, params: dict[str, Any] | None) -> list[UserResponse]:
        return await self.crud.list(db, params)

    async def page(self, db: AsyncSession, params: dict[str, Any] | None) -> PageResult:
        return await self.crud.page(db, params)

    async def login(
        self,
        db: AsyncSession,
        captcha: CaptchaService,
        data: LoginRequest,
    ) -> TokenResponse:
        """로그인하여 액세스 토큰을 발급합니다.

        Verify the captcha (when enabled) and the credentials, then issue
        a JWT access token.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            captcha: 캡차 서비스 (Captcha service)
            data: 로그인 요청 (Login request)

        Returns:
            TokenResponse: 토큰과 만료까지 남은 초 (Token and seconds until expiry)

        Raises:
            CommonError: 캡차 오류 또는 자격 증명 불일치
                         (Wrong captcha or invalid credentials)
        """
        if settings.CAPTCHA_ENABLED and not await captcha.verify(data.captcha_id, data.verify_code):
            raise CommonError("验证码错误")

        user: User | None = await user_repository.get_by_username(db, data.username)
        if user is None or not verify_password(data.password, user.password):
            logger.info("Login failed for username=%s", data.username)
            raise CommonError("账号或密码错误")

        token: str = create_access_token({"sub": str(user.id), "username": user.username})
        return TokenResponse(token=token, expire=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES * 60)

    async def get_image_captcha(
        self,
        captcha: CaptchaService,
        captcha_id: str | None = None,
    ) -> CaptchaResponse:
        """이미지 캡차 발급 — Issue an image captcha."""
        issued_id, image = await captcha.generate(captcha_id)
        return CaptchaResponse(captcha_id=issued_id, image=image)

    async def me(self, db: AsyncSession, user: User) -> UserMeResponse:
        """현재 사용자 정보를 조회합니다.

        Resolve the current user's role names, permission strings and the
        navigable (directory and menu type) menus granted to those roles.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user: 인증된 사용자 (Authenticated user)

        Returns:
            UserMeResponse: 사용자 프로필 (User profile)
        """
        role_ids: list[int] = user.role_ids()
        roles = await role_repository.get_by_ids(db, role_ids)
        menus = await menu_repository.get_by_roles(db, role_ids)

        perms: list[str] = []
        for menu in menus:
            for perm in (menu.perms or "").split(","):
                perm = perm.strip()
                if perm and perm not in perms:
                    perms.append(perm)

        return UserMeResponse(
            id=user.id,
            username=user.username,
            realname=user.realname,
            nickname=user.nickname,
            role_id=user.role_id,
            roles=[role.name for role in roles],
            perms=perms,
            menus=[MenuResponse.model_validate(m) for m in menus if m.type != MENU_TYPE_BUTTON],
        )


# 싱글턴 인스턴스 — Singleton instance
user_service: UserService = UserService()
