"""사용자 레포지토리 — 사용자 CRUD 및 아이디 조회 쿼리.

User Repository — CRUD and username lookup queries for users.
Extends BaseRepository with User-specific database operations.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """사용자 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the user table.
    """

    def __init__(self) -> None:
        """UserRepository를 초기화합니다.

        Initialize the UserRepository with the User model.
        """
        super().__init__(User)

    async def get_by_username(
        self,
        db: AsyncSession,
        username: str,
    ) -> User | None:
        """로그인 아이디로 사용자를 조회합니다.

        Retrieve a user by login username.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            username: 로그인 아이디 (Login username)

        Returns:
            User | None: 사용자 또는 None (User or None if not found)
        """
        result = await db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def remove_role_ids(
        self,
        db: AsyncSession,
        role_ids: list[int],
    ) -> int:
        """사용자의 role_id 문자열에서 삭제된 역할을 제거합니다.

        Remove deleted role ids from every user's comma separated role_id.
        A user left without roles gets a null role_id.

        Returns:
            int: 변경된 사용자 수 (Number of users changed)
        """
        if not role_ids:
            return 0
        removed: set[int] = set(role_ids)
        result = await db.execute(select(User).where(User.role_id.is_not(None)))

        changed: int = 0
        for user in result.scalars().all():
            current: list[int] = user.role_ids()
            kept: list[int] = [i for i in current if i not in removed]
            if len(kept) != len(current):
                user.role_id = ",".join(str(i) for i in kept) or None
                changed += 1

        await db.flush()
        return changed


# 싱글턴 인스턴스 — Singleton instance
user_repository: UserRepository = UserRepository()
