"""사용자 SQLAlchemy ORM 모델 정의.

User SQLAlchemy ORM model definition.

Tables:
    - user: 관리자 계정 (Admin accounts; role ids stored as a delimited string)
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.models.base import BaseEntity


class User(BaseEntity, Base):
    """사용자 모델 — 시스템 로그인 계정.

    User model — System login account.
    Username is globally unique. Password is always a bcrypt hash.

    Attributes:
        username: 로그인 아이디 (Login username, unique)
        password: bcrypt 해시된 비밀번호 (bcrypt-hashed password)
        realname: 실명 (Real name, optional)
        nickname: 닉네임 (Display nickname, optional)
        role_id: 역할 ID 목록 문자열 (Comma separated role ids, e.g. "1,3")
    """

    __tablename__ = "user"

    # 로그인 아이디 — Login username (전역 고유, globally unique)
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    # 비밀번호 해시 — bcrypt hashed password (평문 저장 금지, never store plaintext)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    realname: Mapped[str | None] = mapped_column(String(100), nullable=True)
    nickname: Mapped[str | None] = mapped_column(String(100), nullable=True)
    # 역할 ID 목록 — "1,3" 형태의 구분자 문자열 (Delimited role id string)
    role_id: Mapped[str | None] = mapped_column(String(255), nullable=True)

    def role_ids(self) -> list[int]:
        """role_id 문자열을 정수 목록으로 변환 — Parse the delimited role ids."""
        if not self.role_id:
            return []
        return [int(part) for part in self.role_id.split(",") if part.strip()]
