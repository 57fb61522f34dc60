"""공통 감사 필드 믹스인 — 모든 엔티티가 상속.

Common audit-field mixin inherited by every entity.
Provides an auto-generated bigint primary key and UTC create/update timestamps.
"""

from datetime import datetime, timezone

from sqlalchemy import BigInteger, DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column

# SQLite는 INTEGER PRIMARY KEY만 자동 증가 — SQLite only autoincrements INTEGER PRIMARY KEY
IdType = BigInteger().with_variant(Integer(), "sqlite")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseEntity:
    """엔티티 공통 컬럼 (id, create_time, update_time).

    Shared columns for all entities.

    Attributes:
        id: 자동 증가 기본 키 (Auto-increment primary key)
        create_time: 생성 일시 UTC (Creation timestamp)
        update_time: 수정 일시 UTC (Last update timestamp, bumped on update)
    """

    # 고유 식별자 — Auto-generated identifier
    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    # 생성 일시 — Record creation timestamp (UTC)
    create_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    # 수정 일시 — Last modification timestamp (UTC, auto-updated)
    update_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)
