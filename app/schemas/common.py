"""공통 Pydantic 스키마 — 응답 봉투, 페이지 요청, 삭제 요청.

Common Pydantic schemas — Response envelope, page query and delete request.
Every endpoint responds with the same envelope shape:
    {"code": 200 | 900, "data": ..., "message": "..."}
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.utils.exceptions import ERROR_CODE, SUCCESS_CODE


class CamelModel(BaseModel):
    """camelCase 와이어 포맷 베이스 모델.

    Base model for the camelCase wire format.
    Accepts both camelCase and snake_case input, reads ORM attributes,
    and ignores unknown keys so filter bodies can carry extra fields.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="ignore",
    )


class EntityResponse(CamelModel):
    """엔티티 공통 응답 필드 — Common entity response fields."""

    id: int
    create_time: datetime | None = None
    update_time: datetime | None = None


def _to_wire(data: Any) -> Any:
    """모델을 camelCase JSON 호환 값으로 변환 — Dump models to camelCase JSON values."""
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True)
    if isinstance(data, (list, tuple)):
        return [_to_wire(item) for item in data]
    if isinstance(data, dict):
        return {key: _to_wire(value) for key, value in data.items()}
    return data


class ApiResponse(BaseModel):
    """API 통일 응답 봉투 — Uniform API response envelope."""

    code: int = SUCCESS_CODE
    data: Any = None
    message: str = "success"

    @classmethod
    def success(cls, data: Any = None, message: str = "success") -> "ApiResponse":
        """성공 응답 — Success envelope."""
        return cls(code=SUCCESS_CODE, data=_to_wire(data), message=message)

    @classmethod
    def error(cls, message: str = "error", code: int = ERROR_CODE, data: Any = None) -> "ApiResponse":
        """실패 응답 — Error envelope."""
        return cls(code=code, data=data, message=message)


class PageQuery(CamelModel):
    """페이지 요청 — page/size 기본값 1/20."""

    page: int = Field(1, ge=1)
    size: int = Field(20, ge=1, le=1000)


class DeleteRequest(CamelModel):
    """삭제 요청 — 단일 ID 또는 ID 목록 (Single id or a list of ids)."""

    ids: list[int]

    @field_validator("ids", mode="before")
    @classmethod
    def _coerce_ids(cls, value: Any) -> Any:
        # 1, "1,2", [1, 2] 모두 허용 — Accept a scalar, a delimited string or a list
        if isinstance(value, int):
            return [value]
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value
