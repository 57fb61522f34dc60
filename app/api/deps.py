"""FastAPI 의존성 주입 모듈 — 인증 및 캡차 서비스.

FastAPI dependency injection module — Authentication and captcha service.

Authentication Flow:
    1. 클라이언트가 Authorization: Bearer <token> 헤더를 전송
       (Client sends Authorization: Bearer <token> header)
    2. HTTPBearer가 토큰을 추출 (HTTPBearer extracts the token)
    3. decode_token()이 JWT를 검증하고 페이로드를 반환
       (decode_token verifies JWT and returns payload)
    4. 페이로드의 "sub" 필드로 DB에서 사용자를 조회
       (User is fetched from DB using payload "sub" field)
"""

from typing import Annotated

import jwt
import redis.asyncio as redis
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.cache import get_cache
from app.database import get_db
from app.models.user import User
from app.repositories.user_repository import user_repository
from app.services.cache_service import CacheService
from app.services.captcha_service import CaptchaService
from app.utils.jwt import decode_token

# HTTP Bearer 토큰 추출기 — 헤더 누락 시 직접 401 처리
# (Extracts the bearer token; a missing header is answered with 401 below)
security: HTTPBearer = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """JWT 토큰에서 현재 인증된 사용자를 추출합니다.

    Decode JWT from the Authorization header and return the authenticated user.

    Args:
        credentials: HTTP Bearer 토큰 자격 증명 (Bearer token credentials from header)
        db: 비동기 DB 세션 (Async database session)

    Returns:
        User: 인증된 사용자 ORM 인스턴스 (Authenticated user ORM instance)

    Raises:
        HTTPException(401): 토큰 누락, 무효, 만료 또는 사용자 없음
                            (Missing, invalid or expired token, or unknown user)
    """
    if credentials is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")

    try:
        payload: dict = decode_token(credentials.credentials)
        # 토큰 타입 검증 — Only access tokens are accepted
        if payload.get("type") != "access":
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token type")
        user_id: int = int(payload["sub"])
    except HTTPException:
        raise
    except (jwt.ExpiredSignatureError, jwt.InvalidTokenError, KeyError, ValueError, TypeError):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")

    user: User | None = await user_repository.get_by_id(db, user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")

    return user


async def get_captcha_service(
    client: Annotated[redis.Redis, Depends(get_cache)],
) -> CaptchaService:
    """요청별 캡차 서비스 — Captcha service bound to the shared Redis client."""
    return CaptchaService(CacheService(client))


async def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User | None:
    """공개 엔드포인트용 선택적 인증.

    Optional authentication for public endpoints: None without a token,
    otherwise the same checks as `get_current_user` (a bad token is 401).
    """
    if credentials is None:
        return None
    return await get_current_user(credentials, db)
