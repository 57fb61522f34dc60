"""Redis 클라이언트 설정 모듈.

Redis client configuration module.
The client is created in the application lifespan and handed to request
handlers through the `get_cache` dependency.
"""

import redis.asyncio as redis
from fastapi import Request

from app.config import settings


def create_redis() -> redis.Redis:
    """설정 URL로 비동기 Redis 클라이언트 생성 — Build the async Redis client."""
    return redis.from_url(settings.REDIS_URL, decode_responses=True)


async def get_cache(request: Request) -> redis.Redis:
    """앱 상태에 보관된 Redis 클라이언트를 반환합니다.

    FastAPI dependency returning the Redis client stored on app state.

    Returns:
        redis.Redis: 비동기 Redis 클라이언트 (Async Redis client)
    """
    return request.app.state.redis
