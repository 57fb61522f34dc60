"""캐시 서비스 — Redis 키 접두사, JSON 직렬화, TTL.

Cache service wrapping an async Redis client.
Every key gets the REDIS_KEY_PREFIX prefix; values are stored as JSON.
"""

import json
import logging
from typing import Any

import redis.asyncio as redis

from app.config import settings

logger = logging.getLogger(__name__)


class CacheService:
    """Redis 캐시 서비스.

    Thin wrapper around redis.asyncio handling key prefixing and
    serialisation. Connection errors propagate to the caller.

    Attributes:
        redis: 비동기 Redis 클라이언트 (Async Redis client, decode_responses=True)
        key_prefix: 키 접두사 (Prefix added to every key)
    """

    def __init__(self, redis_client: redis.Redis, key_prefix: str | None = None) -> None:
        self.redis: redis.Redis = redis_client
        self.key_prefix: str = settings.REDIS_KEY_PREFIX if key_prefix is None else key_prefix

    def make_key(self, key: str) -> str:
        """접두사를 붙인 키 — Key with the configured prefix."""
        return f"{self.key_prefix}{key}"

    async def set(self, key: str, value: Any, expire_seconds: int | None = None) -> None:
        """값 저장 (선택적 만료) — Store a value with an optional TTL."""
        await self.redis.set(self.make_key(key), json.dumps(value), ex=expire_seconds)

    async def get(self, key: str) -> Any:
        """값 조회, 없으면 None — Read a value, None when missing or expired."""
        raw: str | None = await self.redis.get(self.make_key(key))
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Non-JSON cache value under %s", key)
            return raw

    async def delete(self, *keys: str) -> int:
        """키 삭제 — Delete one or more keys."""
        if not keys:
            return 0
        return await self.redis.delete(*(self.make_key(key) for key in keys))

    async def ttl(self, key: str) -> int:
        """남은 만료 시간(초) — Remaining TTL in seconds."""
        return await self.redis.ttl(self.make_key(key))
