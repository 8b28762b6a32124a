"""Redis cache service implementation."""

import asyncio
import logging

import redis

from edu_echo.exceptions import CacheServiceError
from edu_echo.infrastructure.interfaces import CacheService

logger = logging.getLogger(__name__)


class RedisCacheService(CacheService):
    """Cache service implementation using Redis."""

    def __init__(self, client: redis.Redis, ttl_seconds: int):
        self._client = client
        self._ttl_seconds = ttl_seconds

    async def get(self, key: str) -> str | None:
        try:
            value = await asyncio.to_thread(self._client.get, key)
        except redis.RedisError as e:
            logger.exception("Redis get failed", extra={"key": key})
            raise CacheServiceError(key, "get", cause=e) from e
        if value:
            logger.info("Cache hit", extra={"key": key})
        return value

    async def set(self, key: str, value: str) -> None:
        try:
            await asyncio.to_thread(self._client.set, key, value, ex=self._ttl_seconds)
        except redis.RedisError as e:
            logger.exception("Redis set failed", extra={"key": key})
            raise CacheServiceError(key, "set", cause=e) from e
        logger.info("Cache set", extra={"key": key, "ttl": self._ttl_seconds})
