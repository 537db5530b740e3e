"""Redis cache backend, for sharing generated documents between processes."""

import logging
from typing import Optional

import redis.asyncio as redis

from techbadges.cache.base import CacheBackend

logger = logging.getLogger(__name__)


class RedisCache(CacheBackend):
    """Cache backend on a Redis server.

    The connection is opened lazily on first use.
    """

    name = "redis"

    def __init__(self, redis_url: str = "redis://localhost:6379/0", client: Optional[redis.Redis] = None):
        """Initialize the backend.

        Args:
            redis_url: Redis connection URL
            client: Pre-built client (tests inject a mock here)
        """
        self.redis_url = redis_url
        self.redis: Optional[redis.Redis] = client

    async def connect(self) -> redis.Redis:
        """Establish the Redis connection if not already open."""
        if self.redis is None:
            self.redis = redis.from_url(self.redis_url, decode_responses=True)
            logger.info("SVG cache connected to Redis at %s", self.redis_url)
        return self.redis

    async def get(self, key: str) -> Optional[str]:
        client = await self.connect()
        return await client.get(key)

    async def put(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        client = await self.connect()
        await client.set(key, value, ex=ttl)

    async def delete(self, key: str) -> None:
        client = await self.connect()
        await client.delete(key)

    async def close(self) -> None:
        if self.redis is not None:
            await self.redis.aclose()
            self.redis = None
