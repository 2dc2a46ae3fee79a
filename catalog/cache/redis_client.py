"""
Redis client - product cache invalidation.
Design: Single client instance, dependency injection for testability.
"""

from typing import Annotated

from fastapi import Depends
from redis.asyncio import Redis

from catalog.config import get_settings

settings = get_settings()

# Shared async Redis client (connection pool managed by redis-py)
_redis: Redis | None = None


async def get_redis() -> Redis:
    """Get Redis connection. Used as FastAPI dependency."""
    global _redis
    if _redis is None:
        _redis = Redis.from_url(
            settings.redis_url,
            encoding="utf-8",
            decode_responses=True,
        )
    return _redis


async def close_redis() -> None:
    """Release the shared pool on shutdown."""
    global _redis
    if _redis is not None:
        await _redis.aclose()
        _redis = None


# Type alias for FastAPI dependency injection
RedisClient = Annotated[Redis, Depends(get_redis)]
