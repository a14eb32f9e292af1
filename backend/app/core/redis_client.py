"""Async Redis client used for health reporting.

Redis is optional: it only backs the rate limiter's counters. When it is not
reachable the client is ``None`` and health reports it as ``unavailable``.
"""

import logging

import redis.asyncio as aioredis

from app.config import settings

logger = logging.getLogger(__name__)

_redis: aioredis.Redis | None = None


async def get_redis() -> aioredis.Redis | None:
    """Return the shared Redis client, or None if Redis is unavailable."""
    global _redis
    if _redis is None:
        client = aioredis.from_url(settings.REDIS_URL, socket_connect_timeout=1)
        try:
            await client.ping()
        except Exception:
            logger.warning("Redis unavailable (%s)", settings.REDIS_URL)
            await client.aclose()
            return None
        _redis = client
        logger.info("Redis connected at %s", settings.REDIS_URL)
    return _redis


async def close_redis() -> None:
    """Close the Redis connection on application shutdown."""
    global _redis
    if _redis is not None:
        await _redis.aclose()
        _redis = None
        logger.info("Redis connection closed")
