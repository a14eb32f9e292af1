"""Shared rate limiter instance.

Credential and invite-token endpoints are limited per client address so
passwords and invite tokens cannot be guessed by brute force. Counters live
in Redis when it is reachable and in process memory otherwise (development
and tests).
"""

import logging

import redis as sync_redis
from slowapi import Limiter
from slowapi.util import get_remote_address

logger = logging.getLogger(__name__)

AUTH_LIMIT = "10/minute"
INVITE_LIMIT = "20/minute"


def _create_limiter() -> Limiter:
    from app.config import settings

    try:
        client = sync_redis.from_url(settings.REDIS_URL, socket_connect_timeout=1)
        client.ping()
        client.close()
        logger.info("Rate limiter: Redis storage (%s)", settings.REDIS_URL)
        return Limiter(key_func=get_remote_address, storage_uri=settings.REDIS_URL)
    except Exception:
        logger.warning("Rate limiter: Redis unavailable, using in-memory storage")
        return Limiter(key_func=get_remote_address)


limiter = _create_limiter()
