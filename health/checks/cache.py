# ============================================================================
# CACHE HEALTH CHECKS
# ============================================================================
# STATUS: Checks - Redis connectivity
# PURPOSE: PING a Redis server on a short-lived client
# CREATED: 18 OCT 2026
# ============================================================================
"""
Cache Health Checks

- redis_check: redis.asyncio client, PING, close
"""

import logging

import redis.asyncio as redis
from redis.exceptions import RedisError

from health.core import CheckFailedError

logger = logging.getLogger(__name__)


def redis_check(url: str, connect_timeout: float = 5.0):
    """
    Build a Redis check.

    Args:
        url: redis:// or rediss:// URL
        connect_timeout: Socket connect and read timeout in seconds

    Returns:
        Async check function for CheckConfig.check
    """
    if not url:
        raise ValueError("redis_check requires a URL")

    async def check() -> None:
        client = redis.from_url(
            url,
            socket_connect_timeout=connect_timeout,
            socket_timeout=connect_timeout,
        )
        try:
            pong = await client.ping()
        except RedisError as e:
            raise CheckFailedError(f"Redis health check failed on ping: {e}") from e
        finally:
            await client.aclose()

        if not pong:
            raise CheckFailedError("Redis health check failed on ping: no PONG received")

    return check


__all__ = [
    "redis_check",
]
